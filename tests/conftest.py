"""
Pytest configuration and shared fixtures.
"""
import random

import pytest

from termsweep.engine import Board, Minefield
from termsweep.game import Game, TEXT_PROMPT


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def sample_board() -> Board:
    """3x3 board with mines in opposite corners."""
    return Board.from_rows([
        "*..",
        "...",
        "..*",
    ])


@pytest.fixture
def open_board() -> Board:
    """5x5 board whose only mine sits in the bottom-right corner."""
    return Board.from_rows([
        ".....",
        ".....",
        ".....",
        ".....",
        "....*",
    ])


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def sample_game(sample_board) -> Game:
    return Game(Minefield(sample_board))


@pytest.fixture
def text_game(sample_board) -> Game:
    return Game(Minefield(sample_board), prompt=TEXT_PROMPT)
