"""Keyboard front-ends for a terminal.

Cursor mode draws the board with rich and reads single keys in raw mode; text
mode prompts for ``row,col`` lines instead. Both drive the same ``Game``.
"""
from __future__ import annotations
import os
import select
import sys
import termios
import tty
from typing import Optional

from rich.align import Align
from rich.console import Console
from rich.live import Live

from .game import Game, GameStatus
from .render import render_panel

KEY_UP = '\x1b[A'
KEY_DOWN = '\x1b[B'
KEY_RIGHT = '\x1b[C'
KEY_LEFT = '\x1b[D'
KEY_ESC = '\x1b'
KEY_CTRL_C = '\x03'

MOVE_KEYS = {
    KEY_UP: (-1, 0), 'k': (-1, 0), 'w': (-1, 0),
    KEY_DOWN: (1, 0), 'j': (1, 0), 's': (1, 0),
    KEY_LEFT: (0, -1), 'h': (0, -1), 'a': (0, -1),
    KEY_RIGHT: (0, 1), 'l': (0, 1), 'd': (0, 1),
}
REVEAL_KEYS = {' ', '\r', '\n'}
FLAG_KEYS = {'f', 'F'}
HELP_KEYS = {'?'}
QUIT_KEYS = {'q', 'Q', KEY_ESC, KEY_CTRL_C}

HELP_TEXT = ('Move: arrows / hjkl / wasd. Reveal: space or enter. '
             'Flag: f. Quit: q or esc.')

QUIT_WORDS = {'q', 'quit', 'exit'}


def read_key() -> str:
    """Read one keypress from stdin in raw mode; arrow keys come back as escape sequences."""
    fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        key = os.read(fd, 1).decode(errors='ignore')
        if key == KEY_ESC:
            # a lone ESC has nothing queued behind it
            while select.select([fd], [], [], 0.05)[0]:
                key += os.read(fd, 1).decode(errors='ignore')
                if len(key) == 3:
                    break
        return key
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def dispatch(game: Game, key: str) -> bool:
    """Apply one key to the game. Returns False when the session should end."""
    if key in QUIT_KEYS or game.is_over:
        return False
    if key in MOVE_KEYS:
        game.move_cursor(*MOVE_KEYS[key])
    elif key in REVEAL_KEYS:
        game.reveal_at_cursor()
    elif key in FLAG_KEYS:
        game.toggle_flag()
    elif key in HELP_KEYS:
        game.message = HELP_TEXT
    return True


def run_cursor_session(game: Game, console: Optional[Console] = None) -> GameStatus:
    console = console or Console()

    def frame():
        panel = render_panel(game)
        if game.is_over:
            panel.subtitle = 'Press any key to quit.'
        return Align.center(panel)

    with Live(frame(), console=console, auto_refresh=False, screen=True) as live:
        while dispatch(game, read_key()):
            live.update(frame(), refresh=True)
    console.print(render_panel(game, show_cursor=False))
    return game.status


def run_text_session(game: Game, console: Optional[Console] = None) -> GameStatus:
    console = console or Console()
    while not game.is_over:
        console.print(render_panel(game, show_cursor=False))
        try:
            raw = console.input('row,col> ')
        except (EOFError, KeyboardInterrupt):
            console.print()
            return game.status
        if raw.strip().lower() in QUIT_WORDS:
            return game.status
        game.handle_input(raw)
    console.print(render_panel(game, show_cursor=False))
    return game.status
