from __future__ import annotations
from typing import Optional

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .engine import CellLabel, LabelKind
from .game import Game, GameStatus

HIDDEN = '#'
FLAG = 'F'

GLYPHS = {
    LabelKind.MINE: '*',
    LabelKind.EMPTY: '.',
}

COUNT_STYLES = {
    1: 'blue',
    2: 'green',
    3: 'red',
    4: 'magenta',
    5: 'dark_red',
    6: 'cyan',
    7: 'grey37',
    8: 'grey62',
}


def glyph(label: CellLabel) -> str:
    if label.kind is LabelKind.COUNT:
        return str(label.count)
    return GLYPHS[label.kind]


def cell_glyph(game: Game, row: int, col: int, reveal_all: bool = False) -> str:
    field = game.field
    if field.is_revealed(row, col) or reveal_all:
        return glyph(field.label(row, col))
    if field.is_flagged(row, col):
        return FLAG
    return HIDDEN


def _cell_style(game: Game, row: int, col: int, reveal_all: bool) -> str:
    field = game.field
    if field.is_revealed(row, col) or reveal_all:
        label = field.label(row, col)
        if label.is_mine:
            return 'bold white on red' if field.is_revealed(row, col) else 'bold red'
        if label.kind is LabelKind.COUNT:
            return COUNT_STYLES.get(label.count, 'default')
        return 'dim'
    if field.is_flagged(row, col):
        return 'bold yellow'
    return 'default'


def render_ascii(game: Game, reveal_all: Optional[bool] = None) -> str:
    """Plain-text board with column indices on top and row indices on the left."""
    if reveal_all is None:
        reveal_all = game.is_over
    n = game.size
    w = len(str(n - 1))
    lines = [' ' * (w + 2) + ' '.join(str(c).rjust(w) for c in range(n)),
             ' ' * (w + 1) + '-' * (n * (w + 1))]
    for r in range(n):
        row = ' '.join(cell_glyph(game, r, c, reveal_all).rjust(w) for c in range(n))
        lines.append(f'{str(r).rjust(w)}| {row}')
    return '\n'.join(lines)


def render_board(game: Game, show_cursor: bool = True) -> Table:
    reveal_all = game.is_over
    table = Table(box=None, show_header=True, header_style='dim', padding=(0, 1), pad_edge=False)
    table.add_column('', justify='right', style='dim')
    for c in range(game.size):
        table.add_column(str(c), justify='center')
    for r in range(game.size):
        cells = [Text(str(r))]
        for c in range(game.size):
            style = _cell_style(game, r, c, reveal_all)
            if show_cursor and not game.is_over and (r, c) == game.cursor:
                style = f'{style} reverse'
            text = cell_glyph(game, r, c, reveal_all)
            if text == GLYPHS[LabelKind.EMPTY]:
                text = ' '
            cells.append(Text(text, style=style))
        table.add_row(*cells)
    return table


def render_panel(game: Game, show_cursor: bool = True) -> Panel:
    n = game.size
    header = Text(f'Minesweeper {n}x{n} ({game.field.num_mines} mines)', style='bold')
    stats = Text(f'Moves: {game.moves} | Mines left: {game.field.mines_remaining}', style='dim')
    if game.status is GameStatus.LOST:
        message = Text(game.message, style='bold red')
    elif game.status is GameStatus.WON:
        message = Text(game.message, style='bold green')
    else:
        message = Text(game.message)
    body = Group(header, stats, Text(''), render_board(game, show_cursor=show_cursor), Text(''), message)
    return Panel(body, expand=False)
