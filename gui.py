from __future__ import annotations
import argparse
import sys
from typing import Optional

import pygame as pg

from termsweep.engine import LabelKind
from termsweep.errors import InvalidConfiguration
from termsweep.game import Game, GameStatus
from termsweep.presets import PRESETS
from termsweep.tui import HELP_TEXT


WHITE = (250, 250, 250)
BLACK = (20, 20, 20)
GRAY = (230, 230, 230)
ACCENT = (66, 133, 244)
RED = (234, 67, 53)
GREEN = (52, 168, 83)
AMBER = (251, 188, 5)

CELL_COLORS = {
    1: (25, 118, 210),
    2: (56, 142, 60),
    3: (211, 47, 47),
    4: (123, 31, 162),
    5: (93, 64, 55),
    6: (0, 151, 167),
    7: (69, 90, 100),
    8: (158, 158, 158),
}

KEY_MOVES = {
    pg.K_UP: (-1, 0), pg.K_k: (-1, 0), pg.K_w: (-1, 0),
    pg.K_DOWN: (1, 0), pg.K_j: (1, 0), pg.K_s: (1, 0),
    pg.K_LEFT: (0, -1), pg.K_h: (0, -1), pg.K_a: (0, -1),
    pg.K_RIGHT: (0, 1), pg.K_l: (0, 1), pg.K_d: (0, 1),
}


class MinesweeperGUI:
    def __init__(self, game: Game, cell: int = 28, padding: int = 16):
        pg.init()
        self.game = game
        self.cell = cell
        self.padding = padding
        self.header = 56
        self.footer = 48
        self.font = pg.font.SysFont('Inter,Arial', 18)
        self.font_sm = pg.font.SysFont('Inter,Arial', 16, bold=True)
        side = game.size * cell + 2 * padding
        self.screen = pg.display.set_mode((max(side, 420), side + self.header + self.footer))
        pg.display.set_caption(f'Minesweeper {game.size}x{game.size}')
        self.clock = pg.time.Clock()

    # ---------- Rendering ----------
    def board_origin(self) -> tuple[int, int]:
        width = self.screen.get_width()
        return (width - self.game.size * self.cell) // 2, self.header

    def cell_at(self, pos: tuple[int, int]) -> Optional[tuple[int, int]]:
        ox, oy = self.board_origin()
        col = (pos[0] - ox) // self.cell
        row = (pos[1] - oy) // self.cell
        if self.game.field.in_bounds(row, col):
            return row, col
        return None

    def draw_board(self):
        ox, oy = self.board_origin()
        field = self.game.field
        show_all = self.game.is_over
        for row in range(self.game.size):
            for col in range(self.game.size):
                rect = pg.Rect(ox + col * self.cell, oy + row * self.cell, self.cell, self.cell)
                label = field.label(row, col)
                if field.is_revealed(row, col) or show_all:
                    if label.is_mine:
                        pg.draw.rect(self.screen, RED if field.is_revealed(row, col) else GRAY, rect, border_radius=4)
                        xt = self.font_sm.render('X', True, WHITE if field.is_revealed(row, col) else RED)
                        self.screen.blit(xt, xt.get_rect(center=rect.center))
                    else:
                        pg.draw.rect(self.screen, WHITE, rect, border_radius=4)
                        if label.kind is LabelKind.COUNT:
                            nt = self.font_sm.render(str(label.count), True, CELL_COLORS.get(label.count, BLACK))
                            self.screen.blit(nt, nt.get_rect(center=rect.center))
                elif field.is_flagged(row, col):
                    pg.draw.rect(self.screen, AMBER, rect, border_radius=4)
                    ft = self.font_sm.render('F', True, BLACK)
                    self.screen.blit(ft, ft.get_rect(center=rect.center))
                else:
                    pg.draw.rect(self.screen, (210, 210, 210), rect, border_radius=4)
                pg.draw.rect(self.screen, (180, 180, 180), rect, 1, border_radius=4)
        if not self.game.is_over:
            row, col = self.game.cursor
            rect = pg.Rect(ox + col * self.cell, oy + row * self.cell, self.cell, self.cell)
            pg.draw.rect(self.screen, ACCENT, rect, 3, border_radius=4)

    def render(self):
        self.screen.fill((245, 247, 250))
        field = self.game.field
        title = self.font.render(
            f'Mines: {field.num_mines}  Left: {field.mines_remaining}  Moves: {self.game.moves}', True, BLACK)
        self.screen.blit(title, (self.padding, 18))
        self.draw_board()
        color = {GameStatus.LOST: RED, GameStatus.WON: GREEN}.get(self.game.status, BLACK)
        msg = self.font.render(self.game.message, True, color)
        self.screen.blit(msg, (self.padding, self.screen.get_height() - self.footer + 14))

    # ---------- Input ----------
    def handle_key(self, event) -> bool:
        if event.key in (pg.K_q, pg.K_ESCAPE) or self.game.is_over:
            return False
        if event.key in KEY_MOVES:
            self.game.move_cursor(*KEY_MOVES[event.key])
        elif event.key in (pg.K_SPACE, pg.K_RETURN):
            self.game.reveal_at_cursor()
        elif event.key == pg.K_f:
            self.game.toggle_flag()
        elif event.unicode == '?':
            self.game.message = HELP_TEXT
        return True

    def handle_click(self, event):
        target = self.cell_at(event.pos)
        if target is None or self.game.is_over:
            return
        row, col = target
        self.game.move_cursor(row - self.game.cursor[0], col - self.game.cursor[1])
        if event.button == 1:
            self.game.reveal_at_cursor()
        elif event.button == 3:
            self.game.toggle_flag()

    def run(self) -> GameStatus:
        running = True
        while running:
            for event in pg.event.get():
                if event.type == pg.QUIT:
                    running = False
                elif event.type == pg.KEYDOWN:
                    running = self.handle_key(event)
                elif event.type == pg.MOUSEBUTTONDOWN:
                    self.handle_click(event)
            self.render()
            pg.display.flip()
            self.clock.tick(60)
        pg.quit()
        return self.game.status


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Minesweeper in a pygame window')
    parser.add_argument('--preset', type=str, default='beginner', choices=sorted(PRESETS))
    parser.add_argument('--size', type=int, default=None)
    parser.add_argument('--mines', type=int, default=None)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    args = parser.parse_args(argv)

    preset = PRESETS[args.preset]
    size = preset.size if args.size is None else args.size
    mines = preset.mines if args.mines is None else args.mines
    try:
        game = Game.new(size, mines, seed=(None if args.seed < 0 else args.seed))
    except InvalidConfiguration as exc:
        print(f'[gui] Error initializing game: {exc}', file=sys.stderr)
        return 1
    status = MinesweeperGUI(game).run()
    print(f'[gui] {status.value}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
