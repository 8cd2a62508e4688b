from __future__ import annotations
import argparse
import sys
from typing import Callable, Optional

from termsweep.errors import InvalidConfiguration
from termsweep.game import CURSOR_PROMPT, TEXT_PROMPT, Game
from termsweep.presets import PRESETS
from termsweep.tui import run_cursor_session, run_text_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Terminal minesweeper')
    parser.add_argument('--size', type=int, default=None, help='Grid size n (n x n board)')
    parser.add_argument('--mines', type=int, default=None, help='Number of mines, less than size*size')
    parser.add_argument('--preset', type=str, default=None, choices=sorted(PRESETS),
                        help='Use a preset board; --size/--mines still override it')
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--mode', type=str, default='cursor', choices=['cursor', 'text'],
                        help='cursor: move with keys; text: type row,col')
    return parser


def prompt_int(prompt: str, input_fn: Callable[[str], str] = input) -> Optional[int]:
    try:
        return int(input_fn(prompt).strip())
    except (ValueError, EOFError):
        return None


def resolve_config(args: argparse.Namespace, input_fn: Callable[[str], str] = input) -> tuple[int, int]:
    size, mines = args.size, args.mines
    if args.preset:
        preset = PRESETS[args.preset]
        size = preset.size if size is None else size
        mines = preset.mines if mines is None else mines
    if size is None:
        size = prompt_int('Enter grid size (n): ', input_fn)
        if size is None or size < 1:
            raise InvalidConfiguration('Invalid grid size.')
    if mines is None:
        mines = prompt_int(f'Enter number of mines (less than {size * size}): ', input_fn)
        if mines is None or mines < 0 or mines >= size * size:
            raise InvalidConfiguration(f'Invalid number of mines. Must be less than {size * size}.')
    return size, mines


def main(argv: Optional[list[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    seed = None if args.seed < 0 else args.seed
    prompt = TEXT_PROMPT if args.mode == 'text' else CURSOR_PROMPT
    try:
        size, mines = resolve_config(args, input_fn)
        game = Game.new(size, mines, seed=seed, prompt=prompt)
    except InvalidConfiguration as exc:
        print(f'[play] Error initializing game: {exc}', file=sys.stderr)
        return 1

    if args.mode == 'cursor' and not sys.stdin.isatty():
        print('[play] cursor mode needs a terminal; use --mode text for piped input', file=sys.stderr)
        return 1

    print(f'[play] {size}x{size} board, {mines} mines, {args.mode} mode')
    if args.mode == 'text':
        status = run_text_session(game)
    else:
        status = run_cursor_session(game)
    print(f'[play] {status.value}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
