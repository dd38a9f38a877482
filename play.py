from __future__ import annotations
import argparse
import logging
from typing import Optional

from minefield.engine import Minesweeper
from minefield.settings import DIFFICULTIES, DifficultySettings, get_difficulty

HELP = 'Commands: r X Y (reveal/chord), f X Y (flag), c X Y (chord), reset, difficulty NAME, q'


def build_settings(args) -> DifficultySettings:
    base = get_difficulty(args.difficulty)
    return DifficultySettings(
        args.width if args.width > 0 else base.width,
        args.height if args.height > 0 else base.height,
        args.mines if args.mines >= 0 else base.mines,
    )


def apply_command(env: Minesweeper, line: str) -> Optional[str]:
    """Run one input line against the game; returns a message for the player, if any."""
    parts = line.split()
    if not parts:
        return None
    cmd = parts[0].lower()
    if cmd == 'reset':
        env.reset_all()
        return 'Board cleared'
    if cmd == 'difficulty' and len(parts) == 2:
        try:
            settings = get_difficulty(parts[1].lower())
        except ValueError as e:
            return str(e)
        env.reset_all(settings)
        return f"New {settings.width}x{settings.height} board, {settings.mines} mines"
    if cmd not in ('r', 'f', 'c') or len(parts) != 3:
        return HELP
    try:
        x, y = int(parts[1]), int(parts[2])
    except ValueError:
        return HELP
    if cmd == 'r':
        env.click(x, y)
    elif cmd == 'f':
        if not env.flag(x, y):
            return 'Cannot flag that cell'
    else:
        env.chord(x, y)
    return None


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--difficulty', type=str, default='easy', choices=sorted(DIFFICULTIES))
    parser.add_argument('--width', type=int, default=0, help='Override board width (0 keeps the difficulty value)')
    parser.add_argument('--height', type=int, default=0, help='Override board height (0 keeps the difficulty value)')
    parser.add_argument('--mines', type=int, default=-1, help='Override mine count (<0 keeps the difficulty value)')
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--log_level', type=str, default='WARNING')
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    settings = build_settings(args)
    env = Minesweeper(settings, seed=(None if args.seed < 0 else args.seed))
    print(f"[play] {settings.width}x{settings.height} board, {settings.mines} mines")
    print(HELP)
    print(env.render_ascii())
    print()
    try:
        while not env.game_over:
            try:
                line = input('> ')
            except EOFError:
                break
            if line.strip().lower() in ('q', 'quit'):
                break
            message = apply_command(env, line)
            if message:
                print(message)
            print(env.render_ascii())
            if env.satisfied:
                print(f"Satisfied numbers: {len(env.satisfied)}")
            print()
    except KeyboardInterrupt:
        print("\n[play] Interrupted.")

    if env.game_over:
        print('WIN' if env.win else 'LOSE')


if __name__ == '__main__':
    main()
