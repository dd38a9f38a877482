from __future__ import annotations
import argparse
import csv
import logging
import random
import time
from pathlib import Path

import numpy as np

from minefield.generator import generate
from minefield.grid import is_edge
from minefield.settings import DIFFICULTIES, DifficultySettings
from minefield.validators import are_empty_cells_connected, has_encased_mine

HEADER = [
    'difficulty', 'board', 'seed', 'width', 'height', 'mines', 'start_x', 'start_y',
    'validated', 'attempts', 'elapsed_ms', 'edge_mines', 'encased', 'connected',
]


def generate_row(name: str, settings: DifficultySettings, board: int, seed: int, random_start: bool = True) -> dict:
    rng = random.Random(seed)
    if random_start:
        start = (rng.randrange(settings.width), rng.randrange(settings.height))
    else:
        start = settings.center
    t0 = time.perf_counter()
    result = generate(settings, start, rng)
    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    grid = result.grid
    return {
        'difficulty': name, 'board': board, 'seed': seed,
        'width': settings.width, 'height': settings.height, 'mines': settings.mines,
        'start_x': start[0], 'start_y': start[1],
        'validated': int(result.validated),
        'attempts': result.attempts,
        'elapsed_ms': round(elapsed_ms, 3),
        'edge_mines': sum(1 for x, y in grid.mine_positions() if is_edge(x, y, grid.width, grid.height)),
        'encased': int(has_encased_mine(grid)),
        'connected': int(are_empty_cells_connected(grid)),
    }


def append_csv_row(csv_path: Path, row: dict, header_order: list[str]):
    csv_path.parent.mkdir(parents=True, exist_ok=True)
    write_header = not csv_path.exists()
    with csv_path.open('a', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=header_order)
        if write_header:
            writer.writeheader()
        writer.writerow(row)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--difficulty', type=str, nargs='+', default=sorted(DIFFICULTIES), choices=sorted(DIFFICULTIES))
    parser.add_argument('--boards', type=int, default=500, help='Boards generated per difficulty')
    parser.add_argument('--seed', type=int, default=-1, help='Base RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--center_start', action='store_true', help='Always start from the board center')
    parser.add_argument('--log_csv', type=str, default='logs/bench_log.csv')
    parser.add_argument('--print_every', type=int, default=100)
    parser.add_argument('--log_level', type=str, default='ERROR')
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')

    rng = np.random.default_rng(None if args.seed < 0 else args.seed)
    csv_path = Path(args.log_csv)
    try:
        for name in args.difficulty:
            settings = DIFFICULTIES[name]
            validated = 0
            attempts = 0
            for board in range(1, args.boards + 1):
                seed = int(rng.integers(1_000_000_000))
                row = generate_row(name, settings, board, seed, random_start=not args.center_start)
                append_csv_row(csv_path, row, HEADER)
                validated += row['validated']
                attempts += row['attempts']
                if args.print_every and board % args.print_every == 0:
                    print(f"[bench] {name} board {board}: validated {validated / board:.3f}, "
                          f"mean attempts {attempts / board:.2f}")
    except KeyboardInterrupt:
        print("\n[bench] Interrupted.")
    print(f"[bench] Rows written to {csv_path}")


if __name__ == '__main__':
    main()
