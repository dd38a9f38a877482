from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple, Union
import numpy as np

Coordinate = Tuple[int, int]

MINE = 'M'

# (dx, dy) offsets
ALL_DIRECTIONS: Tuple[Coordinate, ...] = ((0, 1), (1, 1), (1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1))
CARDINAL_DIRECTIONS: Tuple[Coordinate, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def is_edge(x: int, y: int, width: int, height: int) -> bool:
    return x == 0 or y == 0 or x == width - 1 or y == height - 1


def neighbors(x: int, y: int, width: int, height: int, directions: Sequence[Coordinate] = ALL_DIRECTIONS) -> List[Coordinate]:
    coords = []
    for dx, dy in directions:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, width, height):
            coords.append((nx, ny))
    return coords


class Grid:
    """Mine layout plus the 8-directional mine-neighbor count of every cell.

    The layout is indexed ``[y, x]``; counts are kept for mines too so the
    encased-mine check can read them directly. Instances are read-only.
    """

    def __init__(self, layout: np.ndarray):
        layout = np.array(layout, dtype=bool)
        if layout.ndim != 2:
            raise ValueError('Grid layout must be 2-D')
        self.height, self.width = layout.shape
        padded = np.pad(layout.astype(np.int8), 1)
        counts = np.zeros(layout.shape, dtype=np.int8)
        for dx, dy in ALL_DIRECTIONS:
            counts += padded[1 + dy:1 + dy + self.height, 1 + dx:1 + dx + self.width]
        layout.flags.writeable = False
        counts.flags.writeable = False
        self.layout = layout
        self.counts = counts

    @classmethod
    def from_mines(cls, width: int, height: int, mines: Iterable[Coordinate]) -> 'Grid':
        layout = np.zeros((height, width), dtype=bool)
        for x, y in mines:
            layout[y, x] = True
        return cls(layout)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Grid':
        # 'M' or '*' marks a mine, anything else is empty; whitespace is ignored
        cleaned = [''.join(row.split()) for row in rows]
        return cls(np.array([[ch in ('M', '*') for ch in row] for row in cleaned], dtype=bool))

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.width, self.height)

    def is_mine(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and bool(self.layout[y, x])

    def value(self, x: int, y: int) -> Optional[Union[str, int]]:
        if not self.in_bounds(x, y):
            return None
        if self.layout[y, x]:
            return MINE
        return int(self.counts[y, x])

    def symbol(self, x: int, y: int) -> str:
        return str(self.value(x, y))

    @property
    def mine_count(self) -> int:
        return int(self.layout.sum())

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def mine_positions(self) -> List[Coordinate]:
        return [(int(x), int(y)) for y, x in np.argwhere(self.layout)]

    def render(self) -> str:
        rows = []
        for y in range(self.height):
            rows.append(' '.join('*' if self.layout[y, x] else ('.' if self.counts[y, x] == 0 else str(self.counts[y, x]))
                                 for x in range(self.width)))
        return '\n'.join(rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.layout, other.layout)

    def __hash__(self) -> int:
        return hash((self.width, self.height, self.layout.tobytes()))

    def __repr__(self) -> str:
        return f'Grid(width={self.width}, height={self.height}, mines={self.mine_count})'
