from __future__ import annotations
from collections import deque
from typing import FrozenSet

from .grid import CARDINAL_DIRECTIONS, Coordinate, in_bounds

SAFE_CELL_RATIO = 0.08
MAX_SAFE_CELLS = 20


def safe_zone_size(total_cells: int) -> int:
    # The start cell is always in the zone, so never less than one
    return max(1, min(int(total_cells * SAFE_CELL_RATIO), MAX_SAFE_CELLS))


def compute_safe_zone(start_x: int, start_y: int, width: int, height: int, total_cells: int) -> FrozenSet[Coordinate]:
    """4-directional BFS from the first click, stopping at the target size.

    Runs before any mine is placed, so it never looks at cell contents.
    The result is connected and always contains the start coordinate.
    """
    target = min(int(total_cells * SAFE_CELL_RATIO), MAX_SAFE_CELLS)
    safe = {(start_x, start_y)}
    queue = deque([(start_x, start_y)])
    while queue and len(safe) < target:
        x, y = queue.popleft()
        for dx, dy in CARDINAL_DIRECTIONS:
            nx, ny = x + dx, y + dy
            if not in_bounds(nx, ny, width, height) or (nx, ny) in safe:
                continue
            safe.add((nx, ny))
            queue.append((nx, ny))
            if len(safe) >= target:
                break
    return frozenset(safe)
