from __future__ import annotations
from collections import deque

import numpy as np

from .grid import ALL_DIRECTIONS, CARDINAL_DIRECTIONS, Grid, is_edge

MIN_EDGE_MINE_RATIO = 0.15
MIN_CONNECTED_MINE_RATIO = 0.8


def has_encased_mine(grid: Grid) -> bool:
    """True if some mine has a mine on all 8 sides."""
    return bool(np.any(grid.counts[grid.layout] == 8))


def are_empty_cells_connected(grid: Grid) -> bool:
    """True if every non-mine cell is 4-directionally reachable from every other."""
    empty = np.argwhere(~grid.layout)
    total_empty = len(empty)
    if total_empty == 0:
        return True
    start_y, start_x = (int(v) for v in empty[0])
    visited = {(start_x, start_y)}
    queue = deque([(start_x, start_y)])
    while queue and len(visited) < total_empty:
        x, y = queue.popleft()
        for dx, dy in CARDINAL_DIRECTIONS:
            nx, ny = x + dx, y + dy
            if (nx, ny) in visited or not grid.in_bounds(nx, ny) or grid.layout[ny, nx]:
                continue
            visited.add((nx, ny))
            if len(visited) >= total_empty:
                return True
            queue.append((nx, ny))
    return len(visited) == total_empty


def do_mines_have_edge_path(grid: Grid) -> bool:
    """Relaxed check that mines are not clustered away from the border.

    Accepts outright when enough mines already touch an edge. Otherwise
    spreads 8-directionally from the edge mines through mine cells and
    requires most of the mines to be reached.
    """
    mines = grid.mine_positions()
    if not mines:
        return True
    edge_mines = [(x, y) for x, y in mines if is_edge(x, y, grid.width, grid.height)]
    if len(edge_mines) >= max(1, int(len(mines) * MIN_EDGE_MINE_RATIO)):
        return True

    connected = set(edge_mines)
    queue = deque(edge_mines)
    while queue and len(connected) < len(mines):
        x, y = queue.popleft()
        for dx, dy in ALL_DIRECTIONS:
            nx, ny = x + dx, y + dy
            if (nx, ny) not in connected and grid.is_mine(nx, ny):
                connected.add((nx, ny))
                queue.append((nx, ny))
    return len(connected) >= int(len(mines) * MIN_CONNECTED_MINE_RATIO)


def is_playable(grid: Grid) -> bool:
    if has_encased_mine(grid):
        return False
    return are_empty_cells_connected(grid) and do_mines_have_edge_path(grid)
