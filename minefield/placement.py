from __future__ import annotations
import random
from typing import AbstractSet, List, Tuple

from .grid import Coordinate, Grid, is_edge
from .settings import DifficultySettings

EDGE_MINE_RATIO = 0.3


def split_positions(settings: DifficultySettings, safe_zone: AbstractSet[Coordinate], start: Coordinate) -> Tuple[List[Coordinate], List[Coordinate]]:
    """Placeable cells as (edge, center), both in row-major order."""
    edge: List[Coordinate] = []
    center: List[Coordinate] = []
    for y in range(settings.height):
        for x in range(settings.width):
            if (x, y) in safe_zone or (x, y) == start:
                continue
            (edge if is_edge(x, y, settings.width, settings.height) else center).append((x, y))
    return edge, center


def place_mines(settings: DifficultySettings, safe_zone: AbstractSet[Coordinate], start: Coordinate,
                rng: random.Random) -> Grid:
    # Edge-heavy layouts pass the edge-path check far more often
    edge, center = split_positions(settings, safe_zone, start)
    edge_count = min(int(settings.mines * EDGE_MINE_RATIO), len(edge))
    edge_mines = set(rng.sample(edge, edge_count))
    remaining = [xy for xy in edge if xy not in edge_mines] + center
    rest = rng.sample(remaining, min(settings.mines - edge_count, len(remaining)))
    return Grid.from_mines(settings.width, settings.height, [*edge_mines, *rest])


def place_mines_uniform(settings: DifficultySettings, safe_zone: AbstractSet[Coordinate], start: Coordinate,
                        rng: random.Random) -> Grid:
    # No structural guarantees; only the safe zone and the start are respected
    edge, center = split_positions(settings, safe_zone, start)
    candidates = sorted(edge + center, key=lambda xy: (xy[1], xy[0]))
    mines = rng.sample(candidates, min(settings.mines, len(candidates)))
    return Grid.from_mines(settings.width, settings.height, mines)
