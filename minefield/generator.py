from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import FrozenSet, Optional

from .grid import Coordinate, Grid
from .placement import place_mines, place_mines_uniform
from .safe_zone import compute_safe_zone
from .settings import DifficultySettings
from .store import CellStore
from .validators import is_playable

logger = logging.getLogger(__name__)

MAX_GENERATION_ATTEMPTS = 50
DEBUG_LOG_INTERVAL = 10


@dataclass(frozen=True)
class GenerationResult:
    grid: Grid
    safe_zone: FrozenSet[Coordinate]
    start: Coordinate
    attempts: int

    @property
    def validated(self) -> bool:
        return isinstance(self, Validated)


class Validated(GenerationResult):
    """Board that passed every structural check."""


class Fallback(GenerationResult):
    """Best-effort board; may have encased mines or split empty regions."""


def generate(settings: DifficultySettings, start: Optional[Coordinate] = None, rng: Optional[random.Random] = None,
             max_attempts: int = MAX_GENERATION_ATTEMPTS) -> GenerationResult:
    rng = rng if rng is not None else random.Random()
    start = start if start is not None else settings.center
    safe_zone = compute_safe_zone(start[0], start[1], settings.width, settings.height, settings.total_cells)

    for attempt in range(1, max_attempts + 1):
        candidate = place_mines(settings, safe_zone, start, rng)
        if is_playable(candidate):
            return Validated(candidate, safe_zone, start, attempt)
        if attempt % DEBUG_LOG_INTERVAL == 0:
            logger.debug('Board generation attempt %d, retrying...', attempt)

    logger.warning('Could not generate a valid %dx%d board with %d mines in %d attempts, using fallback',
                   settings.width, settings.height, settings.mines, max_attempts)
    grid = place_mines_uniform(settings, safe_zone, start, rng)
    return Fallback(grid, safe_zone, start, max_attempts)


def populate(store: CellStore, grid: Grid) -> None:
    for y in range(grid.height):
        for x in range(grid.width):
            cell = store.get_cell(x, y)
            if cell is None:
                continue
            cell.set_value(grid.symbol(x, y))
