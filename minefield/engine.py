from __future__ import annotations
import logging
import random
from collections import deque
from enum import Enum
from typing import Iterable, List, Optional, Set

from .generator import GenerationResult, generate, populate
from .grid import ALL_DIRECTIONS, MINE, Coordinate, Grid, in_bounds, neighbors
from .settings import DifficultySettings
from .store import BoardStore, CellRef, CellStore

logger = logging.getLogger(__name__)


class GameState(Enum):
    NOT_INITIALIZED = 'not_initialized'
    ACTIVE = 'active'
    WON = 'won'
    LOST = 'lost'

    @property
    def ended(self) -> bool:
        return self in (GameState.WON, GameState.LOST)


def _number(value: str) -> Optional[int]:
    return int(value) if value.isdigit() else None


class Minesweeper:
    """Reveal engine driving a cell store.

    The first click generates the board around itself, so it is never a
    mine. Gameplay only changes revealed/flagged state in the store; the
    values written at generation time are never touched by play.
    """

    def __init__(self, settings: DifficultySettings, store: Optional[CellStore] = None, seed: Optional[int] = None):
        self._owns_store = store is None
        self.store: CellStore = store if store is not None else BoardStore(settings.width, settings.height)
        self._apply_settings(settings)
        self.rng = random.Random(int(seed)) if seed is not None else random.Random()
        self.state = GameState.NOT_INITIALIZED
        self.generation: Optional[GenerationResult] = None
        self.revealed_count = 0
        self.safe_cells = 0
        self.satisfied: Set[Coordinate] = set()

    def _apply_settings(self, settings: DifficultySettings) -> None:
        self.settings = settings
        self.width = settings.width
        self.height = settings.height
        self.num_mines = settings.mines

    @property
    def grid(self) -> Optional[Grid]:
        return self.generation.grid if self.generation is not None else None

    @property
    def game_over(self) -> bool:
        return self.state.ended

    @property
    def win(self) -> bool:
        return self.state is GameState.WON

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(x, y, self.width, self.height)

    def neighbors(self, x: int, y: int) -> List[Coordinate]:
        return neighbors(x, y, self.width, self.height)

    def _cell(self, x: int, y: int) -> Optional[CellRef]:
        if not self.in_bounds(x, y):
            return None
        return self.store.get_cell(x, y)

    # ---------- Generation ----------
    def generate(self, start_x: Optional[int] = None, start_y: Optional[int] = None) -> GenerationResult:
        """Build a board and write its values into the store.

        The new board replaces the old one wholesale: every cell goes back to
        hidden and the game to uninitialized. Without a start this is a
        preview generated around the center, and the first click generates
        again.
        """
        start = self.settings.center
        if start_x is not None and start_y is not None:
            if self.in_bounds(start_x, start_y):
                start = (start_x, start_y)
            else:
                logger.warning('Generation start (%d, %d) is off the board, using center', start_x, start_y)
        self._clear()
        self.generation = generate(self.settings, start, self.rng)
        grid = self.generation.grid
        populate(self.store, grid)
        self.safe_cells = sum(1 for y in range(self.height) for x in range(self.width)
                              if self.store.get_cell(x, y) is not None and not grid.is_mine(x, y))
        return self.generation

    def _start(self, x: int, y: int) -> None:
        result = self.generate(x, y)
        logger.debug('Generated %s board after %d attempt(s) from (%d, %d)',
                     'validated' if result.validated else 'fallback', result.attempts, x, y)
        self.state = GameState.ACTIVE

    # ---------- Actions ----------
    def click(self, x: int, y: int) -> None:
        if self.game_over or not self.in_bounds(x, y):
            return
        cell = self._cell(x, y)
        if cell is not None and cell.is_revealed():
            self.chord(x, y)
        else:
            self.reveal(x, y)

    def reveal(self, x: int, y: int) -> None:
        if self.game_over or not self.in_bounds(x, y):
            return
        if self.state is GameState.NOT_INITIALIZED:
            self._start(x, y)
        self._reveal_from(x, y)

    def chord(self, x: int, y: int) -> None:
        """Reveal every unflagged neighbor once the flags around a number match it."""
        if self.state is not GameState.ACTIVE:
            return
        cell = self._cell(x, y)
        if cell is None or not cell.is_revealed():
            return
        number = _number(cell.get_value())
        if not number:
            return
        if self.flagged_neighbors(x, y) != number:
            return
        for nx, ny in self.neighbors(x, y):
            self._reveal_from(nx, ny)
            if self.game_over:
                return

    def flag(self, x: int, y: int) -> bool:
        if self.state is not GameState.ACTIVE:
            return False
        cell = self._cell(x, y)
        if cell is None or cell.is_revealed():
            return False
        cell.toggle_flag()
        self._refresh_satisfaction(x, y)
        return True

    def reset_all(self, settings: Optional[DifficultySettings] = None) -> None:
        """Clear every cell to hidden with no value; the next click regenerates.

        Passing settings switches difficulty as part of the reset.
        """
        self._clear()
        if settings is not None:
            resized = (settings.width, settings.height) != (self.width, self.height)
            self._apply_settings(settings)
            # A caller-supplied store is expected to follow the new size itself
            if resized and self._owns_store:
                self.store = BoardStore(settings.width, settings.height)
        self.generation = None
        self.safe_cells = 0

    def change_difficulty(self, settings: DifficultySettings) -> bool:
        # Only before the first click; a started game must be reset instead
        if self.state is not GameState.NOT_INITIALIZED:
            return False
        self.reset_all(settings)
        return True

    def _clear(self) -> None:
        for y in range(self.height):
            for x in range(self.width):
                cell = self.store.get_cell(x, y)
                if cell is not None:
                    cell.reset()
        self.state = GameState.NOT_INITIALIZED
        self.revealed_count = 0
        self.satisfied.clear()

    # ---------- Reveal internals ----------
    def _reveal_from(self, x: int, y: int) -> None:
        hit_mine = self._flood(x, y)
        if hit_mine:
            self._lose()
        elif self.revealed_count == self.safe_cells:
            self.state = GameState.WON
            logger.info('Game won')

    def _flood(self, start_x: int, start_y: int) -> bool:
        """Connected-zero BFS; returns True if the start cell was a mine.

        Each coordinate is processed at most once. Numbered cells are
        revealed but do not propagate.
        """
        visited: Set[Coordinate] = set()
        queue = deque([(start_x, start_y)])
        while queue:
            x, y = queue.popleft()
            if (x, y) in visited or not self.in_bounds(x, y):
                continue
            visited.add((x, y))
            cell = self.store.get_cell(x, y)
            if cell is None or cell.is_revealed() or cell.is_flagged():
                continue
            cell.reveal()
            value = cell.get_value()
            if value == MINE:
                return True
            self.revealed_count += 1
            self._refresh_satisfaction(x, y)
            if value == '0':
                for dx, dy in ALL_DIRECTIONS:
                    if (x + dx, y + dy) not in visited:
                        queue.append((x + dx, y + dy))
        return False

    def _lose(self) -> None:
        self.state = GameState.LOST
        logger.info('Game lost')
        for y in range(self.height):
            for x in range(self.width):
                cell = self.store.get_cell(x, y)
                if cell is None or cell.get_value() != MINE:
                    continue
                if cell.is_flagged():
                    cell.toggle_flag()
                cell.reveal()
                self._refresh_satisfaction(x, y)

    # ---------- Satisfaction ----------
    def flagged_neighbors(self, x: int, y: int) -> int:
        count = 0
        for nx, ny in self.neighbors(x, y):
            cell = self.store.get_cell(nx, ny)
            if cell is not None and cell.is_flagged():
                count += 1
        return count

    def is_satisfied(self, x: int, y: int) -> bool:
        cell = self._cell(x, y)
        if cell is None or not cell.is_revealed():
            return False
        number = _number(cell.get_value())
        if not number:
            return False
        return self.flagged_neighbors(x, y) == number

    def _refresh_satisfaction(self, x: int, y: int) -> None:
        # A cell's state only affects its own satisfaction and that of its neighbors
        for cx, cy in [(x, y), *self.neighbors(x, y)]:
            if self.is_satisfied(cx, cy):
                self.satisfied.add((cx, cy))
            else:
                self.satisfied.discard((cx, cy))

    # ---------- Queries ----------
    def hidden_cells(self) -> Iterable[Coordinate]:
        for y in range(self.height):
            for x in range(self.width):
                cell = self.store.get_cell(x, y)
                if cell is not None and not cell.is_revealed() and not cell.is_flagged():
                    yield (x, y)

    def revealed_number_cells(self) -> Iterable[Coordinate]:
        for y in range(self.height):
            for x in range(self.width):
                cell = self.store.get_cell(x, y)
                if cell is not None and cell.is_revealed() and _number(cell.get_value()):
                    yield (x, y)

    def render_ascii(self) -> str:
        rows = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                cell = self.store.get_cell(x, y)
                if cell is None:
                    row.append(' ')
                elif cell.is_flagged():
                    row.append('F')
                elif not cell.is_revealed():
                    row.append('#')
                elif cell.get_value() == MINE:
                    row.append('*')
                elif cell.get_value() == '0':
                    row.append('.')
                else:
                    row.append(cell.get_value())
            rows.append(' '.join(row))
        return '\n'.join(rows)
