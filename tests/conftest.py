from __future__ import annotations

import pytest

from minefield.engine import GameState, Minesweeper
from minefield.generator import Validated
from minefield.grid import Grid
from minefield.settings import DifficultySettings

# Mines at (0,0), (3,3), (4,3), (3,4). (4,4) is a 3 that no zero touches.
CORNER_ROWS = [
    "M . . . .",
    ". . . . .",
    ". . . . .",
    ". . . M M",
    ". . . M .",
]


@pytest.fixture
def fixed_game(monkeypatch):
    """Factory for an engine whose generation always yields the given layout."""

    def make(rows=CORNER_ROWS, active=False) -> Minesweeper:
        grid = Grid.from_rows(rows)

        def fake_generate(settings, start=None, rng=None, max_attempts=50):
            start = start if start is not None else settings.center
            return Validated(grid, frozenset({start}), start, 1)

        monkeypatch.setattr('minefield.engine.generate', fake_generate)
        game = Minesweeper(DifficultySettings(grid.width, grid.height, grid.mine_count), seed=0)
        if active:
            game.generate()
            game.state = GameState.ACTIVE
        return game

    return make


def _snapshot(game: Minesweeper):
    return [
        (cell.get_value(), cell.is_revealed(), cell.is_flagged())
        for y in range(game.height)
        for x in range(game.width)
        for cell in [game.store.get_cell(x, y)]
    ]


@pytest.fixture
def snapshot():
    return _snapshot
