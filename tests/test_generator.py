import logging
import random

import pytest

from minefield import generator
from minefield.generator import Fallback, Validated, generate, populate
from minefield.grid import Grid
from minefield.placement import place_mines
from minefield.settings import DIFFICULTIES, DifficultySettings
from minefield.store import BoardStore
from minefield.validators import (
    are_empty_cells_connected,
    do_mines_have_edge_path,
    has_encased_mine,
)


@pytest.mark.parametrize('seed', range(10))
def test_easy_board_from_center(seed):
    settings = DIFFICULTIES['easy']
    result = generate(settings, (8, 8), random.Random(seed))
    grid = result.grid
    assert len(result.safe_zone) == 20
    assert grid.mine_count == settings.mines
    assert not grid.is_mine(8, 8)
    assert not any(grid.is_mine(x, y) for x, y in result.safe_zone)
    assert result.validated
    assert isinstance(result, Validated)
    assert not has_encased_mine(grid)
    assert are_empty_cells_connected(grid)
    assert do_mines_have_edge_path(grid)


@pytest.mark.parametrize('name', sorted(DIFFICULTIES))
def test_every_difficulty_honours_count_and_safe_zone(name):
    settings = DIFFICULTIES[name]
    start = (1, 2)
    result = generate(settings, start, random.Random(5))
    assert result.grid.mine_count == settings.mines
    assert start in result.safe_zone
    assert not any(result.grid.is_mine(x, y) for x, y in result.safe_zone)
    if result.validated:
        assert not has_encased_mine(result.grid)
        assert are_empty_cells_connected(result.grid)


def test_default_start_is_center():
    settings = DifficultySettings(20, 16, 70)
    result = generate(settings, rng=random.Random(0))
    assert result.start == (10, 8)
    assert not result.grid.is_mine(10, 8)


def test_same_seed_same_board():
    settings = DIFFICULTIES['medium']
    a = generate(settings, (3, 3), random.Random(99))
    b = generate(settings, (3, 3), random.Random(99))
    assert a.grid == b.grid
    assert a.attempts == b.attempts


def test_encased_candidate_triggers_retry(monkeypatch):
    settings = DIFFICULTIES['easy']
    encased = Grid.from_mines(16, 16, [(5 + dx, 5 + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)])
    calls = []

    def placer(settings, safe_zone, start, rng):
        calls.append(start)
        if len(calls) == 1:
            return encased
        return place_mines(settings, safe_zone, start, rng)

    monkeypatch.setattr(generator, 'place_mines', placer)
    monkeypatch.setattr(generator, 'is_playable',
                        lambda grid: not has_encased_mine(grid))
    result = generate(settings, (12, 12), random.Random(3))
    assert len(calls) == 2
    assert result.attempts == 2
    assert result.validated
    assert result.grid != encased


def test_exhaustion_falls_back(monkeypatch, caplog):
    settings = DIFFICULTIES['easy']
    monkeypatch.setattr(generator, 'is_playable', lambda grid: False)
    caplog.set_level(logging.DEBUG, logger='minefield.generator')
    result = generate(settings, (8, 8), random.Random(1))

    assert isinstance(result, Fallback)
    assert not result.validated
    assert result.attempts == generator.MAX_GENERATION_ATTEMPTS
    assert result.grid.mine_count == settings.mines
    assert not any(result.grid.is_mine(x, y) for x, y in result.safe_zone)

    retries = [r for r in caplog.records if r.levelno == logging.DEBUG]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(retries) == generator.MAX_GENERATION_ATTEMPTS // generator.DEBUG_LOG_INTERVAL
    assert len(warnings) == 1
    assert 'fallback' in warnings[0].getMessage()


def test_attempt_cap_is_configurable(monkeypatch):
    monkeypatch.setattr(generator, 'is_playable', lambda grid: False)
    result = generate(DIFFICULTIES['easy'], (8, 8), random.Random(1), max_attempts=3)
    assert isinstance(result, Fallback)
    assert result.attempts == 3


def test_populate_writes_every_cell():
    grid = Grid.from_rows(["M..", "...", "..M"])
    store = BoardStore(3, 3)
    populate(store, grid)
    assert store.get_cell(0, 0).get_value() == 'M'
    assert store.get_cell(1, 1).get_value() == '2'
    assert store.get_cell(2, 0).get_value() == '0'
    assert all(not store.get_cell(x, y).is_revealed() for x in range(3) for y in range(3))


class SparseStore(BoardStore):
    def get_cell(self, x, y):
        if (x, y) == (1, 1):
            return None
        return super().get_cell(x, y)


def test_populate_skips_missing_cells():
    grid = Grid.from_rows(["M..", "...", "..M"])
    store = SparseStore(3, 3)
    populate(store, grid)
    assert store.cells[1][1].get_value() == ''
    assert store.get_cell(2, 2).get_value() == 'M'
