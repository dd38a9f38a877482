import random

import pytest

from minefield.grid import Grid
from minefield.placement import place_mines
from minefield.safe_zone import compute_safe_zone
from minefield.settings import DIFFICULTIES
from minefield.validators import (
    are_empty_cells_connected,
    do_mines_have_edge_path,
    has_encased_mine,
    is_playable,
)


def block_around(cx, cy, include_center=True):
    return [(cx + dx, cy + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if include_center or (dx, dy) != (0, 0)]


def test_mine_surrounded_by_mines_is_encased():
    grid = Grid.from_mines(10, 10, block_around(5, 5))
    assert has_encased_mine(grid)
    assert not is_playable(grid)


def test_ring_without_center_mine_is_not_encased():
    grid = Grid.from_mines(10, 10, block_around(5, 5, include_center=False))
    assert not has_encased_mine(grid)
    # (5, 5) is cut off from the rest instead
    assert not are_empty_cells_connected(grid)


def test_empty_board_is_connected():
    assert are_empty_cells_connected(Grid.from_rows(["...", "...", "..."]))


def test_all_mine_board_counts_as_connected():
    assert are_empty_cells_connected(Grid.from_rows(["MM", "MM"]))


def test_wall_splits_empty_cells():
    grid = Grid.from_rows([
        "..M..",
        "..M..",
        "..M..",
    ])
    assert not are_empty_cells_connected(grid)


def test_diagonal_gap_does_not_connect():
    grid = Grid.from_rows([
        ".M.",
        "M..",
        "...",
    ])
    assert not are_empty_cells_connected(grid)


def test_winding_empty_path_is_connected():
    grid = Grid.from_rows([
        ".M...",
        ".M.M.",
        "...M.",
    ])
    assert are_empty_cells_connected(grid)


def test_no_mines_have_edge_path():
    assert do_mines_have_edge_path(Grid.from_rows(["...", "..."]))


def test_interior_cluster_fails_edge_path():
    grid = Grid.from_mines(7, 7, block_around(3, 3))
    assert not do_mines_have_edge_path(grid)


def test_single_edge_mine_meets_small_quota():
    # 9 mines: quota is max(1, floor(1.35)) == 1
    grid = Grid.from_mines(7, 7, block_around(3, 3)[:8] + [(0, 0)])
    assert do_mines_have_edge_path(grid)


def chain_mines(edge_mine):
    interior = [(x, 4) for x in range(1, 8)] + [(x, 3) for x in range(2, 8)]
    return interior + [edge_mine]


def test_interior_mines_reachable_from_edge():
    # 14 mines, one on the edge: quota of 2 missed, but all 14 connect to it
    grid = Grid.from_mines(9, 9, chain_mines((0, 4)))
    assert grid.mine_count == 14
    assert do_mines_have_edge_path(grid)


def test_interior_mines_cut_off_from_edge():
    grid = Grid.from_mines(9, 9, chain_mines((0, 0)))
    assert grid.mine_count == 14
    assert not do_mines_have_edge_path(grid)


@pytest.mark.parametrize('seed', range(20))
def test_biased_placement_always_has_edge_path(seed):
    settings = DIFFICULTIES['easy']
    zone = compute_safe_zone(8, 8, 16, 16, 256)
    grid = place_mines(settings, zone, (8, 8), random.Random(seed))
    assert do_mines_have_edge_path(grid)


def test_is_playable_on_open_board():
    grid = Grid.from_rows([
        "M....",
        ".....",
        "....M",
    ])
    assert is_playable(grid)
