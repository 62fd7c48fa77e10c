#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
形态学滤波测试：去噪与膨胀
"""

import numpy as np
import pytest

from slam_nav.common.constants import FREE, OBSTACLE
from slam_nav.common.exceptions import InvalidConfigurationError
from slam_nav.core.morphology import despeckle, disk_offsets, inflate
from slam_nav.core.occupancy_grid import OccupancyGrid


def _grid(h, w, obstacles):
    cells = np.zeros((h, w), dtype=np.uint8)
    for x, y in obstacles:
        cells[y, x] = OBSTACLE
    return OccupancyGrid(cells)


def _random_grid(seed, h=30, w=40, density=0.3):
    rng = np.random.default_rng(seed)
    return OccupancyGrid((rng.random((h, w)) < density).astype(np.uint8))


def _flipped(before, after, src_value):
    return int(np.count_nonzero((before.cells == src_value) & (after.cells != src_value)))


# -----------------------------
# despeckle
# -----------------------------

def test_despeckle_removes_isolated_point():
    grid = _grid(5, 5, [(2, 2)])
    out = despeckle(grid, 2)
    assert out.CountObstacles() == 0


def test_despeckle_keeps_solid_block():
    block = [(x, y) for x in range(2, 5) for y in range(2, 5)]
    grid = _grid(7, 7, block)
    assert despeckle(grid, 2).CountObstacles() == 9
    # 角点只有 3 个障碍邻居
    out = despeckle(grid, 3)
    assert out.CountObstacles() == 5
    assert out.IsFree(2, 2) and out.IsFree(4, 4)
    assert out.IsObstacle(3, 3)


def test_despeckle_leaves_border_untouched():
    grid = _grid(5, 5, [(0, 2), (4, 0), (2, 4)])
    out = despeckle(grid, 8)
    assert np.array_equal(out.cells, grid.cells)


def test_despeckle_never_modifies_free_cells():
    grid = _random_grid(1)
    out = despeckle(grid, 4)
    assert np.all(out.cells[grid.cells == FREE] == FREE)


def test_despeckle_monotonic_in_tolerance():
    grid = _random_grid(2)
    flips = [_flipped(grid, despeckle(grid, r), OBSTACLE) for r in range(0, 9)]
    assert flips == sorted(flips)


def test_despeckle_reads_input_only():
    # 一条横线：若原地修改，端点清除后会连锁清除整条线
    grid = _grid(3, 7, [(x, 1) for x in range(1, 6)])
    out = despeckle(grid, 1)
    assert out.IsFree(1, 1) and out.IsFree(5, 1)
    assert all(out.IsObstacle(x, 1) for x in range(2, 5))
    assert grid.CountObstacles() == 5


def test_despeckle_negative_tolerance_rejected():
    with pytest.raises(InvalidConfigurationError):
        despeckle(_grid(5, 5, []), -1)


# -----------------------------
# inflate
# -----------------------------

def test_disk_offsets():
    assert sorted(disk_offsets(0)) == [(0, 0)]
    assert sorted(disk_offsets(1)) == [(-1, 0), (0, -1), (0, 0), (0, 1), (1, 0)]
    assert len(disk_offsets(2)) == 13
    with pytest.raises(InvalidConfigurationError):
        disk_offsets(-1)


def test_inflate_grows_disk_around_obstacle():
    grid = _grid(11, 11, [(5, 5)])
    out = inflate(grid, 2)
    expected = {(5 + dx, 5 + dy) for dx, dy in disk_offsets(2)}
    actual = {(int(x), int(y)) for y, x in zip(*np.nonzero(out.cells))}
    assert actual == expected
    # (7, 7) 距离 sqrt(8) > 2
    assert out.IsFree(7, 7)


def test_inflate_zero_radius_is_identity():
    grid = _random_grid(3)
    assert np.array_equal(inflate(grid, 0).cells, grid.cells)


def test_inflate_leaves_border_strip_untouched():
    grid = _grid(7, 7, [(1, 3)])
    out = inflate(grid, 2)
    assert out.IsFree(0, 3)
    assert out.IsFree(1, 1)
    assert out.IsObstacle(2, 3)
    assert out.IsObstacle(3, 3)
    r = 2
    border = np.ones((7, 7), dtype=bool)
    border[r:7 - r, r:7 - r] = False
    assert np.array_equal(out.cells[border], grid.cells[border])


def test_inflate_radius_larger_than_grid_changes_nothing():
    grid = _grid(5, 5, [(2, 2)])
    assert np.array_equal(inflate(grid, 3).cells, grid.cells)


def test_inflate_monotonic_and_covers_radius():
    grid = _random_grid(4, density=0.05)
    flips = [_flipped(grid, inflate(grid, r), FREE) for r in range(0, 5)]
    assert flips == sorted(flips)

    r = 3
    out = inflate(grid, r)
    h, w = grid.cells.shape
    obstacles = list(zip(*np.nonzero(grid.cells)))
    for y in range(r, h - r):
        for x in range(r, w - r):
            near = any((x - ox) ** 2 + (y - oy) ** 2 <= r * r for oy, ox in obstacles)
            if near:
                assert out.IsObstacle(x, y)


def test_inflate_does_not_mutate_input():
    grid = _grid(9, 9, [(4, 4)])
    inflate(grid, 2)
    assert grid.CountObstacles() == 1


def test_inflate_negative_radius_rejected():
    with pytest.raises(InvalidConfigurationError):
        inflate(_grid(5, 5, []), -2)
