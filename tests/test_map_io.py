#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
地图读写与路径可视化测试
"""

import cv2
import numpy as np
import pytest

from slam_nav.common.constants import COLOR_FREE, COLOR_OBSTACLE, COLOR_PATH, COLOR_VISITED, PGM_FREE, PGM_OBSTACLE, PGM_UNKNOWN
from slam_nav.common.exceptions import MapIOError, PreconditionError
from slam_nav.core.map_model import PlanResult
from slam_nav.core.occupancy_grid import OccupancyGrid
from slam_nav.core.path_planner import PathPlanner
from slam_nav.map_io import build_pgm_map, load_ppm_map, render_path, save_path_image, save_pgm_map


def _sample_raw():
    raw = np.zeros((2, 3, 3), dtype=np.uint8)
    raw[0, 0] = (200, 255, 0)  # 未知
    raw[0, 1] = (64, 0, 0)     # 确认可通行
    raw[0, 2] = (1, 240, 2)    # 亮 → 可通行
    raw[1, 0] = (1, 100, 2)    # 障碍
    raw[1, 1] = (9, 230, 9)    # 等于阈值 → 障碍
    raw[1, 2] = (64, 250, 7)
    return raw


def _write_ppm(path, rgb):
    assert cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))


def test_load_ppm_returns_rgb(tmp_path):
    raw = _sample_raw()
    path = tmp_path / "map.ppm"
    _write_ppm(path, raw)
    loaded = load_ppm_map(path)
    assert loaded.dtype == np.uint8
    assert np.array_equal(loaded, raw)


def test_load_missing_or_grayscale_map_fails(tmp_path):
    with pytest.raises(MapIOError):
        load_ppm_map(tmp_path / "missing.ppm")

    gray = tmp_path / "gray.pgm"
    assert cv2.imwrite(str(gray), np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(MapIOError):
        load_ppm_map(gray)

    junk = tmp_path / "junk.ppm"
    junk.write_bytes(b"not an image")
    with pytest.raises(MapIOError):
        load_ppm_map(junk)


def test_build_pgm_map_tri_state():
    pgm = build_pgm_map(_sample_raw())
    assert pgm.tolist() == [
        [PGM_UNKNOWN, PGM_FREE, PGM_FREE],
        [PGM_OBSTACLE, PGM_OBSTACLE, PGM_FREE],
    ]


def test_build_pgm_map_requires_loaded_map():
    with pytest.raises(PreconditionError):
        build_pgm_map(np.zeros((0, 0, 3), dtype=np.uint8))


def test_save_pgm_map_round_trip(tmp_path):
    path = tmp_path / "out" / "map.pgm"
    pgm = save_pgm_map(path, _sample_raw())
    assert path.exists()
    assert np.array_equal(cv2.imread(str(path), cv2.IMREAD_GRAYSCALE), pgm)


def _wall_result():
    cells = np.zeros((5, 5), dtype=np.uint8)
    cells[0:4, 2] = 1
    return PathPlanner("astar").Plan(OccupancyGrid(cells), (0, 0), (4, 4))


def test_render_path_colors():
    result = _wall_result()
    vis = render_path(result, (0, 0), (4, 4))
    assert vis.shape == (5, 5, 3)
    for x, y in result.path:
        assert tuple(vis[y, x]) == COLOR_PATH
    assert tuple(vis[0, 2]) == COLOR_OBSTACLE
    on_path = set(result.path)
    arr = result.visited.AsArray()
    for y in range(5):
        for x in range(5):
            if (x, y) in on_path or result.grid.IsObstacle(x, y):
                continue
            expected = COLOR_VISITED if arr[y, x] > 0 else COLOR_FREE
            assert tuple(vis[y, x]) == expected


def test_render_marks_start_and_goal_for_failed_search():
    cells = np.zeros((4, 4), dtype=np.uint8)
    cells[3, 3] = 1
    result = PathPlanner("dijkstra").Plan(OccupancyGrid(cells), (0, 0), (3, 3))
    vis = render_path(result, (0, 0), (3, 3))
    assert tuple(vis[0, 0]) == COLOR_PATH
    assert tuple(vis[3, 3]) == COLOR_PATH
    assert tuple(vis[1, 1]) == COLOR_VISITED


def test_render_requires_grid_and_visited():
    with pytest.raises(PreconditionError):
        render_path(PlanResult(ok=False, path=[]), (0, 0), (1, 1))


def test_save_path_image(tmp_path):
    result = _wall_result()
    path = tmp_path / "path.ppm"
    vis = save_path_image(path, result, (0, 0), (4, 4))
    assert np.array_equal(load_ppm_map(path), vis)
