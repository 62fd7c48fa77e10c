#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
命令行入口测试
"""

import cv2
import numpy as np

from slam_nav.navigation_main import BuildParser, main


def _write_map(path, obstacle=None):
    rgb = np.zeros((20, 20, 3), dtype=np.uint8)
    rgb[:] = (0, 255, 0)
    if obstacle is not None:
        x, y = obstacle
        rgb[y, x] = (0, 0, 0)
    assert cv2.imwrite(str(path), cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    return path


def test_plan_writes_outputs(tmp_path):
    map_path = _write_map(tmp_path / "map.ppm")
    out = tmp_path / "path.ppm"
    pgm = tmp_path / "map.pgm"
    code = main([str(map_path), "--start", "1", "1", "--goal", "18", "18",
                 "--output", str(out), "--pgm", str(pgm), "--log-level", "warning"])
    assert code == 0
    assert out.exists()
    assert pgm.exists()


def test_unreachable_goal_returns_one(tmp_path):
    map_path = _write_map(tmp_path / "map.ppm", obstacle=(18, 18))
    code = main([str(map_path), "--start", "1", "1", "--goal", "18", "18",
                 "--algorithm", "dijkstra", "--log-level", "ERROR"])
    assert code == 1


def test_errors_return_minus_one(tmp_path):
    code = main([str(tmp_path / "missing.ppm"), "--start", "0", "0", "--goal", "1", "1"])
    assert code == -1

    map_path = _write_map(tmp_path / "map.ppm")
    code = main([str(map_path), "--start", "0", "0", "--goal", "25", "1"])
    assert code == -1


def test_config_file_is_applied(tmp_path):
    cfg = tmp_path / "nav.yaml"
    cfg.write_text("morphology:\n  inflation_radius: -1\n", encoding="utf-8")
    map_path = _write_map(tmp_path / "map.ppm")
    code = main([str(map_path), "--start", "1", "1", "--goal", "2", "2", "--config", str(cfg)])
    assert code == -1


def test_config_file_changes_outcome(tmp_path):
    map_path = _write_map(tmp_path / "map.ppm", obstacle=(10, 10))
    args = [str(map_path), "--start", "1", "1", "--goal", "10", "12",
            "--algorithm", "dijkstra", "--log-level", "ERROR"]
    # 默认膨胀半径 6：终点被膨胀覆盖
    assert main(args) == 1

    cfg = tmp_path / "nav.yaml"
    cfg.write_text("morphology:\n  inflation_radius: 0\n", encoding="utf-8")
    assert main(args + ["--config", str(cfg)]) == 0


def test_despeckle_flags():
    parser = BuildParser()
    base = ["map.ppm", "--start", "0", "0", "--goal", "1", "1"]
    assert parser.parse_args(base).despeckle is None
    assert parser.parse_args(base + ["--despeckle"]).despeckle is True
    assert parser.parse_args(base + ["--no-despeckle"]).despeckle is False
