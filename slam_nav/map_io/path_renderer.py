#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径可视化：把搜索结果画成 RGB 图像

颜色约定（后者覆盖前者）：
- 障碍: 红
- 可通行且已访问: 绿
- 可通行未访问: 白
- 起点/终点、路径: 黑
"""

from pathlib import Path
from typing import Union

import cv2
import numpy as np
from loguru import logger

from slam_nav.common.constants import (
    OBSTACLE,
    COLOR_PATH,
    COLOR_OBSTACLE,
    COLOR_VISITED,
    COLOR_FREE,
)
from slam_nav.common.exceptions import PreconditionError
from slam_nav.core.map_model import Coord, PlanResult
from slam_nav.map_io.ppm_map import write_image


def render_path(result: PlanResult, start: Coord, goal: Coord) -> np.ndarray:
    """
    渲染访问区域与路径

    Args:
        result: 规划结果（需要带 grid 和 visited）
        start: 起点
        goal: 终点

    Returns:
        HxWx3 uint8 RGB 图像
    """
    if result.grid is None or result.visited is None:
        error_msg = "规划结果缺少栅格或访问记录，无法渲染"
        logger.error(error_msg)
        raise PreconditionError(error_msg)

    cells = result.grid.cells
    h, w = cells.shape
    vis = np.empty((h, w, 3), dtype=np.uint8)
    vis[:] = COLOR_FREE
    vis[result.visited.AsArray() > 0] = COLOR_VISITED
    vis[cells == OBSTACLE] = COLOR_OBSTACLE

    for x, y in (start, goal):
        if 0 <= x < w and 0 <= y < h:
            vis[y, x] = COLOR_PATH

    for x, y in result.path:
        vis[y, x] = COLOR_PATH

    return vis


def save_path_image(out_path: Union[str, Path], result: PlanResult, start: Coord, goal: Coord) -> np.ndarray:
    """渲染并保存（PPM/PNG 由扩展名决定）"""
    vis = render_path(result, start, goal)
    write_image(out_path, cv2.cvtColor(vis, cv2.COLOR_RGB2BGR))
    logger.info(f"路径图已保存: {out_path}")
    return vis
