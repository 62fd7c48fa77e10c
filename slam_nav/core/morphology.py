#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
栅格形态学滤波：去噪和障碍膨胀

功能：
- despeckle: 清除孤立的小障碍噪点（只处理内部栅格，1格边界保持不变）
- inflate: 以机器人半径的圆盘膨胀障碍，为车辆预留安全距离（宽度为 r 的边界带保持不变）

两个变换都只读输入栅格、写入新栅格。
"""

from typing import List, Tuple

import cv2
import numpy as np
from loguru import logger

from slam_nav.common.constants import FREE, OBSTACLE
from slam_nav.common.exceptions import InvalidConfigurationError
from slam_nav.core.occupancy_grid import OccupancyGrid


def disk_offsets(radius: int) -> List[Tuple[int, int]]:
    """
    离散圆盘偏移量：[-r, r]^2 中满足 dx^2 + dy^2 <= r^2 的 (dx, dy)

    Raises:
        InvalidConfigurationError: 半径为负数
    """
    _check_non_negative(radius, "膨胀半径")
    rr = radius * radius
    return [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if dx * dx + dy * dy <= rr
    ]


def _disk_kernel(radius: int) -> np.ndarray:
    k = 2 * radius + 1
    kernel = np.zeros((k, k), np.uint8)
    for dx, dy in disk_offsets(radius):
        kernel[radius + dy, radius + dx] = 1
    return kernel


def _check_non_negative(value: int, name: str) -> None:
    if value < 0:
        error_msg = f"{name}不能为负数: {value}"
        logger.error(error_msg)
        raise InvalidConfigurationError(error_msg)


def despeckle(grid: OccupancyGrid, tolerance: int) -> OccupancyGrid:
    """
    去噪（对障碍区域的腐蚀）

    对每个内部障碍栅格统计 8 邻域中障碍的数量，若 <= tolerance 则翻转为可通行。
    可通行栅格不会被修改。

    Args:
        grid: 输入栅格
        tolerance: 去噪容忍度 r_erode

    Returns:
        新的栅格

    Raises:
        InvalidConfigurationError: tolerance 为负数
    """
    _check_non_negative(tolerance, "去噪容忍度")

    src = grid.cells
    h, w = src.shape
    out = src.copy()
    if h < 3 or w < 3:
        return grid.WithCells(out)

    obs = (src == OBSTACLE).astype(np.uint8)

    # 8 邻域计数（中心为0）
    kernel = np.ones((3, 3), np.float32)
    kernel[1, 1] = 0
    counts = cv2.filter2D(obs, cv2.CV_16S, kernel, borderType=cv2.BORDER_CONSTANT)

    inner = src[1:h - 1, 1:w - 1]
    flip = (inner == OBSTACLE) & (counts[1:h - 1, 1:w - 1] <= tolerance)
    out[1:h - 1, 1:w - 1][flip] = FREE

    logger.debug(f"去噪完成: tolerance={tolerance}, 清除障碍点={int(np.count_nonzero(flip))}")
    return grid.WithCells(out)


def inflate(grid: OccupancyGrid, radius: int) -> OccupancyGrid:
    """
    障碍膨胀（按机器人半径的圆盘做膨胀）

    只处理行列都在 [r, dim-r) 内的栅格；若圆盘内存在障碍，则该可通行栅格变为障碍。

    Args:
        grid: 输入栅格
        radius: 膨胀半径 r_dilate（机器人半径）

    Returns:
        新的栅格

    Raises:
        InvalidConfigurationError: radius 为负数
    """
    _check_non_negative(radius, "膨胀半径")

    src = grid.cells
    h, w = src.shape
    out = src.copy()
    if radius == 0 or h <= 2 * radius or w <= 2 * radius:
        return grid.WithCells(out)

    obs = (src == OBSTACLE).astype(np.uint8)
    dilated = cv2.dilate(obs, _disk_kernel(radius), iterations=1)

    r = radius
    inner = src[r:h - r, r:w - r]
    grow = (inner == FREE) & (dilated[r:h - r, r:w - r] != 0)
    out[r:h - r, r:w - r][grow] = OBSTACLE

    logger.debug(f"障碍膨胀完成: 膨胀半径={radius}, 新增障碍={int(np.count_nonzero(grow))}")
    return grid.WithCells(out)
