#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
占据栅格模块：将原始 RGB 采样二值化为 可通行/障碍 栅格

栅格约定与导航模块其余部分一致：0=可通行，1=障碍。
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from loguru import logger

from slam_nav.common.constants import (
    FREE,
    OBSTACLE,
    OBSTACLE_THRESHOLD,
    UNKNOWN_MARKER,
    FREE_MARKER,
)
from slam_nav.common.exceptions import PreconditionError
from slam_nav.config.models import BinarizationConfig


def binarize_samples(
    raw: np.ndarray,
    obstacle_threshold: int = OBSTACLE_THRESHOLD,
    unknown_marker: int = UNKNOWN_MARKER,
    free_marker: int = FREE_MARKER,
) -> np.ndarray:
    """
    按优先级规则对每个像素分类：
        1. 第一通道 == unknown_marker → 障碍
        2. 第一通道 == free_marker    → 可通行
        3. 第二通道 >  obstacle_threshold → 可通行
        4. 其余 → 障碍

    Args:
        raw: HxWx3 uint8 采样（通道顺序与 PPM 相同，即 R,G,B）
        obstacle_threshold: 障碍强度阈值
        unknown_marker: 未知区域标记值
        free_marker: 确认可通行标记值

    Returns:
        HxW uint8 数组，0=可通行，1=障碍

    Raises:
        PreconditionError: 输入为空或形状不是 HxWx3
    """
    if raw is None or raw.size == 0:
        error_msg = "原始地图为空，请先加载地图"
        logger.error(error_msg)
        raise PreconditionError(error_msg)
    if raw.ndim != 3 or raw.shape[2] != 3:
        error_msg = f"原始地图必须是 HxWx3 数组: shape={raw.shape}"
        logger.error(error_msg)
        raise PreconditionError(error_msg)

    first = raw[:, :, 0]
    second = raw[:, :, 1]

    unknown = first == unknown_marker
    confirmed_free = (first == free_marker) & ~unknown
    bright = (second.astype(np.int32) > obstacle_threshold) & ~unknown & ~confirmed_free

    free = confirmed_free | bright
    cells = np.where(free, FREE, OBSTACLE).astype(np.uint8)
    return cells


@dataclass(frozen=True, eq=False)
class OccupancyGrid:
    """
    不可变占据栅格

    cells: HxW uint8，0=可通行，1=障碍。构造时会复制并设为只读，
    形态学滤波总是返回新的栅格。
    """
    cells: np.ndarray

    def __post_init__(self):
        if self.cells is None:
            error_msg = "栅格不能为None"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        cells = np.array(self.cells, dtype=np.uint8, copy=True)
        if cells.ndim != 2 or cells.shape[0] == 0 or cells.shape[1] == 0:
            error_msg = f"栅格必须是非空二维数组: shape={cells.shape}"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        if np.any(cells > OBSTACLE):
            error_msg = "栅格值只能是 0(可通行) 或 1(障碍)"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        cells.flags.writeable = False
        object.__setattr__(self, 'cells', cells)

    @classmethod
    def FromRawSamples(cls, raw: np.ndarray, cfg: Optional[BinarizationConfig] = None) -> "OccupancyGrid":
        """
        从原始 RGB 采样构建栅格

        Args:
            raw: HxWx3 uint8 采样
            cfg: 二值化配置（None 使用默认常量）
        """
        cfg = cfg or BinarizationConfig()
        cells = binarize_samples(
            raw,
            obstacle_threshold=cfg.obstacle_threshold,
            unknown_marker=cfg.unknown_marker,
            free_marker=cfg.free_marker,
        )
        grid = cls(cells)
        logger.debug(f"二值化完成: size=({grid.width}, {grid.height}), 障碍数={grid.CountObstacles()}")
        return grid

    @classmethod
    def FromMask(cls, mask: np.ndarray) -> "OccupancyGrid":
        """从已二值化的掩码构建栅格（非0=障碍）"""
        if mask is None or mask.size == 0:
            error_msg = "掩码为空"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        return cls((np.asarray(mask) != 0).astype(np.uint8))

    @classmethod
    def Empty(cls, width: int, height: int) -> "OccupancyGrid":
        """全部可通行的栅格"""
        if width <= 0 or height <= 0:
            error_msg = f"栅格尺寸必须大于0: ({width}, {height})"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        return cls(np.zeros((height, width), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)

    def InBounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def IsObstacle(self, x: int, y: int) -> bool:
        return self.cells[y, x] == OBSTACLE

    def IsFree(self, x: int, y: int) -> bool:
        return self.cells[y, x] == FREE

    def CountObstacles(self) -> int:
        return int(np.count_nonzero(self.cells == OBSTACLE))

    def WithCells(self, cells: np.ndarray) -> "OccupancyGrid":
        """用同尺寸的新数组构建栅格"""
        if cells.shape != self.cells.shape:
            error_msg = f"栅格尺寸不一致: {cells.shape} != {self.cells.shape}"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        return OccupancyGrid(cells)
