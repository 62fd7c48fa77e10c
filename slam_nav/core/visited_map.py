#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
访问记录：每个栅格只能被确定（finalize）一次，记录确定时的搜索代价

0 表示尚未确定，> 0 表示已确定且值为代价。
"""

import numpy as np
from loguru import logger

from slam_nav.common.exceptions import PathPlanningError, PreconditionError
from slam_nav.core.map_model import Coord


class VisitedMap:
    """W×H 代价数组，先写入者生效，之后不可覆盖"""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            error_msg = f"访问记录尺寸必须大于0: ({width}, {height})"
            logger.error(error_msg)
            raise PreconditionError(error_msg)
        self.width_ = width
        self.height_ = height
        self.cost_ = np.zeros((height, width), dtype=np.float64)
        self.count_ = 0

    @property
    def width(self) -> int:
        return self.width_

    @property
    def height(self) -> int:
        return self.height_

    def Finalize(self, pos: Coord, cost: float) -> None:
        """
        确定栅格的最终代价

        Args:
            pos: 栅格坐标 (x, y)
            cost: 搜索代价（必须大于0）

        Raises:
            PathPlanningError: 代价不为正，或栅格已被确定
        """
        x, y = pos
        if cost <= 0:
            error_msg = f"确定代价必须大于0: pos={pos}, cost={cost}"
            logger.error(error_msg)
            raise PathPlanningError(error_msg)
        if self.cost_[y, x] > 0:
            error_msg = f"栅格已被确定，不能覆盖: pos={pos}, 已有代价={self.cost_[y, x]}"
            logger.error(error_msg)
            raise PathPlanningError(error_msg)
        self.cost_[y, x] = cost
        self.count_ += 1

    def IsFinalized(self, pos: Coord) -> bool:
        return self.cost_[pos[1], pos[0]] > 0

    def Get(self, pos: Coord) -> float:
        """返回已确定的代价，未确定为 0"""
        return float(self.cost_[pos[1], pos[0]])

    def Count(self) -> int:
        """已确定的栅格数"""
        return self.count_

    def AsArray(self) -> np.ndarray:
        """HxW 代价数组的只读视图"""
        view = self.cost_.view()
        view.flags.writeable = False
        return view
