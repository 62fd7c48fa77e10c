# slam_nav/core/planning_core.py
from typing import Optional, Union

import numpy as np
from loguru import logger

from slam_nav.common.constants import ALGORITHM_ASTAR, ALGORITHM_DIJKSTRA, SUPPORTED_ALGORITHMS
from slam_nav.common.exceptions import PreconditionError
from slam_nav.config.models import NavigationConfig
from slam_nav.core.map_model import Coord, PlanRequest, PlanResult
from slam_nav.core.morphology import despeckle, inflate
from slam_nav.core.occupancy_grid import OccupancyGrid
from slam_nav.core.path_planner import PathPlanner

MapSource = Union[OccupancyGrid, np.ndarray]


class PlanningCore:
    """纯路径规划流水线：原始采样 → 二值化 → 去噪 → 膨胀 → 搜索，不关心文件读写。"""

    def __init__(self, cfg: Optional[NavigationConfig] = None) -> None:
        self.cfg = cfg or NavigationConfig()

    def BuildGrid(self, raw: np.ndarray) -> OccupancyGrid:
        """按配置的二值化规则构建栅格。"""
        return OccupancyGrid.FromRawSamples(raw, self.cfg.binarization)

    def ShouldDespeckle(self, algorithm: str, despeckle_override: Optional[bool] = None) -> bool:
        if despeckle_override is not None:
            return despeckle_override
        if algorithm == ALGORITHM_DIJKSTRA:
            return self.cfg.planner.despeckle_dijkstra
        return self.cfg.planner.despeckle_astar

    def Preprocess(
        self,
        grid: OccupancyGrid,
        algorithm: str = ALGORITHM_ASTAR,
        despeckle_override: Optional[bool] = None,
    ) -> OccupancyGrid:
        """去噪（按算法/请求决定是否执行）后膨胀，返回实际用于搜索的栅格。"""
        morph = self.cfg.morphology
        if self.ShouldDespeckle(algorithm, despeckle_override):
            grid = despeckle(grid, morph.despeckle_tolerance)
        return inflate(grid, morph.inflation_radius)

    def Plan(self, source: Optional[MapSource], req: PlanRequest) -> PlanResult:
        """在给定地图上做一次路径规划（栅格坐标）。"""
        if source is None:
            error_msg = "地图未加载，无法规划"
            logger.error(error_msg)
            raise PreconditionError(error_msg)

        algorithm = (req.algorithm or self.cfg.planner.algorithm).lower()
        if algorithm not in SUPPORTED_ALGORITHMS:
            error_msg = f"不支持的算法: {req.algorithm}"
            logger.error(error_msg)
            raise PreconditionError(error_msg)

        if isinstance(source, OccupancyGrid):
            grid = source
        elif np.ndim(source) == 2:
            # 已二值化的掩码（非0=障碍）
            grid = OccupancyGrid.FromMask(source)
        else:
            grid = self.BuildGrid(source)

        # 1) 滤波
        filtered = self.Preprocess(grid, algorithm, req.despeckle)

        # 2) 搜索
        planner = PathPlanner(algorithm=algorithm, cost_epsilon=self.cfg.planner.cost_epsilon)
        return planner.Plan(filtered, req.start, req.goal)

    def AStar(self, source: MapSource, start: Coord, goal: Coord) -> PlanResult:
        return self.Plan(source, PlanRequest(start=start, goal=goal, algorithm=ALGORITHM_ASTAR))

    def Dijkstra(self, source: MapSource, start: Coord, goal: Coord) -> PlanResult:
        return self.Plan(source, PlanRequest(start=start, goal=goal, algorithm=ALGORITHM_DIJKSTRA))
