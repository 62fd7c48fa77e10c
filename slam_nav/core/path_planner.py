#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路径规划模块：在占据栅格上做 A* / Dijkstra 搜索

功能：
- 8 邻接移动（直行代价 1，斜行代价 √2）
- A* 使用欧氏距离启发函数（对 8 邻接栅格可采纳）
- 惰性删除：同一栅格可在队列中存在多个过期条目，弹出时若已确定则丢弃
- 返回路径与访问记录，访问记录可用于可视化
"""

import math
from typing import Dict, List, Optional

from loguru import logger

from slam_nav.common.constants import (
    ALGORITHM_ASTAR,
    ALGORITHM_DIJKSTRA,
    SUPPORTED_ALGORITHMS,
    COST_EPSILON,
    DIRECTIONS_8WAY,
)
from slam_nav.common.exceptions import InvalidConfigurationError, PreconditionError
from slam_nav.core.map_model import (
    Coord,
    PlanResult,
    SearchState,
    coord_to_key,
    key_to_coord,
)
from slam_nav.core.occupancy_grid import OccupancyGrid
from slam_nav.core.priority_queue import PriorityQueue, QueueEntry
from slam_nav.core.visited_map import VisitedMap


def reconstruct_path(came_from: Dict[int, Optional[int]], goal: Coord, width: int) -> List[Coord]:
    """
    从终点沿前驱表回溯到起点（起点的前驱为 None）

    Args:
        came_from: 坐标键 → 前驱坐标键
        goal: 终点
        width: 栅格宽度（用于坐标键编码）

    Returns:
        path: [(x, y), ...]，从起点到终点
    """
    path: List[Coord] = []
    key: Optional[int] = coord_to_key(goal, width)
    while key is not None:
        path.append(key_to_coord(key, width))
        key = came_from[key]
    path.reverse()
    return path


class PathPlanner:
    """
    栅格路径规划器

    每次 Plan 调用都创建独立的队列、访问记录和前驱表，不共享任何状态。

    示例:
        ```python
        planner = PathPlanner(algorithm="astar")
        result = planner.Plan(grid, start=(0, 0), goal=(4, 4))
        if result.ok:
            print(result.path, result.cost)
        ```
    """

    def __init__(self, algorithm: str = ALGORITHM_ASTAR, cost_epsilon: float = COST_EPSILON):
        """
        初始化规划器

        Args:
            algorithm: 'astar' 或 'dijkstra'
            cost_epsilon: 起点代价（必须大于0）

        Raises:
            InvalidConfigurationError: 参数无效
        """
        algorithm = algorithm.lower() if isinstance(algorithm, str) else algorithm
        if algorithm not in SUPPORTED_ALGORITHMS:
            error_msg = f"不支持的算法: {algorithm}，可选: {SUPPORTED_ALGORITHMS}"
            logger.error(error_msg)
            raise InvalidConfigurationError(error_msg)
        if cost_epsilon <= 0:
            error_msg = f"起点代价必须大于0: {cost_epsilon}"
            logger.error(error_msg)
            raise InvalidConfigurationError(error_msg)

        self.algorithm_ = algorithm
        self.cost_epsilon_ = cost_epsilon

    @property
    def algorithm(self) -> str:
        return self.algorithm_

    def Heuristic(self, a: Coord, b: Coord) -> float:
        """
        启发函数：A* 为欧氏距离，Dijkstra 恒为 0
        """
        if self.algorithm_ == ALGORITHM_DIJKSTRA:
            return 0.0
        return math.hypot(a[0] - b[0], a[1] - b[1])

    def Plan(self, grid: OccupancyGrid, start: Coord, goal: Coord) -> PlanResult:
        """
        在栅格上规划路径

        Args:
            grid: 已滤波的占据栅格
            start: 起点 (x, y)
            goal: 终点 (x, y)

        Returns:
            PlanResult；终点不可达时 ok=False、path 为空，visited 保留已探索区域

        Raises:
            PreconditionError: 栅格为空或起点/终点越界
        """
        if grid is None:
            error_msg = "栅格未加载，无法规划"
            logger.error(error_msg)
            raise PreconditionError(error_msg)

        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))
        width, height = grid.size
        if not grid.InBounds(*start) or not grid.InBounds(*goal):
            error_msg = f"起点或终点超出地图范围: start={start}, goal={goal}, grid_size=({width}, {height})"
            logger.error(error_msg)
            raise PreconditionError(error_msg)

        logger.debug(f"[{self.algorithm_}] 开始路径规划: grid_size=({width}, {height}), start={start}, goal={goal}")

        visited = VisitedMap(width, height)
        came_from: Dict[int, Optional[int]] = {}

        if grid.IsObstacle(*start):
            logger.warning(f"起点位于障碍物上: {start}，仍从该点开始搜索")
        if grid.IsObstacle(*goal) and start == goal:
            # 终点是障碍时永远不会被确定
            logger.warning(f"终点位于障碍物上: {goal}")
            return PlanResult(ok=False, path=[], reason="no path", state=SearchState.EXHAUSTED,
                              visited=visited, grid=grid)

        front = PriorityQueue()
        front.Push(QueueEntry(
            priority=self.cost_epsilon_ + self.Heuristic(start, goal),
            cost=self.cost_epsilon_,
            position=start,
            predecessor=None,
        ))

        state = SearchState.SEARCHING
        nodes_expanded = 0
        stale_pops = 0

        while state is SearchState.SEARCHING:
            if front.IsEmpty():
                state = SearchState.EXHAUSTED
                break

            cur = front.PopMin()
            pos = cur.position

            # 过期条目
            if visited.IsFinalized(pos):
                stale_pops += 1
                continue

            visited.Finalize(pos, cur.cost)
            came_from[coord_to_key(pos, width)] = (
                None if cur.predecessor is None else coord_to_key(cur.predecessor, width)
            )

            if pos == goal:
                state = SearchState.GOAL_REACHED
                break

            nodes_expanded += 1
            x, y = pos
            for dx, dy, step_cost in DIRECTIONS_8WAY:
                nx, ny = x + dx, y + dy
                if nx < 0 or nx >= width or ny < 0 or ny >= height:
                    continue
                neighbor = (nx, ny)
                if grid.IsObstacle(nx, ny) or visited.IsFinalized(neighbor):
                    continue

                g = cur.cost + step_cost
                front.Push(QueueEntry(
                    priority=g + self.Heuristic(neighbor, goal),
                    cost=g,
                    position=neighbor,
                    predecessor=pos,
                ))

        if state is SearchState.EXHAUSTED:
            logger.warning(
                f"[{self.algorithm_}] 规划失败: 无法找到从{start}到{goal}的路径, "
                f"探索节点数={nodes_expanded}, 已访问={visited.Count()}"
            )
            return PlanResult(ok=False, path=[], reason="no path", state=state, visited=visited,
                              nodes_expanded=nodes_expanded, stale_pops=stale_pops, grid=grid)

        path = reconstruct_path(came_from, goal, width)
        cost = visited.Get(goal) - self.cost_epsilon_
        logger.info(
            f"[{self.algorithm_}] 路径规划成功: 路径长度={len(path)}, 代价={cost:.3f}, "
            f"探索节点数={nodes_expanded}, 过期条目={stale_pops}"
        )
        return PlanResult(ok=True, path=path, reason="ok", state=state, visited=visited, cost=cost,
                          nodes_expanded=nodes_expanded, stale_pops=stale_pops, grid=grid)
