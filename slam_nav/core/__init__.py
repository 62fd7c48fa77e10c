#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心模块：栅格、形态学滤波、优先队列与路径搜索
"""

from slam_nav.core.map_model import Coord, PlanRequest, PlanResult, coord_to_key, key_to_coord
from slam_nav.core.occupancy_grid import OccupancyGrid, binarize_samples
from slam_nav.core.morphology import despeckle, inflate, disk_offsets
from slam_nav.core.priority_queue import PriorityQueue, QueueEntry
from slam_nav.core.visited_map import VisitedMap
from slam_nav.core.path_planner import PathPlanner, SearchState, reconstruct_path
from slam_nav.core.planning_core import PlanningCore

__all__ = [
    'Coord',
    'PlanRequest',
    'PlanResult',
    'coord_to_key',
    'key_to_coord',
    'OccupancyGrid',
    'binarize_samples',
    'despeckle',
    'inflate',
    'disk_offsets',
    'PriorityQueue',
    'QueueEntry',
    'VisitedMap',
    'PathPlanner',
    'SearchState',
    'reconstruct_path',
    'PlanningCore',
]
