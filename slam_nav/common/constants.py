#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
常量定义：集中管理所有魔法数字和配置常量
"""

import math

# =============================
# 栅格分类
# =============================

# 可通行
FREE: int = 0

# 障碍
OBSTACLE: int = 1

# =============================
# 二值化相关常量
# =============================

# 第二通道大于该值视为可通行
OBSTACLE_THRESHOLD: int = 230

# 第一通道等于该值表示"未知"区域（按障碍处理）
UNKNOWN_MARKER: int = 200

# 第一通道等于该值表示"确认可通行"区域
FREE_MARKER: int = 64

# =============================
# 形态学滤波相关常量
# =============================

# 机器人半径（栅格单位），用于障碍膨胀
DEFAULT_INFLATION_RADIUS: int = 6

# 去噪容忍度：障碍邻居数 <= 该值的障碍点被清除
DEFAULT_DESPECKLE_TOLERANCE: int = 2

# 8 邻域偏移 (dx, dy)
NEIGHBORS_8 = [(1, 0), (0, 1), (-1, 0), (0, -1),
               (1, 1), (-1, 1), (-1, -1), (1, -1)]

# =============================
# 路径规划相关常量
# =============================

ALGORITHM_ASTAR: str = "astar"
ALGORITHM_DIJKSTRA: str = "dijkstra"
SUPPORTED_ALGORITHMS = (ALGORITHM_ASTAR, ALGORITHM_DIJKSTRA)

# 起点代价，避免 0 优先级，同时保证 VisitedMap 中已访问值 > 0
COST_EPSILON: float = 0.001

DIAGONAL_COST: float = math.sqrt(2)

# 8 方向移动 (dx, dy, 代价)
DIRECTIONS_8WAY = [
    (1, 0, 1.0),             # 右
    (0, 1, 1.0),             # 下
    (-1, 0, 1.0),            # 左
    (0, -1, 1.0),            # 上
    (1, 1, DIAGONAL_COST),   # 右下
    (-1, 1, DIAGONAL_COST),  # 左下
    (-1, -1, DIAGONAL_COST), # 左上
    (1, -1, DIAGONAL_COST),  # 右上
]

# =============================
# PGM 导出像素值
# =============================

PGM_UNKNOWN: int = 200
PGM_FREE: int = 254
PGM_OBSTACLE: int = 0

# =============================
# 渲染颜色 (RGB)
# =============================

COLOR_PATH = (0, 0, 0)
COLOR_OBSTACLE = (255, 0, 0)
COLOR_VISITED = (0, 255, 0)
COLOR_FREE = (255, 255, 255)

# =============================
# 日志
# =============================

DEFAULT_LOG_LEVEL: str = "INFO"
