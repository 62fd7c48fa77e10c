#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
slam_nav 主包
SLAM 占据栅格地图 → 二值化 → 形态学滤波 → A*/Dijkstra 路径规划
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
