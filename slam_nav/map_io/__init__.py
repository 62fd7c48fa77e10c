#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
地图文件读写与可视化
"""

from slam_nav.map_io.ppm_map import load_ppm_map, build_pgm_map, save_pgm_map
from slam_nav.map_io.path_renderer import render_path, save_path_image

__all__ = [
    'load_ppm_map',
    'build_pgm_map',
    'save_pgm_map',
    'render_path',
    'save_path_image',
]
