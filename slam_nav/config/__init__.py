#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
导航配置模块

提供类型安全的配置管理和验证。
"""

from slam_nav.config.models import (
    NavigationConfig,
    BinarizationConfig,
    MorphologyConfig,
    PlannerConfig,
    LoggingConfig,
)
from slam_nav.config.loader import load_config, build_config

__all__ = [
    'NavigationConfig',
    'BinarizationConfig',
    'MorphologyConfig',
    'PlannerConfig',
    'LoggingConfig',
    'load_config',
    'build_config',
]
