#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
导航配置模型

使用Pydantic定义类型安全的配置模型，所有字段都带有与原始地图处理程序一致的默认值。
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from slam_nav.common.constants import (
    OBSTACLE_THRESHOLD,
    UNKNOWN_MARKER,
    FREE_MARKER,
    DEFAULT_DESPECKLE_TOLERANCE,
    DEFAULT_INFLATION_RADIUS,
    ALGORITHM_ASTAR,
    SUPPORTED_ALGORITHMS,
    COST_EPSILON,
    DEFAULT_LOG_LEVEL,
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class BinarizationConfig(BaseModel):
    """二值化配置"""
    obstacle_threshold: int = Field(OBSTACLE_THRESHOLD, description="障碍强度阈值（第二通道大于该值视为可通行）")
    unknown_marker: int = Field(UNKNOWN_MARKER, description="未知区域标记值（第一通道）")
    free_marker: int = Field(FREE_MARKER, description="确认可通行标记值（第一通道）")

    @field_validator('obstacle_threshold', 'unknown_marker', 'free_marker')
    @classmethod
    def validate_channel_value(cls, v: int) -> int:
        """验证通道取值范围"""
        if not 0 <= v <= 255:
            raise ValueError(f"通道值必须在0-255之间: {v}")
        return v


class MorphologyConfig(BaseModel):
    """形态学滤波配置"""
    despeckle_tolerance: int = Field(DEFAULT_DESPECKLE_TOLERANCE, description="去噪容忍度 r_erode")
    inflation_radius: int = Field(DEFAULT_INFLATION_RADIUS, description="障碍膨胀半径 r_dilate（机器人半径）")

    @field_validator('despeckle_tolerance', 'inflation_radius')
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        """验证非负整数"""
        if v < 0:
            raise ValueError(f"值不能为负数: {v}")
        return v


class PlannerConfig(BaseModel):
    """路径规划配置"""
    algorithm: str = Field(ALGORITHM_ASTAR, description="搜索算法: 'astar' 或 'dijkstra'")
    despeckle_astar: bool = Field(True, description="A* 搜索前是否去噪")
    despeckle_dijkstra: bool = Field(False, description="Dijkstra 搜索前是否去噪")
    cost_epsilon: float = Field(COST_EPSILON, description="起点代价（必须大于0）")

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """验证算法名称"""
        v = v.lower()
        if v not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"算法必须是 'astar' 或 'dijkstra': {v}")
        return v

    @field_validator('cost_epsilon')
    @classmethod
    def validate_cost_epsilon(cls, v: float) -> float:
        """验证起点代价"""
        if v <= 0:
            raise ValueError(f"起点代价必须大于0: {v}")
        return v


class LoggingConfig(BaseModel):
    """日志配置"""
    level: str = Field(DEFAULT_LOG_LEVEL, description="日志级别")
    log_dir: Optional[str] = Field(None, description="日志目录（可选，不填则只输出到控制台）")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"未知日志级别: {v}")
        return v


class NavigationConfig(BaseModel):
    """导航主配置"""
    binarization: BinarizationConfig = Field(default_factory=BinarizationConfig, description="二值化配置")
    morphology: MorphologyConfig = Field(default_factory=MorphologyConfig, description="形态学滤波配置")
    planner: PlannerConfig = Field(default_factory=PlannerConfig, description="路径规划配置")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="日志配置")
