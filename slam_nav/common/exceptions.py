#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
自定义异常类：定义导航模块的专用异常
"""


class NavigationError(Exception):
    """导航模块基础异常类"""
    pass


class PreconditionError(NavigationError):
    """前置条件不满足（栅格未加载、尺寸为0、坐标越界等）"""
    pass


class InvalidConfigurationError(NavigationError):
    """配置错误异常"""
    pass


class EmptyQueueError(NavigationError):
    """从空优先队列弹出元素"""
    pass


class PathPlanningError(NavigationError):
    """路径规划内部不变量被破坏"""
    pass


class MapIOError(NavigationError):
    """地图文件读写失败异常"""
    pass
