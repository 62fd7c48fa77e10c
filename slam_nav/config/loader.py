#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
配置加载器

从YAML文件加载配置并使用Pydantic验证。
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Union
from loguru import logger
from pydantic import ValidationError

from slam_nav.common.exceptions import InvalidConfigurationError
from slam_nav.config.models import NavigationConfig


def load_config(config_path: Union[str, Path]) -> NavigationConfig:
    """
    从YAML文件加载配置

    Args:
        config_path: 配置文件路径

    Returns:
        验证后的NavigationConfig对象

    Raises:
        FileNotFoundError: 配置文件不存在
        InvalidConfigurationError: YAML格式错误、文件为空或配置验证失败
    """
    config_path = Path(config_path)

    # 检查文件是否存在
    if not config_path.exists():
        error_msg = f"配置文件不存在: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    # 加载YAML文件
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        error_msg = f"YAML格式错误: {e}"
        logger.error(error_msg)
        raise InvalidConfigurationError(error_msg) from e

    if raw_config is None:
        error_msg = f"配置文件为空: {config_path}"
        logger.error(error_msg)
        raise InvalidConfigurationError(error_msg)

    config = build_config(raw_config)
    logger.info(f"配置加载成功: {config_path}")
    return config


def build_config(raw_config: Dict[str, Any]) -> NavigationConfig:
    """
    从字典构建并验证配置

    Args:
        raw_config: 原始配置字典

    Returns:
        验证后的NavigationConfig对象

    Raises:
        InvalidConfigurationError: 配置验证失败
    """
    if not isinstance(raw_config, dict):
        error_msg = f"配置顶层必须是映射类型: {type(raw_config).__name__}"
        logger.error(error_msg)
        raise InvalidConfigurationError(error_msg)

    try:
        return NavigationConfig(**raw_config)
    except ValidationError as e:
        error_msg = f"配置验证失败:\n{e}"
        logger.error(error_msg)
        # 输出详细的验证错误信息
        for error in e.errors():
            field_path = " -> ".join(str(loc) for loc in error['loc'])
            logger.error(f"  {field_path}: {error['msg']}")
        raise InvalidConfigurationError(error_msg) from e
