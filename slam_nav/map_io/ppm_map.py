#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
PPM 地图读写

SLAM 库输出的 P6 PPM 地图读入为 HxWx3 RGB 数组，
并可导出为三值 PGM 地图（200=未知，254=可通行，0=障碍）。
"""

from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from loguru import logger

from slam_nav.common.constants import PGM_UNKNOWN, PGM_FREE, PGM_OBSTACLE
from slam_nav.common.exceptions import MapIOError, PreconditionError
from slam_nav.config.models import BinarizationConfig


def load_ppm_map(map_path: Union[str, Path]) -> np.ndarray:
    """
    读取 PPM 地图

    Args:
        map_path: 地图文件路径

    Returns:
        HxWx3 uint8 数组，通道顺序 R,G,B（与文件中字节顺序一致）

    Raises:
        MapIOError: 文件不存在、无法读取或不是三通道图像
    """
    map_path = Path(map_path)
    if not map_path.exists():
        error_msg = f"地图文件不存在: {map_path}"
        logger.error(error_msg)
        raise MapIOError(error_msg)

    img = cv2.imread(str(map_path), cv2.IMREAD_UNCHANGED)
    if img is None:
        error_msg = f"无法读取地图文件: {map_path}"
        logger.error(error_msg)
        raise MapIOError(error_msg)
    if img.ndim != 3 or img.shape[2] != 3 or img.dtype != np.uint8:
        error_msg = f"地图必须是 8 位三通道图像 (P6): {map_path}, shape={img.shape}, dtype={img.dtype}"
        logger.error(error_msg)
        raise MapIOError(error_msg)

    # OpenCV 读入为 BGR
    rgb = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    logger.info(f"地图加载成功: {map_path}, size=({rgb.shape[1]}, {rgb.shape[0]})")
    return rgb


def build_pgm_map(raw: np.ndarray, cfg: Optional[BinarizationConfig] = None) -> np.ndarray:
    """
    生成三值 PGM 地图

    与二值化规则相同，只是"未知"单独保留为 200。

    Args:
        raw: HxWx3 RGB 采样
        cfg: 二值化配置

    Returns:
        HxW uint8 灰度图
    """
    if raw is None or raw.size == 0 or raw.ndim != 3 or raw.shape[2] != 3:
        error_msg = "请先加载 PPM 地图"
        logger.error(error_msg)
        raise PreconditionError(error_msg)
    cfg = cfg or BinarizationConfig()

    first = raw[:, :, 0]
    second = raw[:, :, 1]

    pgm = np.full(first.shape, PGM_OBSTACLE, dtype=np.uint8)
    pgm[second.astype(np.int32) > cfg.obstacle_threshold] = PGM_FREE
    pgm[first == cfg.free_marker] = PGM_FREE
    # 未知优先级最高，最后写入
    pgm[first == cfg.unknown_marker] = PGM_UNKNOWN
    return pgm


def save_pgm_map(pgm_path: Union[str, Path], raw: np.ndarray, cfg: Optional[BinarizationConfig] = None) -> np.ndarray:
    """
    导出 PGM (P5) 地图

    Raises:
        MapIOError: 写入失败
    """
    pgm = build_pgm_map(raw, cfg)
    write_image(pgm_path, pgm)
    logger.info(f"PGM 地图已保存: {pgm_path}")
    return pgm


def write_image(out_path: Union[str, Path], img: np.ndarray) -> None:
    out_path = Path(out_path)
    if not out_path.parent.exists():
        out_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        ok = cv2.imwrite(str(out_path), img)
    except cv2.error as e:
        error_msg = f"写入图像失败: {out_path}: {e}"
        logger.error(error_msg)
        raise MapIOError(error_msg) from e
    if not ok:
        error_msg = f"写入图像失败: {out_path}"
        logger.error(error_msg)
        raise MapIOError(error_msg)
