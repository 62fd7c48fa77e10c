#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
命令行入口：读取 PPM 地图 → 规划路径 → 输出路径图 / PGM 地图

示例:
    slam-nav map.ppm --start 10 10 --goal 120 80 --algorithm astar --output path.ppm
"""

import argparse
from typing import List, Optional

from loguru import logger

from slam_nav.common.exceptions import NavigationError
from slam_nav.common.logger import SetupLogger
from slam_nav.common.constants import SUPPORTED_ALGORITHMS
from slam_nav.config.loader import load_config
from slam_nav.config.models import LOG_LEVELS, NavigationConfig
from slam_nav.core.map_model import PlanRequest
from slam_nav.core.planning_core import PlanningCore
from slam_nav.map_io.ppm_map import load_ppm_map, save_pgm_map
from slam_nav.map_io.path_renderer import save_path_image


def BuildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SLAM 占据地图路径规划")
    parser.add_argument("map_path", type=str, help="PPM (P6) 地图文件")
    parser.add_argument("--start", type=int, nargs=2, required=True, metavar=("X", "Y"), help="起点栅格坐标")
    parser.add_argument("--goal", type=int, nargs=2, required=True, metavar=("X", "Y"), help="终点栅格坐标")
    parser.add_argument("--algorithm", choices=SUPPORTED_ALGORITHMS, default=None,
                        help="搜索算法（默认取配置文件）")
    parser.add_argument("--config", type=str, default=None, help="YAML 配置文件")
    despeckle_group = parser.add_mutually_exclusive_group()
    despeckle_group.add_argument("--despeckle", dest="despeckle", action="store_true", default=None,
                                 help="搜索前强制去噪")
    despeckle_group.add_argument("--no-despeckle", dest="despeckle", action="store_false",
                                 help="搜索前不去噪")
    parser.set_defaults(despeckle=None)
    parser.add_argument("--output", type=str, default=None, help="路径可视化输出文件 (.ppm/.png)")
    parser.add_argument("--pgm", type=str, default=None, help="导出三值 PGM 地图")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="日志级别（覆盖配置文件）")
    parser.add_argument("--log-dir", type=str, default=None, help="日志目录（覆盖配置文件）")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = BuildParser().parse_args(argv)

    try:
        cfg = load_config(args.config) if args.config else NavigationConfig()
        SetupLogger(
            level=args.log_level or cfg.logging.level,
            log_dir=args.log_dir or cfg.logging.log_dir,
        )

        raw = load_ppm_map(args.map_path)
        if args.pgm:
            save_pgm_map(args.pgm, raw, cfg.binarization)

        start = tuple(args.start)
        goal = tuple(args.goal)
        core = PlanningCore(cfg)
        result = core.Plan(raw, PlanRequest(
            start=start,
            goal=goal,
            algorithm=args.algorithm,
            despeckle=args.despeckle,
        ))

        if args.output:
            save_path_image(args.output, result, start, goal)
    except (NavigationError, FileNotFoundError) as e:
        logger.error(f"路径规划失败: {e}")
        return -1

    if not result.ok:
        logger.warning(f"未找到路径: start={start}, goal={goal}, 已访问={result.visited.Count()}")
        return 1

    logger.info(f"规划成功: 路径长度={len(result.path)}, 代价={result.cost:.3f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
