# -*- coding: utf-8 -*-
import os
import sys


def _env_int(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return max(1, int(value))
    except ValueError:
        return default


class Config:
    """
    系统全局配置 - Arnold 参数爆破
    """

    # --- 输出配置 ---
    OUTPUT_DIR_NAME = "Arnold_Output"
    CANDIDATE_EXT = ".png"
    TOP_K = 5

    # --- 并行参数 ---
    # 参数组合级别的线程池大小 (可通过 ARNOLD_MAX_WORKERS 覆盖)
    MAX_WORKERS = _env_int("ARNOLD_MAX_WORKERS", min(os.cpu_count() or 4, 32))
    # 单次变换内部按行分块的线程数, 1 表示不分块
    ROW_WORKERS = _env_int("ARNOLD_ROW_WORKERS", 1)
    # 每个行块至少包含的行数，小图直接整体计算
    MIN_BAND_ROWS = 64

    # --- 评分参数 ---
    WORST_SCORE = sys.float_info.max

    # --- 控制台 ---
    BANNER = r"""
================================================================
     _                    _     _   ____
    / \   _ __ _ __   ___ | | __| | / ___|_      _____  ___ _ __
   / _ \ | '__| '_ \ / _ \| |/ _` | \___ \ \ /\ / / _ \/ _ \ '_ \
  / ___ \| |  | | | | (_) | | (_| |  ___) \ V  V /  __/  __/ |_) |
 /_/   \_\_|  |_| |_|\___/|_|\__,_| |____/ \_/\_/ \___|\___| .__/
                                                           |_|
================================================================
"""
