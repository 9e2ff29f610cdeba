# -*- coding: utf-8 -*-
import numpy as np

from arnold_sweep.config import Config


def calculate_smoothness_score(image):
    """
    计算图像的平滑度得分
    得分越低表示相邻像素颜色差异越小，图像越平滑，越可能是正确的解码结果。

    参数:
        image: numpy array, shape (H, W, C) 或 (H, W)
    返回:
        float: 平均局部梯度；宽或高小于 2 时返回 Config.WORST_SCORE
    """
    if image.ndim < 2:
        return Config.WORST_SCORE
    h, w = image.shape[:2]
    if w < 2 or h < 2:
        return Config.WORST_SCORE

    pixels = image.astype(np.int16)
    # 只统计同时拥有右侧和下方像素的位置
    base = pixels[:-1, :-1]
    diff_h = np.abs(base - pixels[:-1, 1:]).sum(dtype=np.int64)
    diff_v = np.abs(base - pixels[1:, :-1]).sum(dtype=np.int64)

    total_diff = int(diff_h) + int(diff_v)
    num_comparisons = (w - 1) * (h - 1) * 2
    return total_diff / num_comparisons
