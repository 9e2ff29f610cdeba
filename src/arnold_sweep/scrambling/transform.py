# -*- coding: utf-8 -*-
"""
Arnold 逆变换引擎
文件路径: src/arnold_sweep/scrambling/transform.py

对 N×N 图像执行一次 Arnold 逆置乱:
    old_row = (row + b*col) mod N
    old_col = (a*row + (a*b+1)*col) mod N
    dst[row, col] = src[old_row, old_col]

目标图像的每一行只读取源图像、只写自己那一行，因此可以按行分块并行。
"""

import numpy as np

from arnold_sweep.config import Config


def check_square(image):
    """
    校验图像为 (N, N, C) 的正方形矩阵
    返回:
        int: 边长 N
    """
    if image.ndim != 3:
        raise ValueError(f"图像必须是 (H, W, C) 矩阵，当前维度为 {image.shape}")
    h, w = image.shape[:2]
    if h != w:
        raise ValueError(f"Arnold变换要求图像为正方形，但当前图像尺寸为 {w}x{h}")
    return h


def inverse_index_map(n, a, b):
    """
    计算逆变换的源坐标表
    参数:
        n: 图像边长
        a, b: Arnold 参数 (任意整数)
    返回:
        (old_rows, old_cols): 两个 (n, n) int64 矩阵
    """
    if n <= 0:
        raise ValueError(f"图像边长必须为正数，当前为 {n}")
    # Python 整数取模结果非负且不会溢出，先约简参数再交给 int64 计算
    a %= n
    b %= n
    rows, cols = np.indices((n, n), dtype=np.int64)
    old_rows = (rows + b * cols) % n
    old_cols = (a * rows + (a * b + 1) * cols) % n
    return old_rows, old_cols


def flat_index_map(n, a, b):
    """
    逆变换的一维源下标表 old_row * n + old_col
    返回:
        (n, n) int64 矩阵，对应源图像 reshape(-1, C) 后的行号
    """
    old_rows, old_cols = inverse_index_map(n, a, b)
    return old_rows * n + old_cols


def row_bands(n, workers, min_band_rows=None):
    """
    将 [0, n) 切分为互不重叠的行区间
    """
    if min_band_rows is None:
        min_band_rows = Config.MIN_BAND_ROWS
    count = max(1, min(workers, n // max(1, min_band_rows)))
    edges = np.linspace(0, n, count + 1).astype(int)
    return [(int(start), int(stop)) for start, stop in zip(edges[:-1], edges[1:]) if stop > start]


def _fill_rows(src, dst, flat_index, start, stop):
    channels = src.shape[-1]
    # mode="clip" 时 take 直接写入 out，不经过整幅大小的中间缓冲
    np.take(
        src.reshape(-1, channels),
        flat_index[start:stop].ravel(),
        axis=0,
        out=dst[start:stop].reshape(-1, channels),
        mode="clip",
    )


def apply_index_map(src, dst, flat_index, executor=None, workers=None, min_band_rows=None):
    """
    按坐标表把 src 搬运到 dst

    参数:
        src: 源图像 (只读)
        dst: 目标图像 (与 src 同尺寸、C 连续，且不能是同一块内存)
        flat_index: flat_index_map 的返回值
        executor: 可选的线程池，提供时按行分块并行
        workers: 行块数量上限，默认 Config.ROW_WORKERS
        min_band_rows: 每个行块的最少行数
    返回:
        dst
    """
    if dst.shape != src.shape:
        raise ValueError(f"目标缓冲区尺寸 {dst.shape} 与源图像 {src.shape} 不一致")
    if not dst.flags.c_contiguous:
        raise ValueError("目标缓冲区必须是 C 连续数组")
    if np.shares_memory(src, dst):
        raise ValueError("目标缓冲区不能与源图像共享内存")

    src = np.ascontiguousarray(src)
    n = src.shape[0]

    if executor is None:
        _fill_rows(src, dst, flat_index, 0, n)
        return dst

    workers = workers or Config.ROW_WORKERS
    bands = row_bands(n, workers, min_band_rows)
    if len(bands) == 1:
        _fill_rows(src, dst, flat_index, 0, n)
        return dst

    futures = [
        executor.submit(_fill_rows, src, dst, flat_index, start, stop)
        for start, stop in bands
    ]
    for future in futures:
        future.result()
    return dst


def transform_once(src, a, b, out=None, executor=None, workers=None, min_band_rows=None):
    """
    执行一次 Arnold 逆变换
    参数:
        src: numpy array, shape (N, N, C)
        a, b: Arnold 参数
        out: 可选的目标缓冲区
        executor: 可选的线程池 (按行分块)
        workers: 行块数量上限
    返回:
        numpy array, shape (N, N, C)
    """
    n = check_square(src)
    if out is None:
        out = np.empty(src.shape, dtype=src.dtype)
    return apply_index_map(src, out, flat_index_map(n, a, b), executor, workers, min_band_rows)
