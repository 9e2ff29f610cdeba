# -*- coding: utf-8 -*-
"""
Arnold 图像置乱器
用于对置乱图像做多轮逆变换 (解码)，以及生成测试用的置乱图像
"""

import numpy as np

from arnold_sweep.scrambling.transform import apply_index_map, check_square, flat_index_map, inverse_index_map


class ArnoldScrambler:
    """
    Arnold 图像置乱器 (Arnold Cat Map)
    两块缓冲区交替作为源和目标，迭代过程中不再分配新内存。
    """
    def __init__(self, a=1, b=1, iterations=1, executor=None, row_workers=None):
        """
        初始化置乱参数
        :param a: 参数 a
        :param b: 参数 b
        :param iterations: 变换轮数 k (非负)
        :param executor: 可选线程池，用于单次变换内部按行并行
        :param row_workers: 行块数量上限
        """
        if iterations < 0:
            raise ValueError(f"变换轮数必须为非负整数，当前为 {iterations}")
        self.a = a
        self.b = b
        self.iterations = iterations
        self.executor = executor
        self.row_workers = row_workers

    def scramble(self, image_array):
        """
        对图像进行 Arnold 正向置乱 (逆变换的逆)
        :param image_array: numpy array, shape (N, N, C)
        :return: 置乱后的 numpy array
        """
        n = check_square(image_array)
        if self.iterations == 0:
            return image_array.copy()

        old_rows, old_cols = inverse_index_map(n, self.a, self.b)
        buffers = [image_array.copy(), np.empty_like(image_array)]
        current = 0
        for _ in range(self.iterations):
            # 逆变换是 gather，正向就是对同一坐标表做 scatter
            buffers[1 - current][old_rows, old_cols] = buffers[current]
            current = 1 - current
        return buffers[current]

    def unscramble(self, image_array):
        """
        对图像进行 Arnold 逆置乱
        :param image_array: numpy array, shape (N, N, C)
        :return: 逆置乱后的 numpy array
        """
        n = check_square(image_array)
        if self.iterations == 0:
            return image_array.copy()

        flat_index = flat_index_map(n, self.a, self.b)
        buffers = [image_array.copy(), np.empty(image_array.shape, dtype=image_array.dtype)]
        current = 0
        for _ in range(self.iterations):
            apply_index_map(buffers[current], buffers[1 - current], flat_index,
                            executor=self.executor, workers=self.row_workers)
            current = 1 - current
        return buffers[current]


def arnold_decode(image, k, a, b, executor=None, row_workers=None):
    """
    用参数 (k, a, b) 解码一张置乱图像
    """
    return ArnoldScrambler(a, b, k, executor=executor, row_workers=row_workers).unscramble(image)


def arnold_encode(image, k, a, b):
    """
    用参数 (k, a, b) 置乱一张图像，arnold_decode 的逆操作
    """
    return ArnoldScrambler(a, b, k).scramble(image)
