# -*- coding: utf-8 -*-
import unittest

import numpy as np

from arnold_sweep.analysis.smoothness import calculate_smoothness_score
from arnold_sweep.config import Config


class TestSmoothnessScore(unittest.TestCase):
    """
    测试平滑度评分
    """

    def test_uniform_image_scores_zero(self):
        for n in (2, 3, 16):
            image = np.full((n, n, 3), 137, dtype=np.uint8)
            self.assertEqual(calculate_smoothness_score(image), 0.0)

    def test_degenerate_images_get_worst_score(self):
        for shape in [(1, 1, 3), (0, 0, 3), (1, 5, 3), (5, 1, 3)]:
            self.assertEqual(calculate_smoothness_score(np.zeros(shape, dtype=np.uint8)), Config.WORST_SCORE)

    def test_known_2x2_value(self):
        image = np.array([
            [[0, 0, 0], [10, 20, 30]],
            [[1, 1, 1], [5, 5, 5]],
        ], dtype=np.uint8)
        # 右侧差 60，下方差 3，共 2 次比较
        self.assertEqual(calculate_smoothness_score(image), 31.5)

    def test_no_uint8_wraparound(self):
        image = np.array([
            [[0, 0, 0], [255, 255, 255]],
            [[255, 255, 255], [0, 0, 0]],
        ], dtype=np.uint8)
        self.assertEqual(calculate_smoothness_score(image), 765.0)

    def test_gradient_image(self):
        rows, cols = np.indices((3, 3))
        image = np.stack([rows * 60, cols * 60, np.zeros_like(rows)], axis=-1).astype(np.uint8)
        self.assertEqual(calculate_smoothness_score(image), 60.0)

    def test_grayscale_image(self):
        image = np.array([[0, 10], [4, 0]], dtype=np.uint8)
        self.assertEqual(calculate_smoothness_score(image), 7.0)

    def test_scrambled_image_scores_higher(self):
        rows, cols = np.indices((32, 32))
        smooth = np.stack([rows * 8, cols * 8, (rows + cols) * 4], axis=-1).astype(np.uint8)
        rng = np.random.default_rng(7)
        shuffled = rng.permutation(smooth.reshape(-1, 3)).reshape(smooth.shape)
        self.assertLess(calculate_smoothness_score(smooth), calculate_smoothness_score(shuffled))

    def test_score_is_deterministic(self):
        rng = np.random.default_rng(3)
        image = rng.integers(0, 256, (20, 20, 3), dtype=np.uint8)
        first = calculate_smoothness_score(image)
        second = calculate_smoothness_score(image.copy())
        self.assertEqual(first.hex(), second.hex())


if __name__ == "__main__":
    unittest.main()
