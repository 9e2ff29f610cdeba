# -*- coding: utf-8 -*-
import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout

import numpy as np

from arnold_sweep.analysis.ranker import ResultRanker
from arnold_sweep.img_process import ImageProcessor
from arnold_sweep.scrambling.scrambler import arnold_encode
from arnold_sweep.sweep.orchestrator import SweepOrchestrator
from arnold_sweep.sweep.params import ParameterRange, SearchSpace, TransformParams


def gradient_image(n, step):
    rows, cols = np.indices((n, n))
    return np.stack([rows * step, cols * step, np.full_like(rows, 90)], axis=-1).astype(np.uint8)


class FlakyProcessor(ImageProcessor):
    """
    参数 a == 1 的候选保存失败
    """

    def save_image(self, image, output_path):
        if os.path.basename(output_path).split("_")[1] == "1":
            raise OSError(f"磁盘已满: {output_path}")
        super().save_image(image, output_path)


class TestSweepOrchestrator(unittest.TestCase):
    """
    测试参数爆破编排器
    """

    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix="arnold_sweep_")
        self.processor = ImageProcessor()
        self.orchestrator = SweepOrchestrator(max_workers=4, image_processor=self.processor)
        self.ranker = ResultRanker(max_workers=4, image_processor=self.processor)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def assert_recovers_original(self, original, params, space):
        scrambled = arnold_encode(original, params.k, params.a, params.b)
        report = self.orchestrator.run(scrambled, space, self.test_dir)

        self.assertEqual(report.total, len(space))
        self.assertEqual(len(report.written), len(space))
        self.assertEqual(report.failures, {})
        self.assertEqual(len(os.listdir(self.test_dir)), len(space))

        true_path = os.path.join(self.test_dir, f"{params.k}_{params.a}_{params.b}.png")
        np.testing.assert_array_equal(self.processor.load_candidate(true_path), original)

        ranked = self.ranker.rank(self.test_dir)
        self.assertEqual(len(ranked), len(space))
        best_score = ranked[0].score
        true_candidate = next(c for c in ranked if c.params == params)
        self.assertEqual(true_candidate.score, best_score)
        # 得分最低的候选必须全部与原图一致 (a=b=0 等参数同样会还原原图)
        for candidate in ranked:
            if candidate.score == best_score:
                np.testing.assert_array_equal(self.processor.load_candidate(candidate.path), original)
            else:
                self.assertGreater(candidate.score, best_score)
        return ranked

    def test_end_to_end_4x4(self):
        """
        4x4 图像用 (k=3, a=1, b=1) 置乱后爆破 k∈[0,5], a∈[0,2], b∈[0,2]
        """
        print("\n=== 测试 4x4 端到端爆破 ===")
        original = gradient_image(4, 60)
        space = SearchSpace(ParameterRange(0, 5), ParameterRange(0, 2), ParameterRange(0, 2))
        ranked = self.assert_recovers_original(original, TransformParams(3, 1, 1), space)
        self.assertEqual(len(ranked), 54)
        print("✓ 4x4 端到端爆破测试通过")

    def test_end_to_end_5x5(self):
        original = gradient_image(5, 50)
        scrambled = arnold_encode(original, 3, 1, 1)
        self.assertFalse(np.array_equal(scrambled, original))

        space = SearchSpace(ParameterRange(0, 4), ParameterRange(0, 2), ParameterRange(0, 2))
        self.assert_recovers_original(original, TransformParams(3, 1, 1), space)

    def test_single_combination_writes_one_file(self):
        rng = np.random.default_rng(5)
        image = rng.integers(0, 256, (6, 6, 3), dtype=np.uint8)
        space = SearchSpace(ParameterRange(2), ParameterRange(5), ParameterRange(5))

        report = self.orchestrator.run(image, space, self.test_dir)

        self.assertEqual(report.total, 1)
        self.assertEqual(os.listdir(self.test_dir), ["2_5_5.png"])

    def test_empty_search_space(self):
        image = np.zeros((4, 4, 3), dtype=np.uint8)
        out = io.StringIO()
        with redirect_stdout(out):
            report = self.orchestrator.run(image, [], self.test_dir)

        self.assertIn("没有有效的参数组合", out.getvalue())
        self.assertEqual(report.total, 0)
        self.assertEqual(report.written, [])
        self.assertEqual(os.listdir(self.test_dir), [])

    def test_persist_failures_do_not_abort(self):
        print("\n=== 测试单个候选保存失败 ===")
        orchestrator = SweepOrchestrator(max_workers=3, image_processor=FlakyProcessor())
        image = gradient_image(4, 60)
        space = SearchSpace(ParameterRange(1), ParameterRange(0, 2), ParameterRange(0, 1))

        report = orchestrator.run(image, space, self.test_dir)

        self.assertEqual(report.total, 6)
        self.assertEqual(report.attempted, 6)
        self.assertEqual(set(report.failures), {TransformParams(1, 1, 0), TransformParams(1, 1, 1)})
        self.assertEqual(sorted(os.listdir(self.test_dir)), ["1_0_0.png", "1_0_1.png", "1_2_0.png", "1_2_1.png"])
        print("✓ 单个候选保存失败测试通过")

    def test_missing_output_dir_is_recorded_per_candidate(self):
        image = gradient_image(4, 60)
        space = SearchSpace(ParameterRange(0, 1), ParameterRange(1), ParameterRange(0, 1))
        missing = os.path.join(self.test_dir, "does", "not", "exist")

        report = self.orchestrator.run(image, space, missing)

        self.assertEqual(report.written, [])
        self.assertEqual(len(report.failures), 4)

    def test_progress_reports_every_combination(self):
        calls = []
        image = gradient_image(4, 60)
        space = SearchSpace(ParameterRange(0, 2), ParameterRange(1), ParameterRange(0, 1))

        self.orchestrator.run(image, space, self.test_dir, progress=lambda done, total: calls.append((done, total)))

        self.assertEqual(calls, [(i, 6) for i in range(1, 7)])

    def test_row_workers(self):
        orchestrator = SweepOrchestrator(max_workers=2, image_processor=self.processor, row_workers=2)
        original = gradient_image(4, 60)
        scrambled = arnold_encode(original, 2, 1, 2)
        space = SearchSpace(ParameterRange(2), ParameterRange(1), ParameterRange(2))

        report = orchestrator.run(scrambled, space, self.test_dir)

        np.testing.assert_array_equal(self.processor.load_candidate(report.written[0]), original)

    def test_rejects_non_square(self):
        with self.assertRaises(ValueError):
            self.orchestrator.run(np.zeros((4, 5, 3), dtype=np.uint8), [TransformParams(1, 1, 1)], self.test_dir)


if __name__ == "__main__":
    unittest.main()
