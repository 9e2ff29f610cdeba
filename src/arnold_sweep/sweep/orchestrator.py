# -*- coding: utf-8 -*-
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed

from arnold_sweep.config import Config
from arnold_sweep.img_process import ImageProcessor
from arnold_sweep.scrambling.scrambler import arnold_decode
from arnold_sweep.scrambling.transform import check_square
from arnold_sweep.sweep.params import candidate_filename

logger = logging.getLogger(__name__)


class SweepReport:
    """
    一次参数爆破的结果汇总
    """
    def __init__(self, total, written=None, failures=None, elapsed=0.0):
        self.total = total
        self.written = written if written is not None else []
        self.failures = failures if failures is not None else {}
        self.elapsed = elapsed

    @property
    def attempted(self):
        return len(self.written) + len(self.failures)

    def __repr__(self):
        return (f"SweepReport(total={self.total}, written={len(self.written)}, "
                f"failures={len(self.failures)}, elapsed={self.elapsed:.2f}s)")


class SweepOrchestrator:
    def __init__(self, max_workers=None, image_processor=None, row_workers=None):
        self.max_workers = max_workers or Config.MAX_WORKERS
        self.row_workers = row_workers or Config.ROW_WORKERS
        self.processor = image_processor or ImageProcessor()

    def decode_and_save(self, image, params, output_dir, row_executor=None):
        """
        解码单个参数组合并保存
        返回:
            str: 候选图像路径
        """
        decoded = arnold_decode(image, params.k, params.a, params.b,
                                executor=row_executor, row_workers=self.row_workers)
        output_path = os.path.join(output_dir, candidate_filename(params))
        self.processor.save_image(decoded, output_path)
        return output_path

    def run(self, image, search_space, output_dir, progress=None):
        """
        对参数空间中的每个组合执行解码并保存

        参数:
            image: 置乱图像 (N, N, 3)
            search_space: TransformParams 的可迭代对象 (通常是 SearchSpace)
            output_dir: 已存在的输出目录
            progress: 可选回调 progress(completed, total)
        返回:
            SweepReport
        """
        check_square(image)

        params_list = list(search_space)
        total = len(params_list)
        if total == 0:
            print("🤷 没有有效的参数组合")
            return SweepReport(total=0)

        logger.debug("Sweeping %d combinations with %d workers", total, self.max_workers)
        report = SweepReport(total=total)
        start_time = time.perf_counter()

        row_executor = None
        if self.row_workers > 1:
            # 行块任务只做搬运、不再提交新任务，单独的线程池不会互相等待
            row_executor = ThreadPoolExecutor(max_workers=self.row_workers)
        try:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = {
                    pool.submit(self.decode_and_save, image, params, output_dir, row_executor): params
                    for params in params_list
                }
                for completed, future in enumerate(as_completed(futures), start=1):
                    params = futures[future]
                    try:
                        report.written.append(future.result())
                    except OSError as e:
                        # 单个候选保存失败不影响整体爆破
                        report.failures[params] = str(e)
                        logger.debug("Candidate %s failed: %s", params, e)
                    if progress is not None:
                        progress(completed, total)
        finally:
            if row_executor is not None:
                row_executor.shutdown(wait=True)

        report.elapsed = time.perf_counter() - start_time
        return report
