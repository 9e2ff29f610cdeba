# -*- coding: utf-8 -*-
"""
结果分析模块
文件路径: src/arnold_sweep/analysis/ranker.py

读取输出目录中的全部候选图像，按平滑度得分升序排序，列出最可能的结果。
"""

import logging
import os
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from arnold_sweep.analysis.smoothness import calculate_smoothness_score
from arnold_sweep.config import Config
from arnold_sweep.img_process import ImageProcessor
from arnold_sweep.sweep.params import parse_candidate_filename

logger = logging.getLogger(__name__)

ScoredCandidate = namedtuple("ScoredCandidate", ["path", "filename", "score", "params"])


class ResultRanker:
    """
    候选结果排序器
    """

    def __init__(self, max_workers=None, image_processor=None):
        self.max_workers = max_workers or Config.MAX_WORKERS
        self.processor = image_processor or ImageProcessor()

    def list_candidates(self, output_dir):
        """
        列出目录中的候选图像 (按文件名排序)
        """
        if not os.path.isdir(output_dir):
            raise FileNotFoundError(f"无法读取分析目录: {output_dir}")
        ext = Config.CANDIDATE_EXT.lower()
        return [
            os.path.join(output_dir, name)
            for name in sorted(os.listdir(output_dir))
            if name.lower().endswith(ext) and os.path.isfile(os.path.join(output_dir, name))
        ]

    def score_file(self, path):
        """
        读取并评分单个候选，无法读取时返回 None
        """
        image = self.processor.load_candidate(path)
        if image is None:
            logger.debug("Skipping unreadable candidate %s", path)
            return None
        filename = os.path.basename(path)
        return ScoredCandidate(
            path=path,
            filename=filename,
            score=calculate_smoothness_score(image),
            params=parse_candidate_filename(filename),
        )

    def rank(self, output_dir, progress=None):
        """
        对目录中的所有候选评分并排序
        参数:
            output_dir: 候选图像目录
            progress: 可选回调 progress(completed, total)
        返回:
            list[ScoredCandidate]: 得分升序
        """
        paths = self.list_candidates(output_dir)
        total = len(paths)
        if total == 0:
            return []

        scored = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            for completed, candidate in enumerate(pool.map(self.score_file, paths), start=1):
                if candidate is not None:
                    scored.append(candidate)
                if progress is not None:
                    progress(completed, total)

        # 稳定排序，得分相同时保持文件名顺序
        scored.sort(key=lambda c: c.score)
        return scored

    def report(self, candidates, top_k=None):
        """
        在控制台输出得分最低的 top_k 个候选
        """
        if top_k is None:
            top_k = Config.TOP_K
        top_k = max(0, top_k)
        if not candidates:
            print("🤷 在输出目录中未找到任何可分析的 .png 文件")
            return []

        top = candidates[:top_k]
        print(f"\n🔍 分析完成，以下是可能性最高的 {len(top)} 个结果 (得分越低越可能是正确结果):")
        print("-" * 80)
        for candidate in top:
            print(f"   - 📄 文件: {candidate.filename:<25} | 📉 得分: {candidate.score:.2f}")
        print("-" * 80)
        return top
