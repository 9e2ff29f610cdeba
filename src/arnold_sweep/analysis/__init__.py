# analysis模块初始化文件

from .smoothness import calculate_smoothness_score
from .ranker import ResultRanker, ScoredCandidate

__all__ = ['calculate_smoothness_score', 'ResultRanker', 'ScoredCandidate']
