# arnold_sweep 包初始化文件

from .config import Config
from .scrambling import ArnoldScrambler, arnold_decode, arnold_encode, transform_once
from .sweep import ParameterRange, SearchSpace, SweepOrchestrator, SweepReport, TransformParams
from .analysis import ResultRanker, ScoredCandidate, calculate_smoothness_score

__version__ = "0.1.0"

__all__ = ['Config', 'ArnoldScrambler', 'arnold_decode', 'arnold_encode', 'transform_once',
           'ParameterRange', 'SearchSpace', 'SweepOrchestrator', 'SweepReport', 'TransformParams',
           'ResultRanker', 'ScoredCandidate', 'calculate_smoothness_score']
