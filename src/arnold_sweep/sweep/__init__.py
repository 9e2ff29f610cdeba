# sweep模块初始化文件

from .params import TransformParams, ParameterRange, SearchSpace, candidate_filename, parse_candidate_filename
from .orchestrator import SweepOrchestrator, SweepReport

__all__ = ['TransformParams', 'ParameterRange', 'SearchSpace', 'candidate_filename',
           'parse_candidate_filename', 'SweepOrchestrator', 'SweepReport']
