# scrambling模块初始化文件

from .transform import transform_once, inverse_index_map, flat_index_map, apply_index_map, check_square
from .scrambler import ArnoldScrambler, arnold_decode, arnold_encode

__all__ = ['transform_once', 'inverse_index_map', 'flat_index_map', 'apply_index_map', 'check_square',
           'ArnoldScrambler', 'arnold_decode', 'arnold_encode']
