# -*- coding: utf-8 -*-
"""
爆破参数定义
文件路径: src/arnold_sweep/sweep/params.py

包含:
1. TransformParams: 单个参数组合 (k, a, b)
2. ParameterRange: 闭区间整数范围
3. SearchSpace: 三个范围的笛卡尔积
4. 候选文件名的生成与解析
"""

import itertools
import os
import re
from collections import namedtuple

from arnold_sweep.config import Config

TransformParams = namedtuple("TransformParams", ["k", "a", "b"])

_RANGE_PATTERN = re.compile(r"^\s*([+-]?\d+)\s*-\s*([+-]?\d+)\s*$")
_FILENAME_PATTERN = re.compile(r"^(\d+)_(-?\d+)_(-?\d+)$")


class ParameterRange:
    """
    闭区间 [lower, upper]，单个数值 v 等价于 [v, v]
    """

    def __init__(self, lower, upper=None):
        if upper is None:
            upper = lower
        lower, upper = int(lower), int(upper)
        if lower > upper:
            raise ValueError(f"范围下界 {lower} 大于上界 {upper}")
        self.lower = lower
        self.upper = upper

    @classmethod
    def parse(cls, text):
        """
        解析 '8' 或 '0-10' 形式的文本 (负数写作 '-3--1')
        """
        text = text.strip()
        try:
            return cls(int(text))
        except ValueError:
            pass

        match = _RANGE_PATTERN.match(text)
        if match is None:
            raise ValueError(f"格式错误: {text!r}，请输入单个数字 (如 '8') 或范围 (如 '0-10')")
        return cls(int(match.group(1)), int(match.group(2)))

    def __iter__(self):
        return iter(range(self.lower, self.upper + 1))

    def __len__(self):
        return self.upper - self.lower + 1

    def __eq__(self, other):
        if not isinstance(other, ParameterRange):
            return NotImplemented
        return (self.lower, self.upper) == (other.lower, other.upper)

    def __repr__(self):
        return f"ParameterRange({self.lower}, {self.upper})"

    def __str__(self):
        if self.lower == self.upper:
            return str(self.lower)
        return f"{self.lower}-{self.upper}"


class SearchSpace:
    """
    参数空间: k → a → b 嵌套遍历 (由外到内)
    """

    def __init__(self, k_range, a_range, b_range):
        if k_range.lower < 0:
            raise ValueError(f"变换次数不能为负数: {k_range}")
        self.k_range = k_range
        self.a_range = a_range
        self.b_range = b_range

    def __iter__(self):
        for k, a, b in itertools.product(self.k_range, self.a_range, self.b_range):
            yield TransformParams(k, a, b)

    def __len__(self):
        return len(self.k_range) * len(self.a_range) * len(self.b_range)

    def __repr__(self):
        return f"SearchSpace(k={self.k_range}, a={self.a_range}, b={self.b_range})"


def candidate_filename(params, ext=None):
    """
    候选图像文件名，如 (3, 1, -2) -> '3_1_-2.png'
    """
    return f"{params.k}_{params.a}_{params.b}{ext or Config.CANDIDATE_EXT}"


def parse_candidate_filename(filename):
    """
    从候选文件名还原参数，不符合命名规则时返回 None
    """
    stem = os.path.splitext(os.path.basename(filename))[0]
    match = _FILENAME_PATTERN.match(stem)
    if match is None:
        return None
    return TransformParams(*(int(g) for g in match.groups()))
