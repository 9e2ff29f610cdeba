# -*- coding: utf-8 -*-
"""
控制台交互
文件路径: src/arnold_sweep/console.py

爆破核心不直接读取终端，参数范围通过 "参数来源" 对象提供:
- PromptParameterSource: 交互式输入，格式错误时重新提示
- StaticParameterSource: 命令行参数等固定文本
"""

import os

from tqdm import tqdm

from arnold_sweep.sweep.params import ParameterRange, SearchSpace

PROMPTS = {
    "k": "   - 变换次数 (例如 '8' 或 '0-10'): ",
    "a": "   - 参数 a   (例如 '8' 或 '0-10'): ",
    "b": "   - 参数 b   (例如 '8' 或 '0-10'): ",
}


def parse_path_input(text):
    """
    规范化用户输入的路径: 去除空白和引号，反斜杠统一为正斜杠
    """
    dequoted = text.strip().strip("\"'")
    return dequoted.replace("\\", "/")


def prompt_image_path(input_func=None):
    """
    循环提示直到输入的路径存在
    """
    input_func = input_func or input
    while True:
        path = parse_path_input(input_func("📂 请输入图片路径: "))
        if path and os.path.exists(path):
            return path
        print(f"❌ 文件不存在: {path!r}")


class PromptParameterSource:
    """
    交互式参数来源
    known 中已给出的范围 (如命令行参数) 直接使用，只提示缺少的部分
    """

    def __init__(self, input_func=None, known=None):
        self.input_func = input_func or input
        self.known = {name: text for name, text in (known or {}).items() if text is not None}

    def read_range(self, name):
        if name in self.known:
            return ParameterRange.parse(str(self.known[name]))
        while True:
            try:
                value = ParameterRange.parse(self.input_func(PROMPTS[name]))
            except ValueError:
                print("🤔 格式错误，请输入单个数字 (如 '8') 或范围 (如 '0-10')")
                continue
            if name == "k" and value.lower < 0:
                print("🤔 变换次数不能为负数")
                continue
            return value

    def search_space(self):
        if len(self.known) < len(PROMPTS):
            print("🔢 请输入要爆破的参数范围")
        return SearchSpace(self.read_range("k"), self.read_range("a"), self.read_range("b"))


class StaticParameterSource:
    """
    固定文本参数来源 (命令行参数)，格式错误直接抛出 ValueError
    """

    def __init__(self, k, a, b):
        self.texts = {"k": k, "a": a, "b": b}

    def read_range(self, name):
        return ParameterRange.parse(str(self.texts[name]))

    def search_space(self):
        return SearchSpace(self.read_range("k"), self.read_range("a"), self.read_range("b"))


class TqdmProgress:
    """
    把 progress(completed, total) 回调转给 tqdm 进度条
    """

    def __init__(self, desc, colour=None):
        self.desc = desc
        self.colour = colour
        self.bar = None

    def __call__(self, completed, total):
        if self.bar is None:
            self.bar = tqdm(total=total, desc=self.desc, unit="img", colour=self.colour)
        self.bar.update(completed - self.bar.n)

    def close(self):
        if self.bar is not None:
            self.bar.close()
            self.bar = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
