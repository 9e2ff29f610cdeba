# -*- coding: utf-8 -*-
"""
图像处理模块
文件路径: src/arnold_sweep/img_process.py

提供与参数爆破相关的图像读写功能，包括：
1. 源图像读取 (任意格式统一转为 RGB)
2. 候选图像保存与读取 (无损 PNG)
3. 输出目录准备
"""

import os

import cv2
import numpy as np
from PIL import Image

from arnold_sweep.config import Config


class ImageProcessor:
    """
    图像处理类，内存中统一使用 (H, W, 3) RGB uint8 矩阵
    """

    def read_image(self, image_path):
        """
        读取源图像
        参数:
            image_path: 图像路径
        返回:
            numpy.ndarray: 图像矩阵 (H, W, 3) RGB格式
        """
        if not os.path.exists(image_path):
            raise FileNotFoundError(f"图像文件不存在: {image_path}")

        try:
            with Image.open(image_path) as img:
                return np.array(img.convert('RGB'), dtype=np.uint8)
        except OSError as e:
            raise ValueError(f"无法读取图像文件: {image_path} ({e})") from e

    def save_image(self, image, output_path):
        """
        保存候选图像，失败时抛出 OSError
        参数:
            image: 图像矩阵 (H, W, 3) RGB格式
            output_path: 输出路径
        """
        bgr = cv2.cvtColor(np.ascontiguousarray(image), cv2.COLOR_RGB2BGR)
        try:
            ok = cv2.imwrite(str(output_path), bgr)
        except cv2.error as e:
            raise OSError(f"无法保存图像: {output_path} ({e})") from e
        if not ok:
            raise OSError(f"无法保存图像: {output_path}")

    def load_candidate(self, image_path):
        """
        读取候选图像
        返回:
            numpy.ndarray (H, W, 3) RGB格式；文件损坏或无法读取时返回 None
        """
        img = cv2.imread(str(image_path), cv2.IMREAD_COLOR)
        if img is None:
            return None
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)

    def prepare_output_dir(self, image_path, output_dir=None):
        """
        创建输出目录，默认位于源图像所在目录下
        返回:
            str: 输出目录路径
        """
        if output_dir is None:
            parent = os.path.dirname(os.path.abspath(image_path))
            output_dir = os.path.join(parent, Config.OUTPUT_DIR_NAME)
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise OSError(f"无法创建输出目录: {output_dir} ({e})") from e
        return output_dir

    def get_image_info(self, image):
        """
        获取图像信息
        """
        h, w = image.shape[:2]
        channels = image.shape[2] if len(image.shape) > 2 else 1

        return {
            'height': h,
            'width': w,
            'channels': channels,
            'dtype': str(image.dtype)
        }
