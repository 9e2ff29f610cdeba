# -*- coding: utf-8 -*-
"""
主应用程序入口文件
文件路径: main.py

未安装时也可以直接运行: python main.py [图像路径] [-k 0-10 -a 1 -b 1]
"""

import os
import sys

# 添加 src 目录到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from arnold_sweep.cli import main


if __name__ == "__main__":
    sys.exit(main())
