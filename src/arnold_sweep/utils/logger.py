# -*- coding: utf-8 -*-
"""
日志工具
文件路径: src/arnold_sweep/utils/logger.py

控制台进度信息直接 print，诊断信息 (单个候选的失败原因、线程数等) 走 logging。
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logger(name="arnold_sweep", level=logging.WARNING):
    """
    获取并配置日志记录器
    参数:
        name: 日志记录器名称
        level: 日志级别
    返回:
        logging.Logger
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
