"""Rumpex — 奶牛臀角图像分析中继服务。"""

__version__ = "0.1.0"
