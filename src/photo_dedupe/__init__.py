"""photo-dedupe：照片重複偵測引擎。"""

__version__ = "0.1.0"
