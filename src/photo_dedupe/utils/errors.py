"""引擎錯誤類型。"""

from __future__ import annotations


class DecodeError(Exception):
    """照片的像素來源無法解碼。"""

    def __init__(self, message: str, photo_id: str | None = None) -> None:
        super().__init__(message)
        self.photo_id = photo_id


class UnavailableError(Exception):
    """執行環境缺少指紋計算所需的解碼後端。"""


class InvalidArgument(ValueError):
    """呼叫端傳入超出範圍的參數。"""


class IncomparableError(RuntimeError):
    """兩個指紋長度不同，無法比較。"""
