"""影像解碼工具。"""

from __future__ import annotations

import io
import os
from functools import lru_cache
from typing import Any

from PIL import Image, ImageOps

from .errors import DecodeError, UnavailableError

_DECODE_ERRORS = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


@lru_cache(maxsize=None)
def _register_heif_opener() -> bool:
    try:
        from pillow_heif import register_heif_opener

        register_heif_opener()
    except ImportError:
        return False
    return True


def load_fingerprint_backend():
    """Import the libraries the fingerprint generator depends on.

    Raises ``UnavailableError`` when they are missing from the environment.
    """
    try:
        import imagehash
        import numpy
    except ImportError as exc:
        raise UnavailableError(f"無法載入指紋計算後端: {exc}") from exc
    return imagehash, numpy


def _as_openable(source: Any):
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if isinstance(source, (str, os.PathLike)):
        return source
    if hasattr(source, "read"):
        return source
    raise DecodeError(f"不支援的像素來源類型: {type(source).__name__}")


def _normalize(image: Image.Image) -> Image.Image:
    return ImageOps.exif_transpose(image).convert("RGB")


def load_rgb_image(source: Any) -> Image.Image:
    """Decode ``source`` into a private, fully loaded RGB image.

    The returned image never shares pixel buffers with ``source``, so callers on
    different threads can work on it freely.
    """
    if source is None:
        raise DecodeError("沒有像素來源")
    _register_heif_opener()
    try:
        if isinstance(source, Image.Image):
            return _normalize(source)
        with Image.open(_as_openable(source)) as image:
            image.load()
            return _normalize(image)
    except _DECODE_ERRORS as exc:
        raise DecodeError(f"無法解碼影像: {exc}") from exc
