"""Content hash helpers for byte-exact duplicate detection."""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Iterator, Optional

from .cancel import CancelledError, CancellationToken


def iter_source_chunks(source: Any, chunk_size: int) -> Iterator[bytes]:
    if isinstance(source, (bytes, bytearray, memoryview)):
        data = memoryview(source).cast("B")
        for offset in range(0, len(data), chunk_size):
            yield bytes(data[offset : offset + chunk_size])
        return
    if isinstance(source, (str, os.PathLike)):
        with Path(source).open("rb") as handle:
            yield from iter(lambda: handle.read(chunk_size), b"")
        return
    if hasattr(source, "read"):
        if hasattr(source, "seek"):
            source.seek(0)
        yield from iter(lambda: source.read(chunk_size), b"")
        return
    raise TypeError(f"無法讀取原始位元組: {type(source).__name__}")


def compute_content_hash(
    source: Any,
    algorithm: str = "sha256",
    chunk_size_kb: int = 1024,
    cancel_token: Optional[CancellationToken] = None,
) -> str:
    """Hash the raw encoded bytes of a pixel source.

    Raises ``ValueError`` for an unknown algorithm, ``TypeError`` for a source
    with no raw bytes (e.g. an in-memory ``PIL.Image``), ``OSError`` when the
    file cannot be read, and ``CancelledError`` when ``cancel_token`` fires.
    """
    hasher = hashlib.new(algorithm)
    for chunk in iter_source_chunks(source, chunk_size_kb * 1024):
        if cancel_token is not None and cancel_token.is_cancelled():
            raise CancelledError("已取消 hash 計算")
        hasher.update(chunk)
    return hasher.hexdigest()
