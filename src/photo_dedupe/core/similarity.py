"""Hamming similarity between fingerprints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..utils.errors import IncomparableError

if TYPE_CHECKING:
    from imagehash import ImageHash


def bit_length(fingerprint: "ImageHash") -> int:
    return int(fingerprint.hash.size)


def hamming_distance(a: "ImageHash", b: "ImageHash") -> int:
    if bit_length(a) != bit_length(b):
        raise IncomparableError(
            f"指紋長度不同: {bit_length(a)} != {bit_length(b)}"
        )
    return int((a.hash.flatten() != b.hash.flatten()).sum())


def similarity(a: "ImageHash", b: "ImageHash") -> float:
    """Return ``1 - hamming / bits``, always within [0, 1]."""
    return 1.0 - hamming_distance(a, b) / bit_length(a)
