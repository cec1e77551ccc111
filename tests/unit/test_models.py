from datetime import datetime

import imagehash
import numpy as np

from photo_dedupe.models import (
    ErrorLevel,
    Photo,
    PhotoAnnotation,
    ProcessError,
    apply_annotations,
)


def _make_photo(photo_id: str, name: str = "a.jpg", size_bytes: int = 1000) -> Photo:
    return Photo(
        id=photo_id,
        name=name,
        size_bytes=size_bytes,
        mime_type="image/jpeg",
        created_at=datetime(2024, 7, 15, 14, 30),
    )


def test_photo_defaults_and_serialization() -> None:
    photo = _make_photo("p1")
    assert photo.is_duplicate is False
    assert photo.group is None
    assert photo.similarity_score is None

    photo.fingerprint = imagehash.ImageHash(np.ones((8, 8), dtype=bool))
    data = photo.to_dict()
    assert data["id"] == "p1"
    assert data["created_at"] == "2024-07-15T14:30:00"
    assert data["fingerprint"] == "ffffffffffffffff"


def test_apply_annotations_returns_copies() -> None:
    photos = [_make_photo("p1"), _make_photo("p2")]
    annotated = apply_annotations(
        photos,
        [PhotoAnnotation(photo_id="p2", group="exact-0001", reason="exact")],
    )

    assert annotated[1].is_duplicate is True
    assert annotated[1].group == "exact-0001"
    assert annotated[0].is_duplicate is False
    assert photos[1].is_duplicate is False
    assert annotated[0] is not photos[0]


def test_apply_annotations_later_pass_keeps_duplicate_flag_and_score() -> None:
    photos = [_make_photo("p1")]
    annotated = apply_annotations(
        photos,
        [
            PhotoAnnotation(photo_id="p1", group="similar-0001", reason="visual", similarity_score=0.9),
            PhotoAnnotation(photo_id="p1", group="content-0001", reason="content"),
        ],
    )

    assert annotated[0].is_duplicate is True
    assert annotated[0].group == "content-0001"
    assert annotated[0].similarity_score == 0.9


def test_error_record_levels() -> None:
    error = ProcessError(
        code="W-101",
        level=ErrorLevel.RECOVERABLE,
        message="cannot decode",
        photo_id="p9",
    )
    data = error.to_dict()
    assert data["level"] == "W"
    assert data["photo_id"] == "p9"
