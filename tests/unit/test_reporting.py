from datetime import datetime

from photo_dedupe.models import Photo
from photo_dedupe.utils import reporting


def _make_photo(photo_id: str, size_bytes: int, group: str | None = None) -> Photo:
    return Photo(
        id=photo_id,
        name=f"{photo_id}.jpg",
        size_bytes=size_bytes,
        mime_type="image/jpeg",
        created_at=datetime(2024, 1, 1),
        is_duplicate=group is not None,
        group=group,
    )


def test_format_file_size() -> None:
    assert reporting.format_file_size(0) == "0 Bytes"
    assert reporting.format_file_size(500) == "500 Bytes"
    assert reporting.format_file_size(1024) == "1 KB"
    assert reporting.format_file_size(1536) == "1.5 KB"
    assert reporting.format_file_size(5 * 1024 * 1024) == "5 MB"
    assert reporting.format_file_size(1024**3) == "1 GB"
    assert reporting.format_file_size(3 * 1024**4) == "3072 GB"


def test_group_duplicates_keeps_detection_order() -> None:
    duplicates = [
        _make_photo("b", 10, "exact-0001"),
        _make_photo("d", 10, "similar-0001"),
        _make_photo("c", 10, "exact-0001"),
    ]
    groups = reporting.group_duplicates(duplicates)

    assert list(groups) == ["exact-0001", "similar-0001"]
    assert [item.id for item in groups["exact-0001"]] == ["b", "c"]


def test_build_photo_stats() -> None:
    photos = [_make_photo("a", 100), _make_photo("b", 200, "g"), _make_photo("c", 300, "g")]
    discarded = [_make_photo("x", 1000)]

    stats = reporting.build_photo_stats(photos, [photos[1], photos[2], photos[1]], discarded)

    assert stats.total_photos == 3
    assert stats.duplicates == 2
    assert stats.space_freed_bytes == 1000
    assert stats.processed == 1
    assert round(stats.duplicate_percentage, 2) == 66.67
    assert round(stats.completion_percentage, 2) == 33.33


def test_empty_stats_have_zero_percentages() -> None:
    stats = reporting.build_photo_stats([], [])
    assert stats.completion_percentage == 0.0
    assert stats.duplicate_percentage == 0.0
