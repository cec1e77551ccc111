from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from photo_dedupe.config import ConfigManager
from photo_dedupe.core import ContentDeduper
from photo_dedupe.models import Photo
from photo_dedupe.utils.errors import InvalidArgument


def _make_photo(photo_id: str, pixel_source) -> Photo:
    return Photo(
        id=photo_id,
        name=f"{photo_id}.jpg",
        size_bytes=1000,
        mime_type="image/jpeg",
        created_at=datetime(2024, 1, 1),
        pixel_source=pixel_source,
    )


def test_content_deduper_groups_identical_bytes(tmp_path: Path) -> None:
    original = tmp_path / "original.jpg"
    original.write_bytes(b"same-bytes")
    photos = [
        _make_photo("a", original),
        _make_photo("b", b"other-bytes"),
        _make_photo("c", b"same-bytes"),
    ]

    result = ContentDeduper(ConfigManager()).dedupe(photos)

    assert [group.photo_ids for group in result.groups] == [["a", "c"]]
    assert result.groups[0].group_id == "content-0001"
    assert result.digests["a"] == result.digests["c"]
    assert result.failures == []


def test_content_deduper_skips_unreadable_sources(tmp_path: Path) -> None:
    photos = [
        _make_photo("image", Image.new("RGB", (4, 4))),
        _make_photo("missing", tmp_path / "missing.jpg"),
        _make_photo("ok", b"bytes"),
    ]

    result = ContentDeduper(ConfigManager()).dedupe(photos)

    assert result.groups == []
    assert [failure.photo_id for failure in result.failures] == ["image", "missing"]
    assert all(failure.code == "W-102" for failure in result.failures)


def test_content_deduper_rejects_unknown_algorithm() -> None:
    config = ConfigManager()
    config.set("content_hash.algorithm", "not-a-hash")
    with pytest.raises(InvalidArgument):
        ContentDeduper(config)
