import io
import sys
from datetime import datetime
from pathlib import Path

import pytest
from PIL import Image

from photo_dedupe.core import FINGERPRINT_SIZE, compute_average_hash, generate_fingerprint
from photo_dedupe.models import Photo
from photo_dedupe.utils import image_utils
from photo_dedupe.utils.errors import DecodeError, UnavailableError


def _make_photo(pixel_source, photo_id: str = "p1", name: str = "img.png") -> Photo:
    return Photo(
        id=photo_id,
        name=name,
        size_bytes=1000,
        mime_type="image/png",
        created_at=datetime(2024, 1, 1),
        pixel_source=pixel_source,
    )


def _split_image(top=(255, 255, 255), bottom=(0, 0, 0), size=64) -> Image.Image:
    image = Image.new("RGB", (size, size), color=bottom)
    image.paste(Image.new("RGB", (size, size // 2), color=top), (0, 0))
    return image


def test_fingerprint_has_fixed_length() -> None:
    fingerprint = generate_fingerprint(_make_photo(_split_image(size=200)))
    assert fingerprint.hash.size == FINGERPRINT_SIZE * FINGERPRINT_SIZE == 1024


def test_fingerprint_bits_are_row_major() -> None:
    bits = generate_fingerprint(_make_photo(_split_image())).hash.flatten()
    assert bits[:512].all()
    assert not bits[512:].any()


def test_uniform_image_has_no_bits_set() -> None:
    bits = generate_fingerprint(_make_photo(Image.new("RGB", (50, 40), (90, 10, 200)))).hash
    assert not bits.any()


def test_luminance_uses_weighted_channels() -> None:
    # red (76) is darker than green (150) after weighting
    image = _split_image(top=(255, 0, 0), bottom=(0, 255, 0))
    bits = compute_average_hash(image).hash.flatten()
    assert not bits[:512].any()
    assert bits[512:].all()


def test_fingerprint_is_deterministic_across_source_kinds(tmp_path: Path) -> None:
    image = _split_image(size=96)
    path = tmp_path / "split.png"
    image.save(path, "png")
    buffer = io.BytesIO()
    image.save(buffer, "png")

    from_path = generate_fingerprint(_make_photo(path))
    from_str = generate_fingerprint(_make_photo(str(path)))
    from_bytes = generate_fingerprint(_make_photo(buffer.getvalue()))
    from_image = generate_fingerprint(_make_photo(image))
    from_file = generate_fingerprint(_make_photo(io.BytesIO(buffer.getvalue())))

    assert from_path == from_str == from_bytes == from_image == from_file
    assert generate_fingerprint(_make_photo(path)) == from_path


def test_fingerprint_does_not_mutate_photo() -> None:
    photo = _make_photo(_split_image())
    generate_fingerprint(photo)
    assert photo.fingerprint is None
    assert photo.is_duplicate is False


def test_undecodable_source_raises_decode_error() -> None:
    with pytest.raises(DecodeError) as excinfo:
        generate_fingerprint(_make_photo(b"definitely not an image", photo_id="broken"))
    assert excinfo.value.photo_id == "broken"


def test_missing_file_raises_decode_error(tmp_path: Path) -> None:
    with pytest.raises(DecodeError):
        generate_fingerprint(_make_photo(tmp_path / "missing.png"))


def test_missing_pixel_source_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        generate_fingerprint(_make_photo(None))
    with pytest.raises(DecodeError):
        generate_fingerprint(_make_photo(12345))


def test_missing_backend_raises_unavailable_error(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "imagehash", None)
    with pytest.raises(UnavailableError):
        image_utils.load_fingerprint_backend()
    with pytest.raises(UnavailableError):
        generate_fingerprint(_make_photo(_split_image()))
