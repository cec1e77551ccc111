"""Average-hash fingerprints over a 32x32 luminance grid."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image

from ..models import Photo
from ..utils import image_utils
from ..utils.errors import DecodeError

if TYPE_CHECKING:
    from imagehash import ImageHash

FINGERPRINT_SIZE = 32
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def compute_average_hash(image: Image.Image, hash_size: int = FINGERPRINT_SIZE) -> "ImageHash":
    """Fingerprint an already decoded RGB image.

    The image is box-resampled to ``hash_size`` x ``hash_size``, each sample is
    reduced to integer luminance (rounded half up), and bit ``i`` is set when
    sample ``i`` is strictly brighter than the mean. Bits are row-major.
    """
    imagehash, np = image_utils.load_fingerprint_backend()

    reduced = image.resize((hash_size, hash_size), Image.Resampling.BOX)
    pixels = np.asarray(reduced, dtype=np.float64)
    luminance = np.floor(pixels @ np.asarray(LUMA_WEIGHTS) + 0.5)
    return imagehash.ImageHash(luminance > luminance.mean())


def generate_fingerprint(photo: Photo, hash_size: int = FINGERPRINT_SIZE) -> "ImageHash":
    """Decode ``photo.pixel_source`` and return its fingerprint.

    Raises ``DecodeError`` when the source cannot be decoded and
    ``UnavailableError`` when the hashing backend is missing. The photo record
    is not modified.
    """
    image_utils.load_fingerprint_backend()
    try:
        image = image_utils.load_rgb_image(photo.pixel_source)
    except DecodeError as exc:
        raise DecodeError(f"{photo.name}: {exc}", photo_id=photo.id) from exc
    return compute_average_hash(image, hash_size)
