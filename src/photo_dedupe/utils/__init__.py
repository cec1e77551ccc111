"""工具模組。"""

from . import hash_calc, image_utils, reporting
from .cancel import CancelledError, CancellationToken
from .errors import DecodeError, IncomparableError, InvalidArgument, UnavailableError

__all__ = [
    "hash_calc",
    "image_utils",
    "reporting",
    "CancelledError",
    "CancellationToken",
    "DecodeError",
    "IncomparableError",
    "InvalidArgument",
    "UnavailableError",
]
