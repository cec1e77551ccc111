"""核心流程模組。"""

from .aggregator import AggregateResult, DuplicateAggregator, discard_photo
from .clustering import forward_cluster
from .content_deduper import ContentDeduper, ContentDedupeResult
from .exact_deduper import DedupeResult, ExactDeduper
from .fingerprint import FINGERPRINT_SIZE, compute_average_hash, generate_fingerprint
from .similarity import hamming_distance, similarity
from .visual_deduper import VisualDedupeResult, VisualDeduper, validate_threshold

__all__ = [
    "AggregateResult",
    "ContentDeduper",
    "ContentDedupeResult",
    "DedupeResult",
    "DuplicateAggregator",
    "ExactDeduper",
    "FINGERPRINT_SIZE",
    "VisualDedupeResult",
    "VisualDeduper",
    "compute_average_hash",
    "discard_photo",
    "forward_cluster",
    "generate_fingerprint",
    "hamming_distance",
    "similarity",
    "validate_threshold",
]
