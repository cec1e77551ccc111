"""Perceptual-hash-based deduplication."""

from __future__ import annotations

import numbers
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Callable, Iterable, List, Optional

from ..config import ConfigManager
from ..models import ErrorLevel, Photo, ProcessError
from ..utils import image_utils
from ..utils.error_handler import DECODE_FAILED
from ..utils.errors import DecodeError, InvalidArgument
from ..utils.group_ids import GroupIdGenerator
from ..utils.logger import get_logger
from .clustering import forward_cluster
from .exact_deduper import DedupeResult
from .fingerprint import FINGERPRINT_SIZE, generate_fingerprint
from .similarity import similarity

if TYPE_CHECKING:
    from imagehash import ImageHash

REASON_VISUAL = "visual"
DEFAULT_THRESHOLD = 0.85


@dataclass
class VisualDedupeResult(DedupeResult):
    threshold: float = DEFAULT_THRESHOLD
    fingerprints: dict[str, "ImageHash"] = field(default_factory=dict)
    failures: List[ProcessError] = field(default_factory=list)


def validate_threshold(threshold: object) -> float:
    if isinstance(threshold, bool) or not isinstance(threshold, numbers.Real):
        raise InvalidArgument(f"threshold 必須是數值: {threshold!r}")
    if not (0 < threshold <= 1):
        raise InvalidArgument(f"threshold 必須介於 (0, 1]: {threshold!r}")
    return float(threshold)


class VisualDeduper:
    def __init__(
        self,
        config: ConfigManager,
        logger=None,
        group_ids: Optional[Callable[[], str]] = None,
        fingerprinter: Optional[Callable[[Photo], "ImageHash"]] = None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.threshold = validate_threshold(config.get("visual.threshold", DEFAULT_THRESHOLD))
        hash_size = int(config.get("visual.hash_size", FINGERPRINT_SIZE))
        self.parallel_workers = int(config.get("visual.parallel_workers", 0)) or os.cpu_count() or 1
        self.group_prefix = config.get("group_ids.visual_prefix", "similar")
        self.group_ids = group_ids
        self._uses_default_fingerprinter = fingerprinter is None
        self.fingerprinter = fingerprinter or partial(generate_fingerprint, hash_size=hash_size)

    def dedupe(
        self,
        photos: Iterable[Photo],
        threshold: Optional[float] = None,
        progress_callback: Optional[Callable[[int], None]] = None,
    ) -> VisualDedupeResult:
        threshold = validate_threshold(self.threshold if threshold is None else threshold)
        items = list(photos)
        if self._uses_default_fingerprinter:
            image_utils.load_fingerprint_backend()

        fingerprints, failures = self._fingerprint_all(items, progress_callback)
        hashed = [item for item in items if item.id in fingerprints]

        def is_match(anchor: Photo, candidate: Photo) -> bool:
            return similarity(fingerprints[anchor.id], fingerprints[candidate.id]) >= threshold

        groups = forward_cluster(
            hashed,
            is_match,
            self.group_ids or GroupIdGenerator(self.group_prefix),
            REASON_VISUAL,
        )
        for group in groups:
            anchor_hash = fingerprints[group.anchor.id]
            group.scores = {
                item.id: similarity(anchor_hash, fingerprints[item.id]) for item in group.duplicates
            }

        result = VisualDedupeResult(
            groups=groups,
            threshold=threshold,
            fingerprints=fingerprints,
            failures=failures,
        )
        self.logger.info(
            f"相似比對完成: {len(hashed)}/{len(items)} 張可計算指紋, "
            f"{len(groups)} 個群組, {len(result.duplicates)} 張重複 (threshold={threshold})"
        )
        return result

    def _fingerprint_all(
        self,
        items: List[Photo],
        progress_callback: Optional[Callable[[int], None]],
    ) -> tuple[dict[str, "ImageHash"], List[ProcessError]]:
        computed: dict[str, "ImageHash"] = {}
        errors: dict[str, ProcessError] = {}
        processed = 0

        def collect(item: Photo, outcome: "ImageHash | ProcessError") -> None:
            nonlocal processed
            if isinstance(outcome, ProcessError):
                errors[item.id] = outcome
            else:
                computed[item.id] = outcome
            processed += 1
            if progress_callback is not None:
                progress_callback(processed)

        workers = min(self.parallel_workers, len(items))
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_map = {executor.submit(self._fingerprint, item): item for item in items}
                for future in as_completed(future_map):
                    collect(future_map[future], future.result())
        else:
            for item in items:
                collect(item, self._fingerprint(item))

        # rebuild in input order so the result does not depend on worker timing
        fingerprints = {item.id: computed[item.id] for item in items if item.id in computed}
        failures = [errors[item.id] for item in items if item.id in errors]
        return fingerprints, failures

    def _fingerprint(self, item: Photo) -> "ImageHash | ProcessError":
        try:
            return self.fingerprinter(item)
        except DecodeError as exc:
            self.logger.warning(f"無法計算指紋，略過相似比對: {item.name} ({exc})")
            return ProcessError(
                code=DECODE_FAILED,
                level=ErrorLevel.RECOVERABLE,
                message=str(exc),
                photo_id=item.id,
            )
