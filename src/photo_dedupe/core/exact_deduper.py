"""Metadata-based duplicate detection (size proximity or identical name)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..config import ConfigManager
from ..models import DuplicateGroup, Photo, PhotoAnnotation
from ..utils.group_ids import GroupIdGenerator
from ..utils.logger import get_logger
from .clustering import forward_cluster

REASON_EXACT = "exact"


@dataclass
class DedupeResult:
    groups: List[DuplicateGroup]

    @property
    def duplicates(self) -> List[Photo]:
        return [item for group in self.groups for item in group.duplicates]

    @property
    def annotations(self) -> List[PhotoAnnotation]:
        return [annotation for group in self.groups for annotation in group.annotations()]


class ExactDeduper:
    def __init__(
        self,
        config: ConfigManager,
        logger=None,
        group_ids: Optional[Callable[[], str]] = None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.size_tolerance = float(config.get("exact.size_tolerance", 0.10))
        self.match_names = bool(config.get("exact.match_names", True))
        self.group_prefix = config.get("group_ids.exact_prefix", "exact")
        self.group_ids = group_ids

    def dedupe(self, photos: Iterable[Photo]) -> DedupeResult:
        items = list(photos)
        groups = forward_cluster(
            items,
            self._is_match,
            self.group_ids or GroupIdGenerator(self.group_prefix),
            REASON_EXACT,
        )
        result = DedupeResult(groups=groups)
        self.logger.info(
            f"metadata 比對完成: {len(items)} 張照片, {len(groups)} 個群組, "
            f"{len(result.duplicates)} 張重複"
        )
        return result

    def _is_match(self, anchor: Photo, candidate: Photo) -> bool:
        if self.match_names and anchor.name == candidate.name:
            return True
        return self._sizes_close(anchor.size_bytes, candidate.size_bytes)

    def _sizes_close(self, anchor_size: int, candidate_size: int) -> bool:
        # relative to the anchor; an empty anchor only matches another empty file
        if anchor_size <= 0:
            return anchor_size == candidate_size
        return abs(anchor_size - candidate_size) / anchor_size < self.size_tolerance
