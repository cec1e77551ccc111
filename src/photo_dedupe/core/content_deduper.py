"""Byte-exact deduplication on content hashes of the pixel source."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..config import ConfigManager
from ..models import ErrorLevel, Photo, ProcessError
from ..utils import hash_calc
from ..utils.cancel import CancellationToken
from ..utils.error_handler import CONTENT_READ_FAILED
from ..utils.errors import InvalidArgument
from ..utils.group_ids import GroupIdGenerator
from ..utils.logger import get_logger
from .clustering import forward_cluster
from .exact_deduper import DedupeResult

REASON_CONTENT = "content"


@dataclass
class ContentDedupeResult(DedupeResult):
    digests: dict[str, str] = field(default_factory=dict)
    failures: List[ProcessError] = field(default_factory=list)


class ContentDeduper:
    def __init__(
        self,
        config: ConfigManager,
        logger=None,
        group_ids: Optional[Callable[[], str]] = None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.algorithm = str(config.get("content_hash.algorithm", "sha256")).lower()
        if self.algorithm not in hashlib.algorithms_available:
            raise InvalidArgument(f"不支援的 hash 演算法: {self.algorithm}")
        self.chunk_size_kb = int(config.get("content_hash.chunk_size_kb", 1024))
        self.group_prefix = config.get("group_ids.content_prefix", "content")
        self.group_ids = group_ids

    def dedupe(
        self,
        photos: Iterable[Photo],
        cancel_token: Optional[CancellationToken] = None,
    ) -> ContentDedupeResult:
        items = list(photos)
        digests: dict[str, str] = {}
        failures: List[ProcessError] = []
        for item in items:
            try:
                digests[item.id] = hash_calc.compute_content_hash(
                    item.pixel_source,
                    algorithm=self.algorithm,
                    chunk_size_kb=self.chunk_size_kb,
                    cancel_token=cancel_token,
                )
            except (OSError, TypeError) as exc:
                self.logger.warning(f"無法計算內容 hash: {item.name} ({exc})")
                failures.append(
                    ProcessError(
                        code=CONTENT_READ_FAILED,
                        level=ErrorLevel.RECOVERABLE,
                        message=str(exc),
                        photo_id=item.id,
                    )
                )

        hashed = [item for item in items if item.id in digests]
        groups = forward_cluster(
            hashed,
            lambda anchor, candidate: digests[anchor.id] == digests[candidate.id],
            self.group_ids or GroupIdGenerator(self.group_prefix),
            REASON_CONTENT,
        )
        self.logger.info(f"內容 hash 比對完成: {len(groups)} 個群組")
        return ContentDedupeResult(groups=groups, digests=digests, failures=failures)
