"""Run every detector over a photo collection and merge their results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Optional

from ..config import ConfigManager
from ..models import (
    DuplicateGroup,
    Photo,
    PhotoAnnotation,
    ProcessError,
    ProgressEvent,
    ProgressEventType,
    apply_annotations,
)
from ..utils.cancel import CancelledError, CancellationToken
from ..utils.error_handler import PERCEPTUAL_UNAVAILABLE, RUN_CANCELLED, ErrorHandler
from ..utils.errors import InvalidArgument, UnavailableError
from ..utils.logger import get_logger
from .content_deduper import ContentDeduper
from .exact_deduper import ExactDeduper
from .visual_deduper import VisualDeduper, validate_threshold

PHASE_EXACT = "exact"
PHASE_VISUAL = "visual"
PHASE_CONTENT = "content"

PROGRESS_AFTER_PHASE = {
    PHASE_EXACT: 25,
    PHASE_VISUAL: 90,
    PHASE_CONTENT: 100,
}

STATUS_COMPLETE = "complete"
STATUS_PARTIAL = "partial"
STATUS_SKIPPED = "skipped"
STATUS_NOT_RUN = "not_run"


@dataclass
class AggregateResult:
    photos: List[Photo]
    duplicates: List[Photo]
    groups: List[DuplicateGroup]
    space_savings_bytes: int
    perceptual_status: str = STATUS_NOT_RUN
    cancelled: bool = False
    errors: List[ProcessError] = field(default_factory=list)
    completed_phases: List[str] = field(default_factory=list)

    @property
    def duplicate_ids(self) -> list[str]:
        return [item.id for item in self.duplicates]


class _ProgressReporter:
    def __init__(
        self,
        progress_callback: Optional[Callable[[int], None]],
        event_callback: Optional[Callable[[ProgressEvent], None]],
    ) -> None:
        self.progress_callback = progress_callback
        self.event_callback = event_callback
        self.percent = 0
        self._reported: Optional[int] = None

    def advance(self, percent: int) -> None:
        self.percent = max(self.percent, min(100, percent))
        if self.progress_callback is not None and self.percent != self._reported:
            self._reported = self.percent
            self.progress_callback(self.percent)

    def emit(self, event_type: ProgressEventType, phase_name: Optional[str] = None, **kwargs) -> None:
        if self.event_callback is None:
            return
        self.event_callback(
            ProgressEvent(event_type=event_type, percent=self.percent, phase_name=phase_name, **kwargs)
        )


class DuplicateAggregator:
    def __init__(
        self,
        config: ConfigManager,
        logger=None,
        fingerprinter=None,
    ) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.visual_enabled = bool(config.get("visual.enabled", True))
        self.content_enabled = bool(config.get("content_hash.enabled", False))
        self.exact_deduper = ExactDeduper(config, self.logger)
        self.visual_deduper = VisualDeduper(config, self.logger, fingerprinter=fingerprinter)
        self.content_deduper = ContentDeduper(config, self.logger) if self.content_enabled else None

    def aggregate(
        self,
        photos: Iterable[Photo],
        *,
        threshold: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
        progress_callback: Optional[Callable[[int], None]] = None,
        event_callback: Optional[Callable[[ProgressEvent], None]] = None,
        stage_callback: Optional[Callable[[str], None]] = None,
        log_callback: Optional[Callable[[str], None]] = None,
    ) -> AggregateResult:
        if threshold is not None:
            threshold = validate_threshold(threshold)
        items = list(photos)
        ids = [item.id for item in items]
        if len(set(ids)) != len(ids):
            raise InvalidArgument("照片 id 必須唯一")

        stage_callback = stage_callback or (lambda _message: None)
        log_callback = log_callback or (lambda _message: None)
        reporter = _ProgressReporter(progress_callback, event_callback)
        handler = ErrorHandler()

        annotations: List[PhotoAnnotation] = []
        fingerprints: dict = {}
        groups: List[DuplicateGroup] = []
        follower_order: List[str] = []
        completed: List[str] = []
        perceptual_status = STATUS_NOT_RUN
        cancelled = False

        def record(phase: str, phase_groups: List[DuplicateGroup]) -> None:
            groups.extend(phase_groups)
            for group in phase_groups:
                annotations.extend(group.annotations())
                follower_order.extend(item.id for item in group.duplicates)
            completed.append(phase)

        def check_cancelled(next_phase: str) -> bool:
            if cancel_token is None or not cancel_token.is_cancelled():
                return False
            handler.add_info(RUN_CANCELLED, f"分析已取消，未執行 {next_phase} 階段")
            reporter.emit(ProgressEventType.RUN_CANCELLED, next_phase)
            log_callback("分析已取消")
            return True

        reporter.advance(0)

        if check_cancelled(PHASE_EXACT):
            cancelled = True
        else:
            stage_callback("階段: Metadata dedupe...")
            reporter.emit(ProgressEventType.PHASE_START, PHASE_EXACT)
            exact_result = self.exact_deduper.dedupe(items)
            record(PHASE_EXACT, exact_result.groups)
            reporter.advance(PROGRESS_AFTER_PHASE[PHASE_EXACT])
            reporter.emit(
                ProgressEventType.PHASE_END,
                PHASE_EXACT,
                status=STATUS_COMPLETE,
                duplicate_count=len(exact_result.duplicates),
            )
            log_callback(f"偵測到 {len(exact_result.duplicates)} 個 metadata 重複檔案")

        if not cancelled and self.visual_enabled:
            if check_cancelled(PHASE_VISUAL):
                cancelled = True
            else:
                stage_callback("階段: Visual hash dedupe...")
                reporter.emit(ProgressEventType.PHASE_START, PHASE_VISUAL)
                try:
                    visual_result = self.visual_deduper.dedupe(items, threshold=threshold)
                except UnavailableError as exc:
                    perceptual_status = STATUS_SKIPPED
                    self.logger.warning(f"無法進行相似比對，僅回傳 metadata 結果: {exc}")
                    handler.add_warning(PERCEPTUAL_UNAVAILABLE, str(exc))
                    reporter.emit(ProgressEventType.PHASE_SKIPPED, PHASE_VISUAL, status=STATUS_SKIPPED)
                    log_callback("相似比對已略過: 缺少解碼後端")
                else:
                    record(PHASE_VISUAL, visual_result.groups)
                    fingerprints.update(visual_result.fingerprints)
                    handler.extend(visual_result.failures)
                    perceptual_status = STATUS_PARTIAL if visual_result.failures else STATUS_COMPLETE
                    reporter.emit(
                        ProgressEventType.PHASE_END,
                        PHASE_VISUAL,
                        status=perceptual_status,
                        duplicate_count=len(visual_result.duplicates),
                    )
                    log_callback(f"偵測到 {len(visual_result.duplicates)} 個相似重複檔案")
                reporter.advance(PROGRESS_AFTER_PHASE[PHASE_VISUAL])

        if not cancelled and self.content_deduper is not None:
            if check_cancelled(PHASE_CONTENT):
                cancelled = True
            else:
                stage_callback("階段: Content hash dedupe...")
                reporter.emit(ProgressEventType.PHASE_START, PHASE_CONTENT)
                try:
                    content_result = self.content_deduper.dedupe(items, cancel_token=cancel_token)
                except CancelledError:
                    cancelled = True
                    handler.add_info(RUN_CANCELLED, "分析已取消，內容 hash 階段未完成")
                    reporter.emit(ProgressEventType.RUN_CANCELLED, PHASE_CONTENT)
                else:
                    record(PHASE_CONTENT, content_result.groups)
                    handler.extend(content_result.failures)
                    reporter.advance(PROGRESS_AFTER_PHASE[PHASE_CONTENT])
                    reporter.emit(
                        ProgressEventType.PHASE_END,
                        PHASE_CONTENT,
                        status=STATUS_PARTIAL if content_result.failures else STATUS_COMPLETE,
                        duplicate_count=len(content_result.duplicates),
                    )
                    log_callback(f"偵測到 {len(content_result.duplicates)} 個內容相同檔案")

        fresh = [
            replace(item, fingerprint=None, is_duplicate=False, group=None, similarity_score=None)
            for item in items
        ]
        annotated = apply_annotations(fresh, annotations, fingerprints)
        by_id = {item.id: item for item in annotated}
        groups = [
            replace(
                group,
                anchor=by_id[group.anchor.id],
                duplicates=[by_id[item.id] for item in group.duplicates],
            )
            for group in groups
        ]
        duplicates = [by_id[photo_id] for photo_id in dict.fromkeys(follower_order)]
        space_savings = sum(item.size_bytes for item in duplicates)

        if not cancelled:
            reporter.advance(100)
        self.logger.info(
            f"分析完成: {len(duplicates)} 張重複, 可節省 {space_savings} bytes"
            + (" (已取消)" if cancelled else "")
        )
        return AggregateResult(
            photos=annotated,
            duplicates=duplicates,
            groups=groups,
            space_savings_bytes=space_savings,
            perceptual_status=perceptual_status,
            cancelled=cancelled,
            errors=list(handler.errors),
            completed_phases=completed,
        )


def discard_photo(photos: Iterable[Photo], photo_id: str) -> tuple[list[Photo], Photo]:
    """Split ``photo_id`` off a collection after the host has deleted it.

    The engine keeps no deletion state; re-run ``aggregate`` on the remaining
    records to refresh the duplicate view.
    """
    remaining: list[Photo] = []
    removed: Optional[Photo] = None
    for item in photos:
        if removed is None and item.id == photo_id:
            removed = item
        else:
            remaining.append(item)
    if removed is None:
        raise KeyError(photo_id)
    return remaining, removed
