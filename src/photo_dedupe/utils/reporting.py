"""結果摘要與統計工具。"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Dict, Iterable, List

from ..models import Photo

if TYPE_CHECKING:
    from ..core.aggregator import AggregateResult

SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


@dataclass
class PhotoStats:
    total_photos: int
    duplicates: int
    space_freed_bytes: int
    processed: int

    @property
    def completion_percentage(self) -> float:
        if self.total_photos <= 0:
            return 0.0
        return self.processed / self.total_photos * 100

    @property
    def duplicate_percentage(self) -> float:
        if self.total_photos <= 0:
            return 0.0
        return self.duplicates / self.total_photos * 100


def format_file_size(size_bytes: int) -> str:
    if size_bytes <= 0:
        return "0 Bytes"
    index = 0
    value = float(size_bytes)
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[index]}"


def group_duplicates(duplicates: Iterable[Photo]) -> Dict[str, List[Photo]]:
    groups: Dict[str, List[Photo]] = {}
    for item in duplicates:
        if item.group:
            groups.setdefault(item.group, []).append(item)
    return groups


def build_photo_stats(
    photos: Iterable[Photo],
    duplicates: Iterable[Photo],
    discarded: Iterable[Photo] = (),
) -> PhotoStats:
    """Statistics for a session.

    ``photos`` is the current collection, ``discarded`` the records the host has
    already deleted during the session.
    """
    discarded_items = list(discarded)
    return PhotoStats(
        total_photos=len(list(photos)),
        duplicates=len({item.id for item in duplicates}),
        space_freed_bytes=sum(item.size_bytes for item in discarded_items),
        processed=len(discarded_items),
    )


def build_summary(result: "AggregateResult") -> dict[str, object]:
    # each duplicate is counted once, under the pass that set its final group
    group_reasons = {group.group_id: group.reason for group in result.groups}
    reasons: Dict[str, int] = {}
    for item in result.duplicates:
        reason = group_reasons.get(item.group)
        if reason is not None:
            reasons[reason] = reasons.get(reason, 0) + 1
    stats = build_photo_stats(result.photos, result.duplicates)
    return {
        "stats": asdict(stats),
        "duplicate_count": len(result.duplicates),
        "duplicates_by_reason": reasons,
        "group_count": len(group_duplicates(result.duplicates)),
        "space_savings_bytes": result.space_savings_bytes,
        "space_savings": format_file_size(result.space_savings_bytes),
        "perceptual_status": result.perceptual_status,
        "cancelled": result.cancelled,
        "completed_phases": list(result.completed_phases),
        "errors": [error.to_dict() for error in result.errors],
    }
