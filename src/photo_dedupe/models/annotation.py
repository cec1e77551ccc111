"""偵測結果的標註差異 (delta) 與群組模型。"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Iterable, List, Mapping, Optional

from .photo import Photo

if TYPE_CHECKING:
    from imagehash import ImageHash


@dataclass(frozen=True)
class PhotoAnnotation:
    photo_id: str
    group: str
    reason: str
    similarity_score: Optional[float] = None


@dataclass
class DuplicateGroup:
    group_id: str
    anchor: Photo
    duplicates: List[Photo]
    reason: str
    scores: dict[str, float] = field(default_factory=dict)

    @property
    def photo_ids(self) -> list[str]:
        return [self.anchor.id] + [item.id for item in self.duplicates]

    def annotations(self) -> list[PhotoAnnotation]:
        return [
            PhotoAnnotation(
                photo_id=item.id,
                group=self.group_id,
                reason=self.reason,
                similarity_score=self.scores.get(item.id),
            )
            for item in self.duplicates
        ]


def apply_annotations(
    photos: Iterable[Photo],
    annotations: Iterable[PhotoAnnotation],
    fingerprints: Optional[Mapping[str, "ImageHash"]] = None,
) -> list[Photo]:
    """Return copies of ``photos`` with the given deltas applied in order.

    ``is_duplicate`` never flips back to False. A later annotation for the same
    photo replaces its ``group``; its ``similarity_score`` is only replaced when
    the annotation carries one.
    """
    pending: dict[str, list[PhotoAnnotation]] = {}
    for item in annotations:
        pending.setdefault(item.photo_id, []).append(item)
    fingerprints = fingerprints or {}
    result: list[Photo] = []
    for photo in photos:
        updated = replace(photo)
        if photo.id in fingerprints:
            updated = replace(updated, fingerprint=fingerprints[photo.id])
        for annotation in pending.get(photo.id, ()):
            updated = replace(
                updated,
                is_duplicate=True,
                group=annotation.group,
                similarity_score=(
                    annotation.similarity_score
                    if annotation.similarity_score is not None
                    else updated.similarity_score
                ),
            )
        result.append(updated)
    return result
