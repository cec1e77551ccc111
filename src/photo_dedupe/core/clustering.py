"""Forward single-pass clustering shared by every detector."""

from __future__ import annotations

from typing import Callable, List, Sequence

from ..models import DuplicateGroup, Photo


def forward_cluster(
    photos: Sequence[Photo],
    is_match: Callable[[Photo, Photo], bool],
    next_group_id: Callable[[], str],
    reason: str,
) -> List[DuplicateGroup]:
    """Group ``photos`` with the first-seen photo of each cluster as anchor.

    A photo that joins a cluster is marked processed at once, so it can neither
    anchor a later cluster nor join a second one. Input order breaks all ties.
    """
    processed: set[str] = set()
    groups: List[DuplicateGroup] = []

    for index, anchor in enumerate(photos):
        if anchor.id in processed:
            continue
        followers: List[Photo] = []
        for candidate in photos[index + 1 :]:
            if candidate.id in processed:
                continue
            if is_match(anchor, candidate):
                followers.append(candidate)
                processed.add(candidate.id)
        if followers:
            groups.append(
                DuplicateGroup(
                    group_id=next_group_id(),
                    anchor=anchor,
                    duplicates=followers,
                    reason=reason,
                )
            )
        processed.add(anchor.id)

    return groups
