"""照片紀錄模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from imagehash import ImageHash


@dataclass
class Photo:
    id: str
    name: str
    size_bytes: int
    mime_type: str
    created_at: datetime
    pixel_source: Any = field(default=None, repr=False, compare=False)
    fingerprint: Optional["ImageHash"] = field(default=None, repr=False, compare=False)
    is_duplicate: bool = False
    group: Optional[str] = None
    similarity_score: Optional[float] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "size_bytes": self.size_bytes,
            "mime_type": self.mime_type,
            "created_at": self.created_at.isoformat(),
            "fingerprint": str(self.fingerprint) if self.fingerprint is not None else None,
            "is_duplicate": self.is_duplicate,
            "group": self.group,
            "similarity_score": self.similarity_score,
        }
