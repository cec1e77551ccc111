"""分析階段進度事件模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ProgressEventType(str, Enum):
    PHASE_START = "PHASE_START"
    PHASE_END = "PHASE_END"
    PHASE_SKIPPED = "PHASE_SKIPPED"
    RUN_CANCELLED = "RUN_CANCELLED"


@dataclass
class ProgressEvent:
    event_type: ProgressEventType
    percent: int
    timestamp: datetime = field(default_factory=datetime.now)
    phase_name: Optional[str] = None
    status: Optional[str] = None
    duplicate_count: Optional[int] = None
