"""錯誤收集與報告工具。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..models.error_record import ErrorLevel, ProcessError

DECODE_FAILED = "W-101"
CONTENT_READ_FAILED = "W-102"
PERCEPTUAL_UNAVAILABLE = "W-201"
RUN_CANCELLED = "I-301"


@dataclass
class ErrorHandler:
    """集中管理單次分析中的錯誤與警告。"""

    errors: List[ProcessError] = field(default_factory=list)

    def add(self, error: ProcessError) -> None:
        self.errors.append(error)

    def extend(self, errors: Iterable[ProcessError]) -> None:
        self.errors.extend(errors)

    def add_info(self, code: str, message: str, photo_id: Optional[str] = None) -> None:
        self.add(ProcessError(code=code, level=ErrorLevel.INFO, message=message, photo_id=photo_id))

    def add_warning(self, code: str, message: str, photo_id: Optional[str] = None) -> None:
        self.add(ProcessError(code=code, level=ErrorLevel.RECOVERABLE, message=message, photo_id=photo_id))

    def add_fatal(self, code: str, message: str, photo_id: Optional[str] = None) -> None:
        self.add(ProcessError(code=code, level=ErrorLevel.FATAL, message=message, photo_id=photo_id))

    def get_by_level(self, level: ErrorLevel) -> List[ProcessError]:
        return [error for error in self.errors if error.level == level]

    def get_by_code(self, code: str) -> List[ProcessError]:
        return [error for error in self.errors if error.code == code]

    def to_dicts(self) -> List[dict[str, object]]:
        return [error.to_dict() for error in self.errors]
