"""資料模型模組。"""

from .annotation import DuplicateGroup, PhotoAnnotation, apply_annotations
from .error_record import ErrorLevel, ProcessError
from .photo import Photo
from .progress_event import ProgressEvent, ProgressEventType

__all__ = [
    "DuplicateGroup",
    "ErrorLevel",
    "Photo",
    "PhotoAnnotation",
    "ProcessError",
    "ProgressEvent",
    "ProgressEventType",
    "apply_annotations",
]
