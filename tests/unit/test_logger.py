import logging
from pathlib import Path

from photo_dedupe.utils.logger import get_logger


def test_logger_is_namespaced_and_reused() -> None:
    logger = get_logger("ExactDeduperLoggerTest")
    assert logger.name == "photo_dedupe.ExactDeduperLoggerTest"
    assert get_logger("ExactDeduperLoggerTest") is logger
    assert len(logger.handlers) == 1


def test_logger_writes_warnings_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "dedupe.log"
    logger = get_logger("FileLoggerTest", log_file=log_file)
    logger.info("只寫到 console")
    logger.warning("無法解碼影像: broken.jpg")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "[WARNING] 無法解碼影像: broken.jpg" in content
    assert "只寫到 console" not in content
    assert any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
