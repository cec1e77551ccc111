"""設定檔驗證邏輯。"""

from __future__ import annotations

from typing import Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    def add_error(path: str, message: str) -> None:
        errors.append(f"{path}: {message}")

    exact = config.get("exact", {})
    size_tolerance = exact.get("size_tolerance", 0.10)
    match_names = exact.get("match_names", True)
    if not _is_number(size_tolerance) or not (0 < size_tolerance < 1):
        add_error("exact.size_tolerance", "必須介於 0 與 1 之間 (不含端點)")
    if not isinstance(match_names, bool):
        add_error("exact.match_names", "必須是布林值")

    visual = config.get("visual", {})
    enabled = visual.get("enabled", True)
    threshold = visual.get("threshold", 0.85)
    hash_size = visual.get("hash_size", 32)
    parallel_workers = visual.get("parallel_workers", 0)
    if not isinstance(enabled, bool):
        add_error("visual.enabled", "必須是布林值")
    if not _is_number(threshold) or not (0 < threshold <= 1):
        add_error("visual.threshold", "必須介於 0 (不含) 到 1")
    if not isinstance(hash_size, int) or isinstance(hash_size, bool) or hash_size <= 0:
        add_error("visual.hash_size", "必須是正整數")
    if not isinstance(parallel_workers, int) or isinstance(parallel_workers, bool) or parallel_workers < 0:
        add_error("visual.parallel_workers", "必須是大於等於 0 的整數")

    content_hash = config.get("content_hash", {})
    content_enabled = content_hash.get("enabled", False)
    algorithm = content_hash.get("algorithm", "sha256")
    chunk_size_kb = content_hash.get("chunk_size_kb", 1024)
    if not isinstance(content_enabled, bool):
        add_error("content_hash.enabled", "必須是布林值")
    if not isinstance(algorithm, str) or not algorithm.strip():
        add_error("content_hash.algorithm", "必須是非空字串")
    if not isinstance(chunk_size_kb, int) or isinstance(chunk_size_kb, bool) or chunk_size_kb <= 0:
        add_error("content_hash.chunk_size_kb", "必須是正整數")

    group_ids = config.get("group_ids", {})
    for key in ("exact_prefix", "visual_prefix", "content_prefix"):
        prefix = group_ids.get(key)
        if not isinstance(prefix, str) or not prefix.strip():
            add_error(f"group_ids.{key}", "必須是非空字串")

    return errors
