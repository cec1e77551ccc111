"""預設設定值。"""

DEFAULT_CONFIG = {
    "exact": {
        "size_tolerance": 0.10,
        "match_names": True,
    },
    "visual": {
        "enabled": True,
        "threshold": 0.85,
        "hash_size": 32,
        "parallel_workers": 0,
    },
    "content_hash": {
        "enabled": False,
        "algorithm": "sha256",
        "chunk_size_kb": 1024,
    },
    "group_ids": {
        "exact_prefix": "exact",
        "visual_prefix": "similar",
        "content_prefix": "content",
    },
}
