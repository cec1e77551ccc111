"""設定管理器。"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Optional

from . import defaults
from .schema import validate_config

CONFIG_ENV_VAR = "PHOTO_DEDUPE_CONFIG"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _get_nested(config: dict[str, Any], key: str, default: Any = None) -> Any:
    current: Any = config
    for part in key.split("."):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def _set_nested(config: dict[str, Any], key: str, value: Any) -> None:
    current = config
    *parents, leaf = key.split(".")
    for part in parents:
        current = current.setdefault(part, {})
    current[leaf] = value


def _load_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"設定檔格式錯誤，最外層必須是物件: {path}")
    return data


class ConfigManager:
    """三層設定管理：預設、使用者檔案、執行期覆寫。

    使用者設定檔路徑未指定時，會讀取環境變數 ``PHOTO_DEDUPE_CONFIG``。
    """

    def __init__(self, user_config_path: Optional[Path] = None) -> None:
        self._defaults = copy.deepcopy(defaults.DEFAULT_CONFIG)
        if user_config_path is None and os.environ.get(CONFIG_ENV_VAR):
            user_config_path = Path(os.environ[CONFIG_ENV_VAR])
        self._user = self._load_user_config(user_config_path) if user_config_path else {}
        self._runtime: dict[str, Any] = {}
        self._config = _deep_merge(self._defaults, self._user)

    @classmethod
    def from_dict(cls, overrides: dict[str, Any]) -> "ConfigManager":
        manager = cls()
        manager._user = copy.deepcopy(overrides)
        manager._config = _deep_merge(manager._defaults, manager._user)
        return manager

    def _load_user_config(self, path: Path) -> dict[str, Any]:
        if path.exists():
            return _load_json(path)
        return {}

    def get(self, key: str, default: Any = None) -> Any:
        return _get_nested(self._config, key, default)

    def set(self, key: str, value: Any) -> None:
        _set_nested(self._runtime, key, value)
        self._config = _deep_merge(_deep_merge(self._defaults, self._user), self._runtime)

    def validate_config(self) -> list[str]:
        return validate_config(self._config)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._config)
