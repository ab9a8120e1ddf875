"""
storage.py

Load-at-startup / save-on-change persistence of the user's settings as a
single JSON blob:

    {"deposit": ..., "annualIncome": ..., "lifeStyles": [{"desc", "yearCost",
     "interestRate", "inflationRate"}]}
"""

import json
import logging
import math
import os
from typing import Any, Optional

from config import storage_path
from models import FireConfig

logger = logging.getLogger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def read_config(path: str) -> Optional[FireConfig]:
    """
    Parse settings from 'path'. Returns None when the file is missing,
    empty or unreadable.
    """
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return None
            raw = json.loads(raw_text)
        if not isinstance(raw, dict):
            raise ValueError(f"expected an object, got {type(raw).__name__}")
        return FireConfig.from_dict(raw)
    except (json.JSONDecodeError, OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return None


def load_config(path: str) -> FireConfig:
    """
    Read settings from 'path'. A missing, empty or unreadable file yields
    the defaults.
    """
    config = read_config(path)
    if config is None:
        return FireConfig()
    return config


def save_config(path: str, config: FireConfig) -> None:
    ensure_user_data_dir(path)
    tmp_path = f"{path}.tmp"
    clean = _sanitize_json_compat(config.to_dict())
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(clean, f, ensure_ascii=False, allow_nan=False)
    os.replace(tmp_path, path)
    logger.debug("Saved config to %s", path)


class ConfigStore:
    """
    File-backed store handed to the page. Remembers the last saved payload
    so unchanged settings are not rewritten on every rerun.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or storage_path()
        self._last_saved: Optional[dict] = None

    def load(self) -> FireConfig:
        config = read_config(self.path)
        if config is None:
            # nothing usable on disk; the first save rewrites it
            self._last_saved = None
            return FireConfig()
        self._last_saved = config.to_dict()
        return config

    def save(self, config: FireConfig) -> None:
        payload = config.to_dict()
        if payload == self._last_saved:
            return
        save_config(self.path, config)
        self._last_saved = payload
