# config_manager.py - JSON config manager for study parameters

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

DEFAULTS: Dict[str, Any] = {
    "phrases_per_block": 20,
    "practice_trials": 5,
    "max_suggestions": 9,
    "intro_delay": 1.0,  # seconds before the first trial of a block
    "transition_delay": 2.0,  # seconds between blocks
    "export_dir": "exports",
    "legacy_csv_schema": False,
    "phrases_file": None,
}


class Config:
    """
    Study configuration backed by an optional JSON file.
    Unknown keys in the file are ignored, missing keys fall back to DEFAULTS.
    """

    def __init__(self, path: Optional[str] = None, **overrides: Any) -> None:
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()
        for key, val in overrides.items():
            self.set(key, val, persist=False)

    def _load(self) -> None:
        if not self.path or not os.path.exists(self.path):
            return
        with open(self.path, "r", encoding="utf8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"config file {self.path} must hold a JSON object")
        for key, val in raw.items():
            if key in self.data:
                self.set(key, val, persist=False)

    def save(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def set(self, key: str, val: Any, persist: bool = True) -> None:
        if key not in self.data:
            raise KeyError(f"No such option: {key}")
        default = DEFAULTS[key]
        if val is not None and default is not None:
            if isinstance(default, bool) and isinstance(val, str):
                val = val.strip().lower() in ("1", "true", "yes", "on")
            else:
                val = type(default)(val)
        self.data[key] = val
        if persist:
            self.save()

    def show(self) -> None:
        for k, v in self.data.items():
            print(f"{k:20} = {v}")
