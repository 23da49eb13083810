#!/usr/bin/env python3
"""
analytics.py - Small helpers for looking at an exported study log.

Functions:
 - read_log(path): rows of an exported log CSV.
 - summarize(rows): per-method trial counts, timing and prediction use.

Only descriptive numbers; transcription errors are left to offline analysis.
"""

from __future__ import annotations

import csv
from pathlib import Path
from statistics import mean, median
from typing import Any, Dict, Iterable, List, Mapping


def read_log(path: Path) -> List[Dict[str, str]]:
    """Load an exported log; every cell comes back as a string."""
    with open(path, "r", newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def summarize(
    rows: Iterable[Mapping[str, Any]], practice_trials: int = 5
) -> Dict[str, Dict[str, Any]]:
    """
    Per method:
      trials, mean_ms, median_ms (submission timing),
      predictions (accepted suggestions), practice (trials numbered <= practice_trials)
    Methods appear in the order they were first seen.
    """
    times: Dict[str, List[int]] = {}
    predictions: Dict[str, int] = {}
    practice: Dict[str, int] = {}

    for row in rows:
        kind = row.get("type")
        method = row.get("method") or row.get("block") or ""
        if kind == "submission":
            times.setdefault(method, []).append(_as_int(row.get("timeTakenMs")))
            if _as_int(row.get("trial")) <= practice_trials:
                practice[method] = practice.get(method, 0) + 1
        elif kind == "prediction":
            times.setdefault(method, [])
            predictions[method] = predictions.get(method, 0) + 1

    out: Dict[str, Dict[str, Any]] = {}
    for method, ms in times.items():
        out[method] = {
            "trials": len(ms),
            "practice": practice.get(method, 0),
            "mean_ms": mean(ms) if ms else 0.0,
            "median_ms": median(ms) if ms else 0.0,
            "predictions": predictions.get(method, 0),
        }
    return out
