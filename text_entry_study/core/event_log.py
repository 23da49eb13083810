# text_entry_study/core/event_log.py
"""
EventLog
Append-only record of everything a participant does during the study.
 - three event kinds: block_complete, prediction, submission
 - events are frozen dataclasses, nothing is edited or removed once appended
 - append order is the export order (no regrouping by type)
 - quick in-memory stats for the operator view
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple, Union

from typing_extensions import TypedDict


class BlockCompleteRow(TypedDict):
    type: str
    block: str
    timestamp: int


class PredictionRow(TypedDict):
    type: str
    method: str
    input: str
    selected: str
    phrase: str
    trial: int
    timestamp: int


# exported column names keep the camelCase used by earlier log files
SubmissionRow = TypedDict(
    "SubmissionRow",
    {
        "type": str,
        "method": str,
        "entered": str,
        "target": str,
        "trial": int,
        "timeTakenMs": int,
    },
)


@dataclass(frozen=True)
class BlockComplete:
    block: str  # mode name of the finished block
    timestamp: int  # ms since epoch
    type: str = field(default="block_complete", init=False)

    def as_row(self) -> BlockCompleteRow:
        return {"type": self.type, "block": self.block, "timestamp": self.timestamp}


@dataclass(frozen=True)
class Prediction:
    method: str
    input: str  # prefix the participant had typed
    selected: str
    phrase: str  # target phrase of the trial
    trial: int  # 1-based
    timestamp: int
    type: str = field(default="prediction", init=False)

    def as_row(self) -> PredictionRow:
        return {
            "type": self.type,
            "method": self.method,
            "input": self.input,
            "selected": self.selected,
            "phrase": self.phrase,
            "trial": self.trial,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Submission:
    method: str
    entered: str
    target: str
    trial: int  # 1-based
    time_taken_ms: int
    type: str = field(default="submission", init=False)

    def as_row(self) -> SubmissionRow:
        return {
            "type": self.type,
            "method": self.method,
            "entered": self.entered,
            "target": self.target,
            "trial": self.trial,
            "timeTakenMs": self.time_taken_ms,
        }


LogEvent = Union[BlockComplete, Prediction, Submission]


class EventLog:
    """
    Ordered, append-only event store.
    Public API:
      append(event)
      events / rows()
      stats()
    """

    def __init__(self) -> None:
        self._events: List[LogEvent] = []

    def append(self, event: LogEvent) -> LogEvent:
        if not isinstance(event, (BlockComplete, Prediction, Submission)):
            raise TypeError(f"not a log event: {event!r}")
        self._events.append(event)
        return event

    # read-only views ----------------------------------------------------------
    @property
    def events(self) -> Tuple[LogEvent, ...]:
        return tuple(self._events)

    def __iter__(self) -> Iterator[LogEvent]:
        return iter(tuple(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)

    def rows(self) -> List[Dict[str, Any]]:
        """One dict per event, in append order, columns in per-event field order."""
        return [dict(ev.as_row()) for ev in self._events]

    def stats(self) -> Dict[str, int]:
        """Event counts per type, used by the operator view."""
        counts = Counter(ev.type for ev in self._events)
        return {
            "total_events": len(self._events),
            "block_complete": counts.get("block_complete", 0),
            "prediction": counts.get("prediction", 0),
            "submission": counts.get("submission", 0),
        }
