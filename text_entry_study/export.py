# text_entry_study/export.py
"""
Exporter: serializes the consent record and the event log and hands the bytes
to a delivery sink together with a suggested file name.

Delivery itself (download, disk, test buffer) belongs to the sink.
"""

from __future__ import annotations

import csv
import io
import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from text_entry_study.core.errors import ExportError
from text_entry_study.utils.logger_utils import Log, log as default_log

CONSENT_NARRATIVE = """Consent Form:
You are invited to take part in a study on text entry techniques.
Your participation is voluntary, and you may withdraw at any time.
The study involves typing phrases using different methods and logging performance data.
No personally identifiable information will be shared.
This study will take around 15-20 minutes, and you will be required to type in total 40 short phrases using different methods.
You do not need to commute or spend any money for this study.
The study may not lead to any direct benefit.
By typing your name below, you consent to participate in the study."""


def safe_name(name: str) -> str:
    """Participant name as used in file names: whitespace runs become '_'."""
    return re.sub(r"\s+", "_", name)


def consent_filename(name: str) -> str:
    return f"consent_form_{safe_name(name)}.txt"


def log_filename(name: str) -> str:
    return f"log_data_{safe_name(name)}.csv"


@dataclass(frozen=True)
class ConsentRecord:
    name: str
    timestamp: str  # ISO-8601, UTC
    text: str = CONSENT_NARRATIVE

    @classmethod
    def sign(cls, name: str, when: Optional[datetime] = None) -> "ConsentRecord":
        when = when or datetime.now(timezone.utc)
        return cls(name=name, timestamp=when.isoformat())

    def render(self) -> str:
        return f"Participant Name: {self.name}\nTimestamp: {self.timestamp}\n\n{self.text}"


# Sinks ---------------------------------------------------------------------------

@runtime_checkable
class Sink(Protocol):
    """Anything that accepts a finished payload under a suggested name."""

    def deliver(self, name: str, payload: bytes) -> None:
        ...


class DirectorySink:
    """Writes each payload as a file inside `folder`."""

    def __init__(self, folder: str) -> None:
        self.folder = folder

    def deliver(self, name: str, payload: bytes) -> None:
        os.makedirs(self.folder, exist_ok=True)
        with open(os.path.join(self.folder, name), "wb") as fh:
            fh.write(payload)

    def __repr__(self) -> str:
        return f"DirectorySink({self.folder!r})"


class MemorySink:
    """Keeps payloads in memory, in delivery order. Used by tests."""

    def __init__(self) -> None:
        self.deliveries: List[tuple] = []

    def deliver(self, name: str, payload: bytes) -> None:
        self.deliveries.append((name, payload))

    @property
    def names(self) -> List[str]:
        return [n for n, _ in self.deliveries]

    def text(self, name: str) -> str:
        for n, payload in self.deliveries:
            if n == name:
                return payload.decode("utf-8")
        raise KeyError(name)


# Serialization -------------------------------------------------------------------

def csv_columns(rows: Sequence[Mapping[str, Any]], legacy_schema: bool = False) -> List[str]:
    """
    Column set for the log CSV.
    Default: ordered union of fields across all rows.
    legacy_schema: only the first row's fields, as older exports did.
    """
    if not rows:
        return []
    if legacy_schema:
        return list(rows[0])
    columns: Dict[str, None] = {}
    for row in rows:
        for key in row:
            columns[key] = None
    return list(columns)


def rows_to_csv(rows: Sequence[Mapping[str, Any]], legacy_schema: bool = False) -> str:
    """Render rows in the given order; every cell quoted, missing cells empty."""
    columns = csv_columns(rows, legacy_schema)
    buf = io.StringIO()
    writer = csv.DictWriter(
        buf,
        fieldnames=columns,
        quoting=csv.QUOTE_ALL,
        restval="",
        extrasaction="ignore",
        lineterminator="\n",
    )
    if columns:
        writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buf.getvalue()


class Exporter:
    """Serializes study artifacts and delivers them through sinks."""

    def __init__(
        self,
        consent_sink: Sink,
        log_sink: Optional[Sink] = None,
        *,
        legacy_schema: bool = False,
        logger: Optional[Log] = None,
    ) -> None:
        self.consent_sink = consent_sink
        self.log_sink = log_sink or consent_sink
        self.legacy_schema = legacy_schema
        self.log = logger or default_log

    def export_consent(self, record: ConsentRecord) -> str:
        name = consent_filename(record.name)
        self._deliver(self.consent_sink, name, record.render())
        return name

    def export_log(self, participant: str, rows: Iterable[Mapping[str, Any]]) -> str:
        rows = list(rows)
        name = log_filename(participant)
        self._deliver(self.log_sink, name, rows_to_csv(rows, self.legacy_schema))
        self.log.info(f"[Export] {len(rows)} events -> {name}")
        return name

    def _deliver(self, sink: Sink, name: str, content: str) -> None:
        try:
            sink.deliver(name, content.encode("utf-8"))
        except OSError as e:
            self.log.error(f"[Export] delivery of {name} to {sink!r} failed: {e}")
            raise ExportError(f"could not deliver {name}: {e}") from e
