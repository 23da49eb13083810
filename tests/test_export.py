# tests/test_export.py
import csv
import io
from datetime import datetime, timezone

import pytest

from text_entry_study.core.errors import ExportError
from text_entry_study.export import (
    CONSENT_NARRATIVE,
    ConsentRecord,
    DirectorySink,
    Exporter,
    MemorySink,
    consent_filename,
    csv_columns,
    log_filename,
    rows_to_csv,
)

ROWS = [
    {"type": "submission", "method": "qwerty", "entered": "a, b", "target": 'say "hi"', "trial": 1, "timeTakenMs": 900},
    {"type": "prediction", "method": "predictive", "input": "d", "selected": "dog", "phrase": "dog", "trial": 1, "timestamp": 5},
    {"type": "block_complete", "block": "qwerty", "timestamp": 7},
]


def parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_filenames_replace_whitespace():
    assert consent_filename("Ada  Lovelace") == "consent_form_Ada_Lovelace.txt"
    assert log_filename("Ada Byron\tKing") == "log_data_Ada_Byron_King.csv"


def test_union_schema_keeps_every_field():
    cols = csv_columns(ROWS)
    assert cols == [
        "type", "method", "entered", "target", "trial", "timeTakenMs",
        "input", "selected", "phrase", "timestamp", "block",
    ]
    table = parse(rows_to_csv(ROWS))
    assert table[0] == cols
    assert len(table) == 1 + len(ROWS)
    assert table[1][2] == "a, b"
    assert table[1][3] == 'say "hi"'
    # missing cells are empty
    assert table[3][cols.index("block")] == "qwerty"
    assert table[3][cols.index("entered")] == ""


def test_legacy_schema_uses_first_row_only():
    table = parse(rows_to_csv(ROWS, legacy_schema=True))
    assert table[0] == list(ROWS[0])
    assert table[2] == ["prediction", "predictive", "", "", "1", ""]
    assert table[3] == ["block_complete", "", "", "", "", ""]


def test_every_cell_is_quoted():
    text = rows_to_csv(ROWS[2:])
    assert text.splitlines() == ['"type","block","timestamp"', '"block_complete","qwerty","7"']


def test_empty_rows_give_empty_file():
    assert rows_to_csv([]) == ""


def test_consent_record_render():
    when = datetime(2025, 3, 1, 12, 30, tzinfo=timezone.utc)
    record = ConsentRecord.sign("Ada Lovelace", when)
    text = record.render()
    lines = text.splitlines()
    assert lines[0] == "Participant Name: Ada Lovelace"
    assert lines[1] == "Timestamp: 2025-03-01T12:30:00+00:00"
    assert lines[2] == ""
    assert lines[3] == "Consent Form:"
    assert text.endswith(CONSENT_NARRATIVE)


def test_exporter_delivers_to_sinks(quiet_log):
    consent, logs = MemorySink(), MemorySink()
    exporter = Exporter(consent, logs, logger=quiet_log)
    exporter.export_consent(ConsentRecord("Ada", "2025-01-01T00:00:00+00:00"))
    name = exporter.export_log("Ada", ROWS)
    assert consent.names == ["consent_form_Ada.txt"]
    assert logs.names == [name] == ["log_data_Ada.csv"]
    assert parse(logs.text(name))[1][0] == "submission"


def test_directory_sink_writes_files(tmp_path):
    sink = DirectorySink(str(tmp_path / "out"))
    sink.deliver("log_data_x.csv", b'"a"\n')
    assert (tmp_path / "out" / "log_data_x.csv").read_bytes() == b'"a"\n'


class BrokenSink:
    def deliver(self, name, payload):
        raise OSError("disk full")


def test_delivery_failure_surfaces_as_export_error(quiet_log):
    exporter = Exporter(BrokenSink(), logger=quiet_log)
    with pytest.raises(ExportError):
        exporter.export_log("Ada", ROWS)
