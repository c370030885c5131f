"""
Result Export Tests
===================

Tests for JSON/CSV rendering of calculation results.

Author: ClinScore Team
Version: 1.0.0
"""

import csv
import io
import json
import re

import pytest

from clinscore.export import (
    ExportRecord,
    default_filename,
    export_record,
    export_to_csv,
    export_to_file,
    export_to_json,
)
from clinscore.scoring.engine import calculate


@pytest.fixture
def result(cha2ds2_va, cha2ds2_va_inputs):
    return calculate(cha2ds2_va, cha2ds2_va_inputs)


@pytest.fixture
def record(result):
    return ExportRecord.from_result(result, "CHA2DS2-VA Score")


class TestExportRecord:
    """Flattening of results."""

    def test_zero_point_entries_dropped(self, record):
        assert [entry.field for entry in record.field_breakdown] == [
            "age", "heart_failure", "hypertension",
        ]
        assert record.total_score == 3
        assert record.risk == "Moderate-High"

    def test_german_labels(self, result):
        record = ExportRecord.from_result(result, "CHA2DS2-VA-Score", language="de")

        assert record.risk == "Moderat-Hoch"
        assert [entry.label for entry in record.field_breakdown] == [
            "Alter", "Herzinsuffizienz", "Arterielle Hypertonie",
        ]
        assert record.details.startswith("DOAK")

    def test_timestamp_format(self, record):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", record.timestamp)


class TestRenderers:
    """JSON and CSV output."""

    def test_json(self, record):
        data = json.loads(export_to_json(record))

        assert data["score_name"] == "CHA2DS2-VA Score"
        assert data["total_score"] == 3
        assert data["field_breakdown"][0] == {"field": "age", "label": "Age", "points": 1}

    def test_csv_layout(self, record):
        rows = list(csv.reader(io.StringIO(export_to_csv(record))))

        assert rows[0] == ["Field", "Value"]
        assert rows[1] == ["Score", "CHA2DS2-VA Score"]
        assert rows[2] == ["Total Score", "3"]
        assert rows[3] == ["Risk", "Moderate-High"]

        factor_header = rows.index(["Factor", "Points"])
        assert rows[factor_header - 1] == ["", ""]
        assert rows[factor_header + 1:] == [
            ["Age", "1"],
            ["Congestive heart failure", "1"],
            ["Hypertension", "1"],
        ]

    def test_csv_omits_empty_details(self, cha2ds2_va):
        result = calculate(cha2ds2_va, {"age": 50})
        output = export_to_csv(ExportRecord.from_result(result, "CHA2DS2-VA Score"))
        assert "Details" not in output

    def test_unknown_format(self, record):
        with pytest.raises(ValueError, match="Unknown format: xml"):
            export_record(record, "xml")


class TestFiles:
    """Writing exports to disk."""

    def test_export_to_file_by_suffix(self, record, tmp_path):
        path = export_to_file(record, tmp_path / "out" / "result.csv")

        assert path.exists()
        assert path.read_text(encoding="utf-8").startswith("Field,Value")

    def test_default_filename(self):
        name = default_filename("CHA2DS2-VA Score", "json")
        assert re.fullmatch(r"clinscore_CHA2DS2-VA_Score_\d{8}_\d{6}\.json", name)

    def test_default_filename_replaces_unsafe_characters(self):
        name = default_filename("eGFR (CKD-EPI 2021)", "csv")
        assert name.startswith("clinscore_eGFR__CKD-EPI_2021__")
