"""
Result Export
=============

Flattens a calculation result into an ExportRecord and renders it as JSON
or CSV. Zero-point breakdown entries are dropped; labels and texts are
resolved to the requested language.

Usage:
    record = ExportRecord.from_result(result, "CHA2DS2-VA Score", language="de")
    export_to_file(record, default_filename(record.score_name, "csv"))

Author: ClinScore Team
Version: 1.0.0
"""

import csv
import io
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field

from clinscore.scoring.results import CalculationResult


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "csv")


class ExportFieldEntry(BaseModel):
    """One non-zero breakdown line."""
    field: str
    label: str
    points: int


class ExportRecord(BaseModel):
    """Flattened, language-resolved form of a calculation result."""
    score_name: str
    total_score: int
    risk: str
    recommendation: str
    details: str = ""
    field_breakdown: List[ExportFieldEntry] = Field(default_factory=list)
    timestamp: str

    @classmethod
    def from_result(
        cls,
        result: CalculationResult,
        score_name: str,
        language: str = "en",
    ) -> "ExportRecord":
        texts = result.localized(language)
        return cls(
            score_name=score_name,
            total_score=result.total_score,
            risk=texts["risk"] or "",
            recommendation=texts["recommendation"] or "",
            details=texts["details"] or "",
            field_breakdown=[
                ExportFieldEntry(
                    field=entry.field,
                    label=entry.label_for(language),
                    points=entry.points,
                )
                for entry in result.field_scores
                if entry.points != 0
            ],
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )


def export_to_json(record: ExportRecord) -> str:
    """Export a record as pretty-printed JSON."""
    return record.model_dump_json(indent=2)


def export_to_csv(record: ExportRecord) -> str:
    """Export a record as a two-column CSV document."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(["Field", "Value"])
    writer.writerow(["Score", record.score_name])
    writer.writerow(["Total Score", record.total_score])
    writer.writerow(["Risk", record.risk])
    writer.writerow(["Recommendation", record.recommendation])
    if record.details:
        writer.writerow(["Details", record.details])
    writer.writerow(["Timestamp", record.timestamp])

    writer.writerow(["", ""])
    writer.writerow(["Factor", "Points"])
    for entry in record.field_breakdown:
        writer.writerow([entry.label, entry.points])

    return buffer.getvalue()


def export_record(record: ExportRecord, format: str = "json") -> str:
    """Export a record to the given format."""
    if format == "json":
        return export_to_json(record)
    elif format == "csv":
        return export_to_csv(record)
    else:
        raise ValueError(f"Unknown format: {format}")


def export_to_file(record: ExportRecord, path: Union[str, Path]) -> Path:
    """Write a record to disk, choosing the format by file suffix."""
    path = Path(path)
    content = export_record(record, path.suffix.lstrip(".").lower())
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Exported '{record.score_name}' result to {path}")
    return path


def default_filename(score_name: str, extension: str) -> str:
    """Build a timestamped export filename from a score name."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_name = re.sub(r"[^\w-]", "_", score_name, flags=re.ASCII)
    return f"clinscore_{safe_name}_{timestamp}.{extension}"
