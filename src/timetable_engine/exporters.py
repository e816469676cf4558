"""Export functionality for generated timetables."""

import csv
import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from .exceptions import InvalidDataError
from .scheduler.models import GeneratedTimetable
from .scheduler.utils import compute_statistics

ENTRY_COLUMNS = ["Day", "Period", "Time", "Subject", "Faculty", "Room", "Batch"]
CONFLICT_COLUMNS = ["ID", "Type", "Severity", "Description", "Affected Entries", "Suggestions"]
SUMMARY_COLUMNS = ["Metric", "Value"]


def _entry_rows(timetable: GeneratedTimetable) -> list[dict]:
    return [
        {
            "Day": entry.time_slot.day,
            "Period": entry.time_slot.period,
            "Time": entry.time_slot.time_range,
            "Subject": entry.subject.code,
            "Faculty": entry.faculty.name,
            "Room": entry.room.name,
            "Batch": entry.batch.name,
        }
        for entry in timetable.entries
    ]


def _conflict_rows(timetable: GeneratedTimetable) -> list[dict]:
    return [
        {
            "ID": conflict.id,
            "Type": conflict.type.value,
            "Severity": conflict.severity.value,
            "Description": conflict.description,
            "Affected Entries": "; ".join(conflict.affected_entries),
            "Suggestions": "; ".join(conflict.suggestions),
        }
        for conflict in timetable.conflicts
    ]


def _summary_rows(timetable: GeneratedTimetable) -> list[dict]:
    stats = compute_statistics(timetable)
    return [
        {"Metric": "Name", "Value": timetable.name},
        {"Metric": "Generated At", "Value": timetable.generated_at},
        {"Metric": "Status", "Value": timetable.status.value},
        {"Metric": "Score", "Value": timetable.score},
        {"Metric": "Entries", "Value": stats.total_entries},
        {"Metric": "Conflicts", "Value": stats.total_conflicts},
        {"Metric": "Unscheduled", "Value": stats.total_unscheduled},
    ]


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, timetable: GeneratedTimetable, output_path: str | Path) -> None:
        """Export timetable to file.

        Args:
            timetable: GeneratedTimetable to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, timetable: GeneratedTimetable, output_path: str | Path) -> None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                timetable.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    def export(self, timetable: GeneratedTimetable, output_path: str | Path) -> None:
        """Export timetable to CSV files.

        Creates three files:
        - entries.csv: Placed sessions
        - conflicts.csv: Conflicts observed during generation
        - summary.csv: Overall summary

        Args:
            timetable: GeneratedTimetable to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        self._write_csv(output_dir / "entries.csv", _entry_rows(timetable), ENTRY_COLUMNS)
        self._write_csv(
            output_dir / "conflicts.csv", _conflict_rows(timetable), CONFLICT_COLUMNS
        )
        self._write_csv(
            output_dir / "summary.csv", _summary_rows(timetable), SUMMARY_COLUMNS
        )

    def _write_csv(self, output_path: Path, rows: list[dict], fieldnames: list[str]) -> None:
        """Write rows to CSV file (header only when there are no rows)."""
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(rows)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, timetable: GeneratedTimetable, output_path: str | Path) -> None:
        """Export timetable to Excel file.

        Creates workbook with sheets:
        - Entries: Placed sessions
        - Conflicts: Conflicts observed during generation
        - Summary: Overall summary

        Args:
            timetable: GeneratedTimetable to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            pd.DataFrame(_entry_rows(timetable), columns=ENTRY_COLUMNS).to_excel(
                writer, sheet_name="Entries", index=False
            )
            pd.DataFrame(_conflict_rows(timetable), columns=CONFLICT_COLUMNS).to_excel(
                writer, sheet_name="Conflicts", index=False
            )
            pd.DataFrame(_summary_rows(timetable), columns=SUMMARY_COLUMNS).to_excel(
                writer, sheet_name="Summary", index=False
            )


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ValueError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ValueError(
            f"Unsupported format: {format_type}. Supported: {', '.join(exporters.keys())}"
        )

    return exporters[format_type]()


def load_timetable_json(input_path: Path | str) -> GeneratedTimetable:
    """Load a timetable exported by JSONExporter.

    Args:
        input_path: Path to JSON file

    Returns:
        GeneratedTimetable

    Raises:
        InvalidDataError: If the file is not valid JSON or not a timetable
    """
    file_name = Path(input_path).name
    with open(input_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidDataError(str(e), file_name=file_name) from e

    if not isinstance(data, dict):
        raise InvalidDataError("expected an object", file_name=file_name)
    try:
        return GeneratedTimetable.from_dict(data)
    except KeyError as e:
        raise InvalidDataError(f"missing required field {e}", file_name=file_name) from e
    except (AttributeError, TypeError, ValueError) as e:
        raise InvalidDataError(str(e), file_name=file_name) from e
