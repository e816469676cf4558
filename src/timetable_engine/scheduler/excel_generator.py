"""Weekly grid workbook generator for generated timetables."""

from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ..models import Institution
from .models import GeneratedTimetable, TimetableEntry
from .utils import build_grid, filter_entries

# Column widths
DAY_COLUMN_WIDTH = 14.0
PERIOD_COLUMN_WIDTH = 24.0

# Fonts
FONT_TITLE = Font(name="Calibri", size=14, bold=True)
FONT_HEADER = Font(name="Calibri", size=11, bold=True)
FONT_CELL = Font(name="Calibri", size=10, bold=False)

# Alignments
ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

# Fills
FILL_HEADER = PatternFill(start_color="DCE6F1", end_color="DCE6F1", fill_type="solid")

# Borders
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

HEADER_ROW = 3
FIRST_DAY_ROW = 4


def sanitize_sheet_name(name: str) -> str:
    """Sanitize sheet name by removing invalid characters.

    Excel sheet names cannot contain: / \\ * ? : [ ]

    Args:
        name: Original sheet name.

    Returns:
        Sanitized sheet name (max 31 chars).
    """
    invalid_chars = r"/\*?:[]"
    for char in invalid_chars:
        name = name.replace(char, "")
    return name[:31] or "Sheet"


def format_cell(entry: TimetableEntry) -> str:
    """Text shown in a grid cell."""
    return f"{entry.subject.code}\n{entry.faculty.name}\n{entry.room.name}"


class TimetableExcelGenerator:
    """Writes one weekly grid sheet per batch.

    Rows are the institution's working days, columns its periods.
    """

    def __init__(self, institution: Institution):
        """Initialize generator.

        Args:
            institution: Calendar whose days and periods frame the grid.
        """
        self.institution = institution

    def generate(self, timetable: GeneratedTimetable, output_path: Path | str) -> Path:
        """Write the grid workbook.

        Args:
            timetable: Timetable to render
            output_path: Path of the .xlsx file

        Returns:
            Path of the written file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        wb = Workbook()
        wb.remove(wb.active)

        batches = {}
        for entry in timetable.entries:
            batches.setdefault(entry.batch.id, entry.batch)

        if not batches:
            ws = wb.create_sheet(title="Timetable")
            ws["A1"] = timetable.name
            ws["A1"].font = FONT_TITLE
            ws["A2"] = "No sessions scheduled"

        used_names: set[str] = set()
        for batch in batches.values():
            title = self._unique_title(sanitize_sheet_name(batch.name), used_names)
            ws = wb.create_sheet(title=title)
            batch_entries = filter_entries(timetable.entries, batch_id=batch.id)
            self._write_sheet(ws, timetable, batch.name, batch_entries)

        wb.save(output_path)
        return output_path

    @staticmethod
    def _unique_title(title: str, used: set[str]) -> str:
        candidate = title
        n = 2
        while candidate in used:
            suffix = f" ({n})"
            candidate = title[: 31 - len(suffix)] + suffix
            n += 1
        used.add(candidate)
        return candidate

    def _write_sheet(
        self,
        ws,
        timetable: GeneratedTimetable,
        batch_name: str,
        entries: list[TimetableEntry],
    ) -> None:
        timings = self.institution.period_timings
        grid = build_grid(entries)

        ws["A1"] = f"{timetable.name} - {batch_name}"
        ws["A1"].font = FONT_TITLE
        ws["A2"] = f"Score: {timetable.score}%  Status: {timetable.status.value}"

        ws.column_dimensions["A"].width = DAY_COLUMN_WIDTH
        header = ws.cell(row=HEADER_ROW, column=1, value="Day")
        header.font = FONT_HEADER
        header.alignment = ALIGN_CENTER
        header.fill = FILL_HEADER
        header.border = THIN_BORDER

        for col, timing in enumerate(timings, start=2):
            cell = ws.cell(
                row=HEADER_ROW,
                column=col,
                value=f"Period {timing.period}\n{timing.start_time}-{timing.end_time}",
            )
            cell.font = FONT_HEADER
            cell.alignment = ALIGN_CENTER
            cell.fill = FILL_HEADER
            cell.border = THIN_BORDER
            ws.column_dimensions[get_column_letter(col)].width = PERIOD_COLUMN_WIDTH

        for row, day in enumerate(self.institution.working_days, start=FIRST_DAY_ROW):
            day_cell = ws.cell(row=row, column=1, value=day)
            day_cell.font = FONT_HEADER
            day_cell.alignment = ALIGN_CENTER
            day_cell.border = THIN_BORDER
            ws.row_dimensions[row].height = 48

            for col, timing in enumerate(timings, start=2):
                entry = grid.get((day, timing.period))
                cell = ws.cell(
                    row=row, column=col, value=format_cell(entry) if entry else None
                )
                cell.font = FONT_CELL
                cell.alignment = ALIGN_CENTER
                cell.border = THIN_BORDER


def generate_timetable_excel(
    timetable: GeneratedTimetable,
    institution: Institution,
    output_path: Path | str,
) -> Path:
    """Write the weekly grid workbook of a timetable."""
    return TimetableExcelGenerator(institution).generate(timetable, output_path)
