"""
Post Bid Report loading.

Reads the bid report spreadsheet (Excel or Apple Numbers), parses each row into
a Piece and groups pieces sharing a run number into straight or split runs.
"""

from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime, time, timedelta
from pathlib import Path

from numbers_parser import Document
from openpyxl import load_workbook

from core.config import BID_REPORT_PATH, BID_REPORT_SHEET
from core.times import parse_time
from models.events import Piece, Run, SplitRun, StraightRun

# Columns: Run, Block, Report Time, Sign Out
ROW_WIDTH = 4


# =============================================================================
# GROUPING
# =============================================================================


def read_bidded_shifts(rows: Iterable[Sequence[str]]) -> Iterator[Piece]:
    """
    Parse bid report rows into pieces.

    Rows without a readable report time or sign-out time are skipped.
    """
    for row in rows:
        cells = list(row[:ROW_WIDTH]) + [""] * (ROW_WIDTH - len(row))
        report_time = parse_time(cells[2])
        sign_out = parse_time(cells[3])
        if report_time is not None and sign_out is not None:
            yield Piece(
                run=cells[0],
                block=cells[1],
                report_time=report_time,
                sign_out=sign_out,
            )


def load_bidded_runs(rows: Iterable[Sequence[str]]) -> dict[str, Run]:
    """
    Group bid report rows into runs keyed by run number.

    One piece makes a straight run and two make a split run. A run number that
    appears any other number of times (duplicate rows) is left out.
    """
    # dicts keep first-seen order of run numbers
    grouped: dict[str, list[Piece]] = {}
    for piece in read_bidded_shifts(rows):
        grouped.setdefault(piece.run, []).append(piece)

    runs: dict[str, Run] = {}
    for run, pieces in grouped.items():
        if len(pieces) == 1:
            runs[run] = StraightRun(shift=pieces[0])
        elif len(pieces) == 2:
            runs[run] = SplitRun(first_half=pieces[0], second_half=pieces[1])
    return runs


# =============================================================================
# INPUT READING
# =============================================================================


def display_text(value) -> str:
    """Render a spreadsheet cell value the way the sheet displays it."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.time()
    if isinstance(value, time):
        return f"{value.hour}:{value.minute:02d}"
    if isinstance(value, timedelta):
        minutes = int(value.total_seconds()) // 60
        return f"{minutes // 60}:{minutes % 60:02d}"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _read_excel_rows(path: Path, sheet_name: str) -> list[tuple]:
    wb = load_workbook(str(path), read_only=True, data_only=True)
    try:
        if sheet_name not in wb.sheetnames:
            raise ValueError(f"Expected sheet '{sheet_name}' not found in {path.name}")
        return list(wb[sheet_name].iter_rows(values_only=True))
    finally:
        wb.close()


def _read_numbers_rows(path: Path, sheet_name: str) -> list[tuple]:
    doc = Document(str(path))
    try:
        table = doc.sheets[sheet_name].tables[0]
    except (KeyError, IndexError) as e:
        raise ValueError(f"Expected sheet '{sheet_name}' not found in {path.name}") from e
    return table.rows(values_only=True)


def read_bid_report_rows(
    path: Path, sheet_name: str = BID_REPORT_SHEET
) -> list[list[str]]:
    """
    Read the data rows of the bid report as display text.

    Supports .xlsx (openpyxl) and .numbers (numbers-parser) files. The header
    row is skipped and only the first four columns are kept.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file type or sheet is not recognised
    """
    if not path.exists():
        raise FileNotFoundError(f"Bid report not found: {path}")

    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xlsm"):
        raw_rows = _read_excel_rows(path, sheet_name)
    elif suffix == ".numbers":
        raw_rows = _read_numbers_rows(path, sheet_name)
    else:
        raise ValueError(f"Unsupported bid report format: {path.suffix}")

    return [
        [display_text(value) for value in row[:ROW_WIDTH]]
        for row in raw_rows[1:]  # Skip header
    ]


def load_runs_from_file(path: Path | None = None) -> dict[str, Run]:
    """Load all bidded runs from the bid report file (read fresh on every call)."""
    path = path or BID_REPORT_PATH
    print(f"Loading bid report: {path}")
    runs = load_bidded_runs(read_bid_report_rows(path))
    print(f"  Found {len(runs)} runs")
    return runs
