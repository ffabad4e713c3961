#!/usr/bin/env python3
"""
Generate a sample Post Bid Report spreadsheet for local runs and tests.

Usage:
    uv run python tests/fixtures/generate_bid_report.py [output.xlsx]
"""

import random
import sys
from datetime import time
from pathlib import Path

from faker import Faker
from openpyxl import Workbook

HEADERS = ["Run", "Block", "Report Time", "Sign Out"]
SHEET_NAME = "Post Bid Report"


def write_bid_report(path: Path, rows: list[list], sheet_name: str = SHEET_NAME) -> Path:
    """Write rows (without header) to an .xlsx bid report."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    ws.append(HEADERS)
    for row in rows:
        ws.append(row)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(path))
    return path


def fake_bid_rows(run_count: int = 40, seed: int = 1234) -> list[list]:
    """
    Random but plausible runs: about a third are splits.

    Times are written as real time cells, the way the bid report stores them.
    """
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)

    rows = []
    run_numbers = sorted({fake.bothify("1###") for _ in range(run_count)})
    for run_number in run_numbers:
        if rng.random() < 0.33:
            morning = rng.randint(4, 7)
            evening = rng.randint(13, 16)
            rows.append([run_number, str(rng.randint(1, 60)), time(morning, 15), time(morning + 4, 0)])
            rows.append([run_number, str(rng.randint(1, 60)), time(evening, 30), time(evening + 4, 10)])
        else:
            start = rng.randint(4, 15)
            rows.append([run_number, str(rng.randint(1, 60)), time(start, 0), time(start + 8, 45)])
    return rows


if __name__ == "__main__":
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("data/post-bid-report.xlsx")
    write_bid_report(output, fake_bid_rows())
    print(f"Wrote sample bid report to {output}")
