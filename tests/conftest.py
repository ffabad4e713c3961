"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add src and test fixtures to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent / "fixtures"))

from models.events import Piece, SplitRun, StraightRun, Time


@pytest.fixture
def fixed_now():
    """Mid-afternoon reference time with seconds set, so zeroing is visible."""
    return datetime(2026, 3, 10, 14, 37, 12, 345000)


@pytest.fixture
def bid_rows():
    """Bid report rows as display text (header already removed)."""
    return [
        ["101", "3", "7:00", "15:00"],
        ["102", "12", "5:15", "9:40"],
        ["102", "14", "14:05", "18:30"],
        ["103", "7", "22:00", "6:00"],
        ["104", "9", "OFF", "OFF"],
    ]


@pytest.fixture
def sample_runs():
    """Run lookup matching bid_rows."""
    return {
        "101": StraightRun(shift=Piece("101", "3", Time(7, 0), Time(15, 0))),
        "102": SplitRun(
            first_half=Piece("102", "12", Time(5, 15), Time(9, 40)),
            second_half=Piece("102", "14", Time(14, 5), Time(18, 30)),
        ),
        "103": StraightRun(shift=Piece("103", "7", Time(22, 0), Time(6, 0))),
    }
