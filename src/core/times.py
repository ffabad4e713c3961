"""
Time-of-day parsing shared by form responses and the bid report.
"""

import re

from models.events import Time

TIME_PATTERN = re.compile(r"(\d\d?):(\d\d?)")


def parse_time(value) -> Time | None:
    """
    Extract the first 'H:MM' style time from a string.

    Hours and minutes are taken as written, without range checks. Returns None
    for text with no time in it and for anything that isn't a string (list and
    grid responses, missing answers).
    """
    if not isinstance(value, str):
        return None
    match = TIME_PATTERN.search(value)
    if match is None:
        return None
    return Time(hours=int(match.group(1)), minutes=int(match.group(2)))
