"""Showtime parsing for listings that only state am/pm on some times."""

import logging
import re
from collections.abc import Sequence
from datetime import date, datetime, timezone

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"\d:\d\d")

_TIME_PARTS_RE = re.compile(r"(\d+):(\d\d)\W*(\w*)$")


def parse_time(text: str, day: date) -> datetime | None:
    """
    Parse "7:30", "7:30pm" or "12:15 AM" into a UTC datetime on the given day.

    Times without an am/pm suffix are taken as 24-hour clock times.

    Returns:
        Timezone-aware datetime with zero seconds, or None if the text is not
        a valid time
    """
    match = _TIME_PARTS_RE.search(text)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    suffix = match.group(3).lower()
    if suffix == "pm" and hour != 12:
        hour += 12
    elif suffix == "am" and hour == 12:
        hour = 0

    try:
        return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)
    except ValueError:
        logger.debug(f"Dropping out-of-range showtime {text!r}")
        return None


def normalise_times(texts: Sequence[str], day: date | None = None) -> list[datetime | None]:
    """
    Convert a listing's time texts into datetimes, filling in missing am/pm.

    Listings such as "10:00 10:45 11:45pm" only state the meridiem on the
    last time of a run, so the list is walked from the end and each time
    without a suffix borrows the nearest one after it. Times with no suffix
    anywhere after them are parsed as-is.

    Args:
        texts: Raw time texts in listing order
        day: Date the times fall on (default: today, UTC)

    Returns:
        One entry per input text, None where the text could not be parsed
    """
    if day is None:
        day = datetime.now(timezone.utc).date()

    times: list[datetime | None] = [None] * len(texts)
    last_suffix = ""
    for index in range(len(texts) - 1, -1, -1):
        text = texts[index]
        suffix = text[-2:].lower()
        if suffix in ("am", "pm"):
            last_suffix = suffix
        else:
            text += last_suffix
        times[index] = parse_time(text, day)
    return times
