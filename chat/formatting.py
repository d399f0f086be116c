"""
Human-readable formatting for video attributes. Pure functions.
"""

import re
from datetime import datetime

from models import UNAVAILABLE

# ISO-8601 duration as returned by contentDetails.duration, e.g. PT1H2M3S, P1DT2H.
_DURATION = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$")


def format_duration(duration: str | None) -> str:
    """PT1H2M3S -> 1:02:03, PT5M9S -> 5:09. Days fold into hours."""
    if not duration or duration == UNAVAILABLE:
        return UNAVAILABLE
    match = _DURATION.match(duration)
    if not match:
        return duration

    days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    hours += days * 24
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_view_count(count: str | int | None) -> str:
    """1500000 -> 1.5M views, 2500 -> 2.5K views, 42 -> 42 views."""
    if count is None or count == "" or count == UNAVAILABLE:
        return UNAVAILABLE
    try:
        num = int(count)
    except (TypeError, ValueError):
        return UNAVAILABLE

    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M views"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K views"
    return f"{num} views"


def format_publish_date(published_at: str | None) -> str:
    """ISO timestamp -> YYYY-MM-DD. Date only; the time of day is dropped."""
    if not published_at or published_at == UNAVAILABLE:
        return UNAVAILABLE
    try:
        parsed = datetime.fromisoformat(published_at.replace("Z", "+00:00"))
    except ValueError:
        return UNAVAILABLE
    return parsed.date().isoformat()
