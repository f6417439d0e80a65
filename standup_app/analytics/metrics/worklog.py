"""Work-log duration parsing ("2h 30m", "1d", ...)."""

from __future__ import annotations

import re
from collections.abc import Iterable

from standup_app.core.config import DURATION_UNIT_MINUTES

_TOKEN = re.compile(r"(\d+)\s*([a-zA-Z]+)")


def parse_duration_minutes(text: str | None) -> int:
    """Total minutes in a Jira duration string.

    Every ``<number><unit>`` token is summed; units other than h, d and m
    contribute nothing.
    """
    if not text:
        return 0
    total = 0
    for amount, unit in _TOKEN.findall(text):
        total += int(amount) * DURATION_UNIT_MINUTES.get(unit, 0)
    return total


def total_minutes(durations: Iterable[str | None]) -> int:
    return sum(parse_duration_minutes(d) for d in durations)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(max(0, int(minutes)), 60)
    return f"{hours}h {mins}m"
