"""Framing protocol for streamed standup reports.

A framed stream is a metadata frame followed by generated text::

    [META]{"yesterdayDate":"2024-01-04","todayDate":"2024-01-05","isWeekend":false}[|META]
    [YESTERDAY]
    • Finished the login flow
    [TODAY]
    • API integration
    [BLOCKERS]

The parser is pure: consumers re-parse the whole buffer after each chunk.
A section is confirmed once the marker after it has arrived (the last section
once all three markers are present, or when the stream is known to be
complete). Until then an empty section is ARRIVING, not EMPTY, so a renderer
does not flash "no activity" while the model is still writing.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .config import BULLET_GLYPH, META_CLOSE, META_OPEN, SECTION_MARKERS

YESTERDAY, TODAY, BLOCKERS = SECTION_MARKERS
SECTION_NAMES = ("yesterday", "today", "blockers")
META_KEYS = ("yesterdayDate", "todayDate", "isWeekend")

_META_RE = re.compile(re.escape(META_OPEN) + r"(.*?)" + re.escape(META_CLOSE), re.DOTALL)
_META_FRAME_RE = re.compile(re.escape(META_OPEN) + r".*?(?:" + re.escape(META_CLOSE) + r"|\Z)\n?", re.DOTALL)
_SECTION_RE = {
    "yesterday": re.compile(re.escape(YESTERDAY) + r"(.*?)(?=" + re.escape(TODAY) + r"|\Z)", re.DOTALL),
    "today": re.compile(re.escape(TODAY) + r"(.*?)(?=" + re.escape(BLOCKERS) + r"|\Z)", re.DOTALL),
    "blockers": re.compile(re.escape(BLOCKERS) + r"(.*)\Z", re.DOTALL),
}
_BULLET_PREFIX = re.compile(r"^\s*(?:" + re.escape(BULLET_GLYPH) + r"|[-*])\s*")


class SectionState(Enum):
    ARRIVING = "arriving"
    EMPTY = "empty"
    CONTENT = "content"


@dataclass(slots=True)
class ReportSection:
    name: str
    text: str
    state: SectionState
    confirmed: bool

    @property
    def lines(self) -> list[str]:
        """Bullet lines with the bullet glyph removed; blank lines dropped."""
        return section_lines(self.text)


@dataclass(slots=True)
class ParsedReport:
    meta: dict = field(default_factory=dict)
    yesterday: ReportSection | None = None
    today: ReportSection | None = None
    blockers: ReportSection | None = None

    @property
    def yesterday_date(self) -> str | None:
        return self.meta.get("yesterdayDate")

    @property
    def today_date(self) -> str | None:
        return self.meta.get("todayDate")

    @property
    def is_weekend(self) -> bool | None:
        return self.meta.get("isWeekend")

    @property
    def yesterday_text(self) -> str:
        return self.yesterday.text if self.yesterday else ""

    @property
    def today_text(self) -> str:
        return self.today.text if self.today else ""

    @property
    def blockers_text(self) -> str:
        return self.blockers.text if self.blockers else ""

    def sections(self) -> list[ReportSection]:
        return [s for s in (self.yesterday, self.today, self.blockers) if s is not None]


# ------------------ Producer ------------------
def frame_metadata(meta: Mapping[str, object]) -> str:
    """Metadata frame with exactly the yesterdayDate/todayDate/isWeekend keys."""
    payload = {key: meta.get(key) for key in META_KEYS}
    return f"{META_OPEN}{json.dumps(payload, separators=(',', ':'), ensure_ascii=False)}{META_CLOSE}\n"


def frame_report(meta: Mapping[str, object], chunks: Iterable[str]) -> Iterator[str]:
    """Yield the metadata frame, then every generated chunk verbatim and in order."""
    yield frame_metadata(meta)
    for chunk in chunks:
        if chunk:
            yield chunk


# ------------------ Parser ------------------
def _parse_meta(buffer: str) -> dict:
    match = _META_RE.search(buffer)
    if not match:
        return {}
    try:
        meta = json.loads(match.group(1).strip())
    except (json.JSONDecodeError, ValueError):
        return {}
    return meta if isinstance(meta, dict) else {}


def _trim_partial_marker(text: str) -> str:
    """Drop a marker that has only partly arrived at the end of the buffer."""
    start = text.rfind("[")
    if start == -1:
        return text
    tail = text[start:]
    for marker in SECTION_MARKERS:
        if len(tail) < len(marker) and marker.startswith(tail):
            return text[:start]
    return text


def section_lines(text: str) -> list[str]:
    lines = []
    for line in text.splitlines():
        cleaned = _BULLET_PREFIX.sub("", line).strip()
        if cleaned:
            lines.append(cleaned)
    return lines


def parse_report(buffer: str, *, complete: bool = False) -> ParsedReport:
    """Decode a partial or complete framed buffer.

    Parameters
    ----------
    buffer : str
        Everything received so far.
    complete : bool
        True once the stream has ended; every section is then confirmed.

    Returns
    -------
    ParsedReport
        ``meta`` is ``{}`` when the metadata frame is missing, still arriving
        or not valid JSON. Sections whose marker has not arrived are ``None``
        unless ``complete`` is set, in which case they are confirmed empty.
    """
    meta = _parse_meta(buffer)
    present = {name: marker in buffer for name, marker in zip(SECTION_NAMES, SECTION_MARKERS)}
    all_present = all(present.values())
    following = {"yesterday": "today", "today": "blockers", "blockers": None}

    parsed = ParsedReport(meta=meta)
    for name in SECTION_NAMES:
        if not present[name]:
            if complete:
                setattr(parsed, name, ReportSection(name, "", SectionState.EMPTY, True))
            continue
        nxt = following[name]
        confirmed = complete or (present[nxt] if nxt else all_present)
        match = _SECTION_RE[name].search(buffer)
        raw = match.group(1) if match else ""
        if not confirmed:
            raw = _trim_partial_marker(raw)
        text = raw.strip()
        if text:
            state = SectionState.CONTENT
        elif confirmed:
            state = SectionState.EMPTY
        else:
            state = SectionState.ARRIVING
        setattr(parsed, name, ReportSection(name, text, state, confirmed))
    return parsed


def iter_parsed(chunks: Iterable[str]) -> Iterator[tuple[str, ParsedReport]]:
    """Accumulate chunks and re-parse the whole buffer after each one.

    The final pair is re-parsed with ``complete=True`` once the chunk source
    is exhausted.
    """
    buffer = ""
    for chunk in chunks:
        buffer += chunk
        yield buffer, parse_report(buffer)
    yield buffer, parse_report(buffer, complete=True)


# ------------------ Export helpers ------------------
def to_plain_text(buffer: str) -> str:
    """Flatten a framed report: metadata removed, markers as headings, dashes for bullets."""
    text = _META_FRAME_RE.sub("", buffer)
    for marker in SECTION_MARKERS:
        text = text.replace(marker, f"\n{marker.strip('[]')}\n")
    text = text.replace(BULLET_GLYPH, "-")
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def format_date_with_day(value: str | None) -> str:
    """'2024-01-05' -> 'Friday, Jan 5'. Empty input gives an empty string."""
    if not value:
        return ""
    day = datetime.strptime(value, "%Y-%m-%d")
    return f"{day.strftime('%A')}, {day.strftime('%b')} {day.day}"
