"""Caller-supplied public holidays, optionally loaded from YAML."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path

import yaml

from .config import SETTINGS, ConfigurationError


def normalize_holidays(values: Iterable[str | date] | None) -> list[str]:
    """Validate, de-duplicate and sort holiday dates as "YYYY-MM-DD" strings."""
    out: set[str] = set()
    for value in values or []:
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            out.add(value.strftime("%Y-%m-%d"))
            continue
        text = str(value).strip()
        if not text:
            continue
        try:
            out.add(datetime.strptime(text, "%Y-%m-%d").strftime("%Y-%m-%d"))
        except ValueError as exc:
            raise ConfigurationError(f"Invalid holiday date {text!r}; expected YYYY-MM-DD") from exc
    return sorted(out)


def load_holidays(path: str | Path | None = None) -> list[str]:
    """Read ``holidays: [...]`` from a YAML file; a missing file means no holidays."""
    yaml_path = Path(path or SETTINGS.holidays_file)
    if not yaml_path.exists():
        return []
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not read holidays from {yaml_path}: {exc}") from exc
    if isinstance(data, list):
        return normalize_holidays(data)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Unexpected holidays file layout in {yaml_path}")
    return normalize_holidays(data.get("holidays") or [])
