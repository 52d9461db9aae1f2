from __future__ import annotations

import datetime as dt

DATE_FMT = "%Y-%m-%d"


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_float(value: object, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return default


def join_url(base: str, path: str) -> str:
    base = base.rstrip("/")
    path = path.lstrip("/")
    if not path:
        return base + "/"
    return f"{base}/{path}"


def format_date(value: dt.date) -> str:
    return value.strftime(DATE_FMT)


def format_priority(value: float) -> str:
    text = f"{value:.1f}"
    if float(text) == value:
        return text
    return repr(float(value))
