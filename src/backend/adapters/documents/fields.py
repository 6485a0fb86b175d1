from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any


class DocumentAdapterError(ValueError):
    pass


def require_id(doc: dict[str, Any], collection: str) -> str:
    value = str(doc.get("id") or "").strip()
    if not value:
        raise DocumentAdapterError(f"{collection} document missing required field: id")
    return value


def optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # Stored timestamps carry a time part; only the calendar date matters here.
    if "T" in text:
        text = text.split("T", 1)[0]
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def parse_decimal(value: Any) -> Decimal | None:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        s = value.strip().replace(",", "")
        if not s:
            return None
        try:
            return Decimal(s)
        except InvalidOperation:
            return None
    return None


def parse_int(value: Any, default: int = 0) -> int:
    dec = parse_decimal(value)
    if dec is None or not dec.is_finite():
        return default
    return int(dec)
