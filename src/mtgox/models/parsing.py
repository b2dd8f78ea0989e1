# src/mtgox/models/parsing.py
from __future__ import annotations
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from mtgox.errors import ParseError


def parse_decimal(value: Any, field: str, *, signed: bool = False) -> Decimal:
    """
    Response values arrive as strings, ints or floats depending on the endpoint.
    Anything that is not a finite number raises ParseError; there is no zero default.
    """
    # bool is an int subclass, and True would quietly become 1
    if value is None or isinstance(value, bool):
        raise ParseError(field, value, "missing")
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip()
        if not text:
            raise ParseError(field, value, "empty")
        try:
            d = Decimal(text)
        except InvalidOperation:
            raise ParseError(field, value) from None
    else:
        raise ParseError(field, value, f"unsupported type {type(value).__name__}")

    if not d.is_finite():
        raise ParseError(field, value, "not finite")
    if not signed and d < 0:
        raise ParseError(field, value, "negative")
    return d


def parse_timestamp(value: Any, field: str = "date") -> datetime:
    """Seconds since the epoch -> aware UTC datetime."""
    secs = parse_decimal(value, field)
    try:
        return datetime.fromtimestamp(float(secs), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ParseError(field, value, "timestamp out of range") from None


def parse_type_code(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # isdecimal, not isdigit: "²" is a digit that int() rejects
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def format_decimal(value: Any, field: str = "value") -> str:
    """
    Plain (non-scientific) string for request parameters.
    Goes through parse_decimal, so NaN, infinities, negatives and garbage
    raise ParseError before anything is sent.
    """
    d = parse_decimal(value, field)
    text = format(d, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
