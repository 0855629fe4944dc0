"""Pure helpers for slugs, reading time and loosely typed form values."""

import math
import re
from datetime import date, datetime, timezone
from typing import Any

WORDS_PER_MINUTE = 200

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9_\-]+")
_MULTI_HYPHEN_RE = re.compile(r"-{2,}")

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp, the form every stored datetime takes."""
    return datetime.now(timezone.utc)


def slugify(text: str) -> str:
    slug = str(text).lower().strip()
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = slug.replace("&", "-and-")
    slug = _NON_SLUG_RE.sub("", slug)
    slug = _MULTI_HYPHEN_RE.sub("-", slug)
    return slug.strip("-")


def strip_tags(html: str) -> str:
    return _TAG_RE.sub("", html or "")


def reading_time(content: str) -> str:
    words = strip_tags(content).split()
    minutes = max(1, math.ceil(len(words) / WORDS_PER_MINUTE))
    return f"{minutes} min read"


def truncate_html(html: str, max_length: int) -> str:
    plain = strip_tags(html).strip()
    if len(plain) <= max_length:
        return plain
    return plain[:max_length] + "..."


def coerce_bool(value: Any) -> bool:
    """Turn a checkbox-style value ("true", "false", 1, True) into a bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean")


def coerce_datetime(value: Any) -> datetime:
    """Normalize a date-like value to a timezone-aware UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings such as ``2023-06-12`` or
    ``2023-06-12T08:30:00.000Z`` (the form browsers send).
    Values without an offset are taken to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ValueError(f"Cannot interpret {value!r} as a date") from None
    else:
        raise ValueError(f"Cannot interpret {value!r} as a date")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
