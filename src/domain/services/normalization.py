"""Domain normalization helpers."""

from collections.abc import Sequence
from datetime import date, datetime, time, timezone
from decimal import Decimal
import re

from dateutil.parser import isoparse

from src.domain.constants import BILL_FREQUENCIES, FREQUENCY_ONCE
from src.utils.decimal_utils import parse_decimal


_FREQUENCY_ALIASES = {
    "once": "once",
    "daily": "daily",
    "weekly": "weekly",
    "biweekly": "biweekly",
    "bi-weekly": "biweekly",
    "bi weekly": "biweekly",
    "monthly": "monthly",
    "quarterly": "quarterly",
    "semiannually": "semiannually",
    "semi-annually": "semiannually",
    "semi annually": "semiannually",
    "annually": "annually",
    "yearly": "annually",
}

_WORD_SPLIT = re.compile(r"[\s\-_]+")
_AMOUNT_NOISE = re.compile(r"[^0-9.\-]")
_TRUE_FLAGS = ("true", "yes")


def parse_instant(value) -> datetime | None:
    """Parse a stored date value into a naive UTC datetime.

    Args:
        value: ISO-8601 string, ``date``, ``datetime`` or None.

    Returns:
        datetime | None: Parsed instant, None when missing or unreadable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = isoparse(value.strip())
    except (ValueError, OverflowError):
        return None
    return _to_naive_utc(parsed)


def parse_amount(value) -> Decimal | None:
    """Parse a stored amount, None when it is missing or not numeric."""
    return parse_decimal(value)


def normalize_frequency(frequency: str | None) -> str:
    """Normalize a free-text frequency to a known recurrence value.

    Args:
        frequency: Raw frequency such as ``Bi-Weekly`` or ``yearly``.

    Returns:
        str: Canonical frequency, ``once`` when nothing matches.
    """
    if not frequency:
        return FREQUENCY_ONCE
    cleaned = frequency.strip().lower()
    if not cleaned:
        return FREQUENCY_ONCE
    if cleaned in _FREQUENCY_ALIASES:
        return _FREQUENCY_ALIASES[cleaned]
    by_length = sorted(_FREQUENCY_ALIASES.items(), key=lambda item: len(item[0]))
    for alias, canonical in reversed(by_length):
        if alias in cleaned:
            return canonical
    for alias, canonical in by_length:
        if cleaned in alias:
            return canonical
    return FREQUENCY_ONCE


def normalize_bill_frequency(frequency: str | None) -> str:
    """Normalize a bill frequency.

    Bills never repeat daily, so a daily value reads as ``once``.
    """
    normalized = normalize_frequency(frequency)
    if normalized not in BILL_FREQUENCIES:
        return FREQUENCY_ONCE
    return normalized


def normalize_amount(value) -> Decimal | None:
    """Parse typed amounts such as ``$1,234.50``, None when nothing is left."""
    if isinstance(value, str):
        value = _AMOUNT_NOISE.sub("", value)
    return parse_decimal(value)


def parse_flag(value, default: bool = False) -> bool:
    """Read a yes/no cell; blank cells keep ``default``."""
    if isinstance(value, bool):
        return value
    if value is None or not str(value).strip():
        return default
    return str(value).strip().lower() in _TRUE_FLAGS


def match_category(category: str | None, valid: Sequence[str]) -> str:
    """Resolve free-text input to one of the valid categories.

    Matching tries, in order: exact (case-insensitive), singular/plural,
    all-words containment, substring, then any word longer than two letters.

    Args:
        category: User supplied category text.
        valid: Known categories.

    Returns:
        str: Matched category, the first valid one when nothing matches.
    """
    if not valid:
        return ""
    if not category or not category.strip():
        return valid[0]

    cleaned = category.strip().lower()
    lowered = [(item, item.lower()) for item in valid]

    for item, lower in lowered:
        if lower == cleaned:
            return item

    variant = cleaned[:-1] if cleaned.endswith("s") else f"{cleaned}s"
    for item, lower in lowered:
        if lower == variant:
            return item

    input_words = [word for word in _WORD_SPLIT.split(cleaned) if word]
    for item, lower in lowered:
        category_words = [word for word in _WORD_SPLIT.split(lower) if word]
        if input_words and all(
            any(word in cat_word or cat_word in word for cat_word in category_words)
            for word in input_words
        ):
            return item

    for item, lower in lowered:
        if lower in cleaned or cleaned in lower:
            return item

    for item, lower in lowered:
        if any(len(word) > 2 and word in lower for word in input_words):
            return item

    return valid[0]


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


__all__ = [
    "parse_instant",
    "parse_amount",
    "normalize_frequency",
    "normalize_bill_frequency",
    "normalize_amount",
    "parse_flag",
    "match_category",
]
