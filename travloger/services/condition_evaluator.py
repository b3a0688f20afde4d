"""Evaluate a single scoring-rule condition against a lead field value.

``evaluate_condition`` never raises.  A missing field value, an
unparseable number or date, a malformed regular expression and an
unknown condition type all evaluate to ``False``.

Numeric parsing is lenient: free text is read up to the end of its
leading number (``"12 pax"`` reads as 12), anything else becomes NaN,
and every comparison involving NaN is ``False``.
"""

import logging
import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from travloger.core.constants import (
    GROUP_CAMPAIGN_DESTINATIONS,
    HIGH_INQUIRY_FIT_DESTINATIONS,
)
from travloger.core.exceptions import EvaluationError

logger = logging.getLogger(__name__)

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PREFIX = re.compile(r"^\s*[+-]?\d+")

_SECONDS_PER_DAY = 24 * 60 * 60


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def _to_text(value: Any) -> str:
    """Render a field value the way it is compared as a string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(_to_text(v) for v in value)
    return str(value)


def parse_number(value: Any) -> float:
    """Lenient float parse; returns NaN when *value* has no leading number."""
    if isinstance(value, bool) or isinstance(value, (datetime, date)):
        return math.nan
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    match = _NUMERIC_PREFIX.match(str(value))
    if not match:
        return math.nan
    return float(match.group(0))


def _parse_int(value: str) -> int:
    match = _INTEGER_PREFIX.match(value)
    if not match:
        raise EvaluationError(f"Not an integer: {value!r}")
    return int(match.group(0))


def _to_datetime(value: Any) -> datetime:
    """Interpret *value* as an aware datetime; date-only and naive values are UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        # fromisoformat only accepts a "Z" suffix from Python 3.11
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise EvaluationError(f"Not a date: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _alternatives(condition_text: str) -> list:
    """Split a ``a|b|c`` condition value into its alternatives."""
    return [part for part in condition_text.split("|") if part] or [condition_text]


# ---------------------------------------------------------------------------
# Condition checks
#
# Every check receives the raw field value, its case-folded text, the raw
# condition value, its case-folded text and the evaluation time.
# ---------------------------------------------------------------------------


def _check_equals(value, text, cond, cond_text, now) -> bool:
    return text == cond_text


def _check_not_equals(value, text, cond, cond_text, now) -> bool:
    return text != cond_text


def _check_greater_than(value, text, cond, cond_text, now) -> bool:
    return parse_number(value) > parse_number(cond)


def _check_greater_than_or_equal(value, text, cond, cond_text, now) -> bool:
    return parse_number(value) >= parse_number(cond)


def _check_less_than(value, text, cond, cond_text, now) -> bool:
    return parse_number(value) < parse_number(cond)


def _check_less_than_or_equal(value, text, cond, cond_text, now) -> bool:
    return parse_number(value) <= parse_number(cond)


def _check_between(value, text, cond, cond_text, now) -> bool:
    bounds = [parse_number(part.strip()) for part in cond.split(",")]
    low = bounds[0]
    high = bounds[1] if len(bounds) > 1 else math.nan
    number = parse_number(value)
    return low <= number <= high


def _check_contains(value, text, cond, cond_text, now) -> bool:
    return any(alt in text for alt in _alternatives(cond_text))


def _check_not_contains(value, text, cond, cond_text, now) -> bool:
    return not _check_contains(value, text, cond, cond_text, now)


def _check_starts_with(value, text, cond, cond_text, now) -> bool:
    return text.startswith(cond_text)


def _check_ends_with(value, text, cond, cond_text, now) -> bool:
    return text.endswith(cond_text)


def _check_not_empty(value, text, cond, cond_text, now) -> bool:
    return len(text.strip()) > 0


def _check_is_empty(value, text, cond, cond_text, now) -> bool:
    return len(text.strip()) == 0


def _check_contains_comma(value, text, cond, cond_text, now) -> bool:
    return "," in text


def _check_within_days(value, text, cond, cond_text, now) -> bool:
    target_days = _parse_int(cond)
    target = _to_datetime(value)
    diff_days = math.ceil((target - now).total_seconds() / _SECONDS_PER_DAY)
    return 0 <= diff_days <= target_days


def _check_regex_match(value, text, cond, cond_text, now) -> bool:
    try:
        pattern = re.compile(cond, re.IGNORECASE)
    except re.error as exc:
        raise EvaluationError(f"Invalid pattern {cond!r}: {exc}") from exc
    return pattern.search(text) is not None


def _check_matches_campaign(value, text, cond, cond_text, now) -> bool:
    return any(dest in text for dest in GROUP_CAMPAIGN_DESTINATIONS)


def _check_high_inquiry_fit(value, text, cond, cond_text, now) -> bool:
    return any(dest in text for dest in HIGH_INQUIRY_FIT_DESTINATIONS)


CONDITION_CHECKS: Dict[str, Callable[..., bool]] = {
    "equals": _check_equals,
    "not_equals": _check_not_equals,
    "greater_than": _check_greater_than,
    "greater_than_or_equal": _check_greater_than_or_equal,
    "less_than": _check_less_than,
    "less_than_or_equal": _check_less_than_or_equal,
    "between": _check_between,
    "contains": _check_contains,
    "not_contains": _check_not_contains,
    "starts_with": _check_starts_with,
    "ends_with": _check_ends_with,
    "not_empty": _check_not_empty,
    "is_empty": _check_is_empty,
    "contains_comma": _check_contains_comma,
    "within_days": _check_within_days,
    "regex_match": _check_regex_match,
    "matches_campaign": _check_matches_campaign,
    "high_inquiry_fit": _check_high_inquiry_fit,
}


def evaluate_condition(
    field_value: Any,
    condition_type: str,
    condition_value: Optional[str],
    now: Optional[datetime] = None,
) -> bool:
    """Return ``True`` when *field_value* satisfies the condition.

    *now* fixes the reference time for ``within_days``; it defaults to
    the current UTC time.
    """
    if field_value is None:
        return False

    check = CONDITION_CHECKS.get(condition_type)
    if check is None:
        logger.debug("Unknown condition type %r evaluates to False", condition_type)
        return False

    condition_value = condition_value or ""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    try:
        return check(
            field_value,
            _to_text(field_value).lower(),
            condition_value,
            condition_value.lower(),
            now,
        )
    except EvaluationError as exc:
        logger.debug("Condition %s treated as no match: %s", condition_type, exc.detail)
        return False
