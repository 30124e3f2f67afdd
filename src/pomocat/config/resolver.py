"""Resolve raw configuration values into safe integers.

Bad values never fail: they are reported as warnings and replaced, so a typo
in the config file degrades one setting instead of stopping the timer.
"""

from __future__ import annotations

import logging
import math
from typing import Any

_log = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful duration.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def resolve_positive_integer(raw_value: Any, name: str, default: int) -> int:
    """Return *raw_value* as a positive integer, or *default*.

    * positive ``int`` → unchanged
    * positive non-integer number → rounded to the nearest integer (warned)
    * anything else → *default* (warned)
    """
    if _is_number(raw_value) and not (isinstance(raw_value, float) and math.isnan(raw_value)):
        if isinstance(raw_value, int) and raw_value > 0:
            return raw_value
        if raw_value > 0 and not math.isinf(raw_value):
            rounded = round(raw_value)
            if rounded > 0:
                _log.warning("%s=%r is not an integer — rounded to %d", name, raw_value, rounded)
                return rounded
    _log.warning("%s=%r is not a positive number — using default %d", name, raw_value, default)
    return default


def resolve_delay(raw_value: Any, default: int) -> int:
    """Resolve the seconds argument of *delay break*.

    ``None`` means "use the configured default".  Negative or non-numeric
    input clamps to ``0``; positive fractions are rounded.
    """
    if raw_value is None:
        return default
    if not _is_number(raw_value) or math.isnan(raw_value) or math.isinf(raw_value):
        _log.warning("Break delay %r is not a number — using 0", raw_value)
        return 0
    if raw_value < 0:
        _log.warning("Break delay %r is negative — using 0", raw_value)
        return 0
    if isinstance(raw_value, float):
        return round(raw_value)
    return raw_value
