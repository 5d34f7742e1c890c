"""
Set text parsing.

Coaches author set objectives as free text ("8-12" reps at "8/10"),
and users log performed sets with whatever the input field held. This
module turns both into numbers, with the fallbacks the analytics rely on:

- reps: single value, range mean, or REPS_FALLBACK for anything else
- intensity: strictly "N/10" with N in 1..10, otherwise None
"""
import re
from typing import Any, Optional, Union

REPS_FALLBACK = 10.0

_WHITESPACE = re.compile(r"\s+")
_SINGLE_REPS = re.compile(r"^\d+(?:\.\d+)?$")
_RANGE_REPS = re.compile(r"^(\d+(?:\.\d+)?)-(\d+(?:\.\d+)?)$")
_INTENSITY = re.compile(r"^(\d+)/10$")


def _compact(value: Any) -> str:
    return _WHITESPACE.sub("", str(value))


def parse_reps(text: Union[str, int, float, None]) -> float:
    """
    Parse a reps objective.

    Args:
        text: "8", "8-12", "AMRAP", a number, or None

    Returns:
        The rep count, the mean of a range, or REPS_FALLBACK when the
        value is missing, non-numeric or not positive.
    """
    if text is None or isinstance(text, bool):
        return REPS_FALLBACK

    if isinstance(text, (int, float)):
        return float(text) if text > 0 else REPS_FALLBACK

    compact = _compact(text)

    if _SINGLE_REPS.match(compact):
        value = float(compact)
        return value if value > 0 else REPS_FALLBACK

    match = _RANGE_REPS.match(compact)
    if match:
        low, high = float(match.group(1)), float(match.group(2))
        mean = (low + high) / 2
        return mean if mean > 0 else REPS_FALLBACK

    return REPS_FALLBACK


def parse_intensity(text: Optional[str]) -> Optional[int]:
    """
    Parse an "N/10" intensity.

    There is no fallback: anything that is not exactly N/10 with N in
    [1, 10] yields None.
    """
    if text is None:
        return None

    match = _INTENSITY.match(_compact(text))
    if not match:
        return None

    value = int(match.group(1))
    if 1 <= value <= 10:
        return value
    return None


def parse_number(value: Any) -> Optional[float]:
    """Parse a logged weight or rep count. Empty and non-numeric give None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    compact = _compact(value).replace(",", ".")
    if not compact:
        return None
    try:
        return float(compact)
    except ValueError:
        return None


def has_actual_data(performed_set: Any) -> bool:
    """True when a performed set carries a numeric reps or weight value."""
    if performed_set is None:
        return False
    reps = getattr(performed_set, "reps", None)
    weight = getattr(performed_set, "weight", None)
    if isinstance(performed_set, dict):
        reps = performed_set.get("reps")
        weight = performed_set.get("weight")
    return parse_number(reps) is not None or parse_number(weight) is not None
