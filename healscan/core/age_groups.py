"""
Age parsing and age-group derivation.

The age group is derived once when a record is created and stored with
it, so older records keep the rule that was in effect at the time.
"""

import math
from typing import Any, Optional

from healscan.models.schemas import AgeGroup

CHILD_MAX_AGE = 12
ELDERLY_MIN_AGE = 60


def parse_age(raw: Any) -> Optional[int]:
    """
    Turn a raw age input into a non-negative integer.

    Returns None for missing, blank, non-numeric, non-finite or
    negative input. Fractional ages are truncated.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None

    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(value) or value < 0:
        return None

    return int(value)


def to_age_group(age: Optional[int]) -> AgeGroup:
    """Map an age to its group; None maps to Any Age."""
    if age is None:
        return AgeGroup.ANY_AGE
    if age <= CHILD_MAX_AGE:
        return AgeGroup.CHILD
    if age >= ELDERLY_MIN_AGE:
        return AgeGroup.ELDERLY
    return AgeGroup.ADULT
