"""
Fire size classification.

Maps burned acreage to one of four visual size classes. The map markers
and the proportional legend are both driven by SIZE_CLASS_TABLE.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class SizeClass(Enum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    MEGA = "Mega"


@dataclass(frozen=True)
class SizeClassRule:
    """Upper acreage bound (inclusive) and marker scale for one class."""
    size_class: SizeClass
    max_acres: Optional[float]  # None = unbounded
    scale: float


BASE_MARKER_SIZE = 12.0  # points, small fires

SIZE_CLASS_TABLE: Tuple[SizeClassRule, ...] = (
    SizeClassRule(SizeClass.SMALL, 2500.0, 1.0),
    SizeClassRule(SizeClass.MEDIUM, 10000.0, 1.4),
    SizeClassRule(SizeClass.LARGE, 50000.0, 2.2),
    SizeClassRule(SizeClass.MEGA, None, 3.4),
)


def classify_acres(acres: float) -> SizeClass:
    """
    Classify a burned acreage.

    Parameters
    ----------
    acres : float
        Burned acres, must be non-negative

    Returns
    -------
    SizeClass
        First class whose upper bound is >= ``acres``

    Raises
    ------
    ValueError
        If ``acres`` is negative, NaN or not a number
    """
    try:
        value = float(acres)
    except (TypeError, ValueError):
        raise ValueError(f"Acreage must be numeric, got {acres!r}")
    if math.isnan(value) or value < 0:
        raise ValueError(f"Acreage must be non-negative, got {acres!r}")

    for rule in SIZE_CLASS_TABLE:
        if rule.max_acres is None or value <= rule.max_acres:
            return rule.size_class
    return SIZE_CLASS_TABLE[-1].size_class


def _rule_for(size_class: SizeClass) -> SizeClassRule:
    return next(rule for rule in SIZE_CLASS_TABLE if rule.size_class is size_class)


def marker_size(size_class: SizeClass) -> float:
    """Marker diameter in points."""
    return BASE_MARKER_SIZE * _rule_for(size_class).scale


def _format_acres(acres: float) -> str:
    if acres >= 1000:
        return f"{acres / 1000:g}k"
    return f"{acres:g}"


def legend_entries() -> List[Tuple[str, float]]:
    """(label, marker size) pairs for the proportional legend, smallest first."""
    entries = []
    lower = None
    for rule in SIZE_CLASS_TABLE:
        name = rule.size_class.value
        if lower is None:
            label = f"{name}: up to {_format_acres(rule.max_acres)}"
        elif rule.max_acres is None:
            label = f"{name}: {_format_acres(lower)}+"
        else:
            label = f"{name}: {_format_acres(lower)}-{_format_acres(rule.max_acres)}"
        entries.append((label, BASE_MARKER_SIZE * rule.scale))
        lower = rule.max_acres
    return entries
