"""
Map inclusion filter.

Selects the incidents to draw on the map for a given year.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..io.load_incidents import Incident


@dataclass(frozen=True)
class FilterRules:
    """Inclusion rules for non-featured incidents."""
    min_acres: float = 1.0  # suppresses sub-acre noise at national zoom
    display_types: Tuple[str, ...] = ("Wildfire", "Unknown")


DEFAULT_RULES = FilterRules()


def is_displayed(incident: Incident, year: int, rules: FilterRules = DEFAULT_RULES) -> bool:
    """Inclusion test for a single incident."""
    if incident.is_featured:
        # Featured fires show for every selected year
        return True
    return (
        incident.year == year
        and incident.incident_type in rules.display_types
        and incident.burned_acres >= rules.min_acres
    )


def filter_fires_for_year(
    incidents: Iterable[Incident],
    year: int,
    rules: FilterRules = DEFAULT_RULES,
) -> List[Incident]:
    """
    Select the incidents to render for ``year``.

    Parameters
    ----------
    incidents : iterable of Incident
        Full incident collection
    year : int
        Selected year
    rules : FilterRules
        Acreage floor and type whitelist

    Returns
    -------
    list of Incident
        Featured incidents plus incidents of ``year`` that pass the type
        whitelist and the acreage floor, in input order.
    """
    return [incident for incident in incidents if is_displayed(incident, year, rules)]
