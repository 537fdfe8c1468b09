"""
Annual acreage aggregation module.

Reduces incidents into per-year burned-acreage summaries for the
stacked bar chart.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Sequence

import pandas as pd

from ..io.load_incidents import Incident
from .years import year_label

# Only these types are summed into the displayed total
AGGREGATED_TYPES = ("Wildfire", "Unknown")


@dataclass(frozen=True)
class YearBucket:
    """Aggregated acreage for one calendar year."""
    year: int
    total_acres: float
    type_acres: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'type_acres', MappingProxyType(dict(self.type_acres)))

    def acres_for(self, incident_type: str) -> float:
        return self.type_acres.get(incident_type, 0.0)


def aggregate_by_year(
    incidents: Iterable[Incident],
    types: Sequence[str] = AGGREGATED_TYPES,
) -> Dict[int, YearBucket]:
    """
    Sum burned acreage per ignition year and incident type.

    Parameters
    ----------
    incidents : iterable of Incident
        Full incident collection
    types : sequence of str
        Incident types included in the totals

    Returns
    -------
    dict
        Year -> YearBucket, only for years with at least one qualifying
        incident. Callers must look buckets up by year, never by position.

    Notes
    -----
    Incidents are skipped when the ignition year cannot be parsed, the type
    is not in ``types``, or the acreage is zero or missing.
    """
    allowed = set(types)
    sums: Dict[int, Dict[str, float]] = {}

    for incident in incidents:
        year = incident.year
        if year is None:
            continue
        if incident.incident_type not in allowed:
            continue
        acres = incident.burned_acres
        if not acres or acres <= 0:
            continue

        per_type = sums.setdefault(year, {})
        per_type[incident.incident_type] = per_type.get(incident.incident_type, 0.0) + acres

    return {
        year: YearBucket(year=year, total_acres=sum(per_type.values()), type_acres=per_type)
        for year, per_type in sums.items()
    }


def year_summary_frame(
    buckets: Mapping[int, YearBucket],
    types: Sequence[str] = AGGREGATED_TYPES,
) -> pd.DataFrame:
    """
    Tabulate year buckets for plotting and export.

    Returns
    -------
    pandas.DataFrame
        Columns 'year', 'total_acres' and one column per type, sorted by year.
    """
    columns = ['year', 'total_acres'] + list(types)
    rows = [
        [bucket.year, bucket.total_acres] + [bucket.acres_for(t) for t in types]
        for bucket in buckets.values()
    ]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values('year').reset_index(drop=True)


def year_caption(buckets: Mapping[int, YearBucket], year: int) -> str:
    """Short "<year>: <acres> acres burned" caption for the map title."""
    bucket = buckets.get(year)
    total = bucket.total_acres if bucket is not None else 0.0
    return f"{year_label(year)}: {total:,.0f} acres burned"
