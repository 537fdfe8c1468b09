"""Input/Output modules for FireHistory."""

from .load_incidents import (
    Incident,
    IncidentFields,
    IncidentStore,
    load_incidents,
    parse_incident,
    parse_year,
    to_geodataframe,
)

__all__ = [
    "Incident",
    "IncidentFields",
    "IncidentStore",
    "load_incidents",
    "parse_incident",
    "parse_year",
    "to_geodataframe",
]
