"""
Fire incident loading module.

Parses MTBS/WFIGS style fire point records into typed Incident objects.
Individual records with malformed fields degrade gracefully instead of
aborting the load.
"""

import math
import warnings
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

import geopandas as gpd
import pandas as pd
from shapely.errors import ShapelyError
from shapely.geometry import Point, shape


@dataclass(frozen=True)
class IncidentFields:
    """Names of the source properties read for each incident."""
    date: str = "Ig_Date"
    incident_type: str = "Incid_Type"
    acres: str = "BurnBndAc"
    featured: str = "isFeatureFire"
    name: str = "FireName"
    cause: str = "Cause"
    cost: str = "Cost"
    lives_lost: str = "LivesLost"
    structures_lost: str = "StrucLost"


DEFAULT_FIELDS = IncidentFields()


@dataclass(frozen=True)
class Incident:
    """A single recorded fire event."""
    ignition_date: Any
    incident_type: Optional[str]
    burned_acres: float
    is_featured: bool = False
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    # Narrative metadata, only consumed by popups
    name: Optional[str] = None
    cause: Optional[str] = None
    cost: Optional[float] = None
    lives_lost: Optional[int] = None
    structures_lost: Optional[int] = None

    @property
    def year(self) -> Optional[int]:
        """Ignition year, or None if the date cannot be parsed."""
        return parse_year(self.ignition_date)

    @property
    def has_location(self) -> bool:
        return self.longitude is not None and self.latitude is not None


def parse_year(value: Any) -> Optional[int]:
    """
    Extract the ignition year from a raw date value.

    Strings use their first four characters (ISO-like dates); date-like
    objects use their ``year`` attribute. Anything else yields None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        prefix = value.strip()[:4]
        if len(prefix) == 4 and prefix.isdigit():
            return int(prefix)
        return None
    if isinstance(value, (pd.Timestamp, date)):
        if pd.isna(value):
            return None
        return int(value.year)
    return None


def parse_acres(value: Any) -> float:
    """Coerce a raw acreage value to a non-negative float (0.0 if invalid)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        acres = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(acres) or math.isinf(acres) or acres < 0:
        return 0.0
    return acres


def parse_featured(value: Any) -> bool:
    """Featured flag is numeric 1 (or boolean true)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    return False


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    return text or None


def _optional_number(value: Any, cast=float):
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return cast(number)


def _point_coords(geometry: Any) -> Tuple[Optional[float], Optional[float]]:
    if geometry is None:
        return None, None
    if isinstance(geometry, Mapping):
        try:
            geometry = shape(geometry)
        except (ShapelyError, ValueError, TypeError, KeyError, AttributeError):
            return None, None
    if getattr(geometry, "is_empty", True):
        return None, None
    if not isinstance(geometry, Point):
        # Perimeters and multipoints collapse to their centroid
        geometry = geometry.centroid
    return float(geometry.x), float(geometry.y)


def parse_incident(
    properties: Mapping[str, Any],
    geometry: Any = None,
    fields: IncidentFields = DEFAULT_FIELDS,
) -> Incident:
    """
    Build an Incident from a property mapping.

    Parameters
    ----------
    properties : mapping
        Feature properties (GeoJSON ``properties`` or a frame row)
    geometry : shapely geometry or GeoJSON geometry dict, optional
        Incident location
    fields : IncidentFields
        Source property names

    Returns
    -------
    Incident
        Parsed incident. Never raises for malformed field values.
    """
    if not isinstance(properties, Mapping):
        properties = {}
    raw_date = properties.get(fields.date)
    if isinstance(raw_date, float) and math.isnan(raw_date):
        raw_date = None
    lon, lat = _point_coords(geometry)

    return Incident(
        ignition_date=raw_date,
        incident_type=_optional_text(properties.get(fields.incident_type)),
        burned_acres=parse_acres(properties.get(fields.acres)),
        is_featured=parse_featured(properties.get(fields.featured)),
        longitude=lon,
        latitude=lat,
        name=_optional_text(properties.get(fields.name)),
        cause=_optional_text(properties.get(fields.cause)),
        cost=_optional_number(properties.get(fields.cost)),
        lives_lost=_optional_number(properties.get(fields.lives_lost), int),
        structures_lost=_optional_number(properties.get(fields.structures_lost), int),
    )


class IncidentStore(Sequence):
    """Immutable, positional collection of incidents for one session."""

    def __init__(self, incidents: Iterable[Incident] = ()):
        self._incidents: Tuple[Incident, ...] = tuple(incidents)

    def __len__(self) -> int:
        return len(self._incidents)

    def __getitem__(self, index):
        return self._incidents[index]

    def __iter__(self) -> Iterator[Incident]:
        return iter(self._incidents)

    def __repr__(self) -> str:
        return f"IncidentStore({len(self)} incidents)"

    @property
    def incidents(self) -> Tuple[Incident, ...]:
        return self._incidents

    def featured(self) -> List[Incident]:
        """Incidents flagged for narrative display."""
        return [incident for incident in self._incidents if incident.is_featured]

    def years(self) -> List[int]:
        """Sorted distinct ignition years."""
        return sorted({y for y in (i.year for i in self._incidents) if y is not None})

    @classmethod
    def from_features(
        cls,
        features: Iterable[Mapping[str, Any]],
        fields: IncidentFields = DEFAULT_FIELDS,
    ) -> "IncidentStore":
        """Build a store from GeoJSON feature dicts."""
        incidents = []
        for feature in features:
            if not isinstance(feature, Mapping):
                continue
            incidents.append(
                parse_incident(feature.get("properties") or {}, feature.get("geometry"), fields)
            )
        return cls(incidents)

    @classmethod
    def from_geodataframe(
        cls,
        gdf: Union[gpd.GeoDataFrame, pd.DataFrame],
        fields: IncidentFields = DEFAULT_FIELDS,
    ) -> "IncidentStore":
        """Build a store from a (Geo)DataFrame, one incident per row."""
        geometry_col = gdf.geometry.name if isinstance(gdf, gpd.GeoDataFrame) else None
        records = gdf.to_dict(orient="records")
        incidents = []
        for row in records:
            geometry = row.pop(geometry_col, None) if geometry_col else None
            incidents.append(parse_incident(row, geometry, fields))
        return cls(incidents)


def load_incidents(
    filepath: str,
    fields: IncidentFields = DEFAULT_FIELDS,
) -> IncidentStore:
    """
    Load fire incidents from GeoJSON (or any vector format geopandas reads).

    Parameters
    ----------
    filepath : str
        Path to the incident file
    fields : IncidentFields
        Source property names

    Returns
    -------
    IncidentStore
        Parsed incidents in file order

    Raises
    ------
    FileNotFoundError
        If file does not exist
    ValueError
        If the file cannot be read as vector data
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"Incident file not found: {filepath}")

    try:
        gdf = gpd.read_file(path)
    except Exception as e:
        raise ValueError(f"Could not read incident file {filepath}. Error: {e}")

    if gdf.crs is not None and gdf.crs.to_epsg() != 4326:
        gdf = gdf.to_crs("EPSG:4326")

    store = IncidentStore.from_geodataframe(gdf, fields)

    n_unlocated = sum(1 for incident in store if not incident.has_location)
    if n_unlocated:
        warnings.warn(f"{n_unlocated} incidents have no location and will not be mapped")

    return store


def to_geodataframe(incidents: Iterable[Incident]) -> gpd.GeoDataFrame:
    """
    Convert incidents to a WGS84 GeoDataFrame.

    Incidents without a location get an empty geometry.
    """
    rows: List[Dict[str, Any]] = []
    geometry = []
    for incident in incidents:
        rows.append({
            'ignition_date': None if incident.ignition_date is None else str(incident.ignition_date),
            'year': incident.year,
            'incident_type': incident.incident_type,
            'burned_acres': incident.burned_acres,
            'is_featured': incident.is_featured,
            'name': incident.name,
        })
        geometry.append(Point(incident.longitude, incident.latitude) if incident.has_location else None)

    columns = ['ignition_date', 'year', 'incident_type', 'burned_acres', 'is_featured', 'name']
    return gpd.GeoDataFrame(pd.DataFrame(rows, columns=columns), geometry=geometry, crs="EPSG:4326")
