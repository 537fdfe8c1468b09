"""
Configuration module for FireHistory.

Defines the FireHistoryConfig dataclass with all viewer and pipeline parameters.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional
import yaml
from datetime import datetime

from .analysis.filters import FilterRules
from .io.load_incidents import IncidentFields


@dataclass
class FireHistoryConfig:
    """Configuration for a FireHistory session."""
    # Core inputs
    incidents_file: Optional[str] = None  # Path to incident GeoJSON
    output_dir: str = "output"

    # Source property names
    date_field: str = "Ig_Date"
    type_field: str = "Incid_Type"
    acres_field: str = "BurnBndAc"
    featured_field: str = "isFeatureFire"
    name_field: str = "FireName"

    # Map inclusion rules
    min_display_acres: float = 1.0
    display_types: List[str] = field(default_factory=lambda: ["Wildfire", "Unknown"])

    # Playback
    play_interval_ms: int = 1000  # 1 year per second
    autoplay: bool = True

    # Map view
    region: str = "US"

    # Output settings
    figure_format: str = "png"
    figure_dpi: int = 150

    # Derived attributes (set after loading)
    run_timestamp: Optional[str] = None

    def __post_init__(self):
        """Set derived attributes after initialization."""
        if self.run_timestamp is None:
            self.run_timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.display_types = list(self.display_types)

    @property
    def play_interval(self) -> float:
        """Playback tick interval in seconds."""
        return self.play_interval_ms / 1000.0

    @property
    def filter_rules(self) -> FilterRules:
        """Map inclusion rules built from this configuration."""
        return FilterRules(
            min_acres=float(self.min_display_acres),
            display_types=tuple(self.display_types),
        )

    @property
    def incident_fields(self) -> IncidentFields:
        """Source property names for incident parsing."""
        return IncidentFields(
            date=self.date_field,
            incident_type=self.type_field,
            acres=self.acres_field,
            featured=self.featured_field,
            name=self.name_field,
        )

    @property
    def output_run_dir(self) -> Path:
        """Get the timestamped output directory for this run."""
        return Path(self.output_dir) / f"run_{self.run_timestamp}"

    @property
    def frames_dir(self) -> Path:
        """Get the frames subdirectory."""
        return self.output_run_dir / "frames"

    @property
    def tables_dir(self) -> Path:
        """Get the tables subdirectory."""
        return self.output_run_dir / "tables"

    @property
    def data_dir(self) -> Path:
        """Get the data subdirectory."""
        return self.output_run_dir / "data"

    def create_output_dirs(self) -> None:
        """Create all output directories."""
        for d in [self.output_run_dir, self.frames_dir, self.tables_dir, self.data_dir]:
            d.mkdir(parents=True, exist_ok=True)

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to YAML file."""
        if path is None:
            path = self.output_run_dir / "config.yaml"

        # Convert to dict, excluding None values
        config_dict = {
            k: v for k, v in self.__dict__.items()
            if v is not None and not k.startswith('_')
        }

        with open(path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, path: str) -> "FireHistoryConfig":
        """Load configuration from YAML file."""
        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return cls(**_normalize_keys(config_dict))


# YAML section keys that map onto differently named dataclass fields
_FIELD_MAPPING = {
    'file': 'incidents_file',
    'directory': 'output_dir',
    'interval_ms': 'play_interval_ms',
    'min_acres': 'min_display_acres',
    'types': 'display_types',
    'format': 'figure_format',
    'dpi': 'figure_dpi',
}


def _normalize_keys(config_dict: dict) -> dict:
    # Handle nested structure if present
    flat_dict = {}
    for key, value in config_dict.items():
        if isinstance(value, dict):
            flat_dict.update(value)
        else:
            flat_dict[key] = value

    valid_keys = {f.name for f in fields(FireHistoryConfig)}
    processed = {}
    for key, value in flat_dict.items():
        mapped_key = _FIELD_MAPPING.get(key, key)
        if mapped_key in valid_keys:
            processed[mapped_key] = value
    return processed


def load_config(config_path: Optional[str] = None, **overrides) -> FireHistoryConfig:
    """
    Load configuration from file and/or keyword arguments.

    Parameters
    ----------
    config_path : str, optional
        Path to YAML configuration file
    **overrides : dict
        Keyword arguments to override config values. ``None`` values are
        ignored so unset CLI options do not clobber the file.

    Returns
    -------
    FireHistoryConfig
        Configuration object
    """
    config_data = {}
    if config_path:
        with open(config_path, 'r') as f:
            config_data = _normalize_keys(yaml.safe_load(f) or {})

    # Apply overrides from CLI
    config_data.update({k: v for k, v in overrides.items() if v is not None})

    # Filter out any keys not in the dataclass
    valid_keys = {f.name for f in fields(FireHistoryConfig)}
    filtered_data = {k: v for k, v in config_data.items() if k in valid_keys}

    return FireHistoryConfig(**filtered_data)
