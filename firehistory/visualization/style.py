"""
Visualization style configuration.
"""

import matplotlib.pyplot as plt
import seaborn as sns

# Color palette
COLORS = {
    'wildfire': '#E78531',    # Orange
    'unknown': '#D9DBDB',     # Light gray
    'prescribed': '#4DAF4A',  # Green
    'fire_use': '#377EB8',    # Blue
    'featured': '#FFD92F',    # Yellow
    'highlight': '#B2182B',   # Red
    'background': '#1E1E1E',
    'land': '#2E2E2E',
    'text': '#FFFFFF',
    'grid': '#444444',
}

# Marker color per incident type; unknown labels fall back to 'Unknown'
TYPE_COLORS = {
    'Wildfire': COLORS['wildfire'],
    'Unknown': COLORS['wildfire'],  # drawn like wildfires on the map
    'Prescribed Fire': COLORS['prescribed'],
    'Prescribed': COLORS['prescribed'],
    'Wildland Fire Use': COLORS['fire_use'],
}

# Stacked bar series colors
SERIES_COLORS = {
    'Wildfire': COLORS['wildfire'],
    'Unknown': COLORS['unknown'],
}


def type_color(incident_type) -> str:
    """Marker color for an incident type label."""
    return TYPE_COLORS.get(incident_type, COLORS['unknown'])


def set_firehistory_style():
    """Set the plotting style for FireHistory figures."""
    sns.set_style("dark")
    sns.set_context("notebook", font_scale=1.0)

    plt.rcParams.update({
        'figure.figsize': (12, 8),
        'figure.dpi': 100,
        'savefig.dpi': 150,
        'figure.facecolor': COLORS['background'],
        'axes.facecolor': COLORS['land'],
        'savefig.facecolor': COLORS['background'],
        'font.family': 'sans-serif',
        'font.sans-serif': ['Arial', 'Helvetica', 'DejaVu Sans'],
        'text.color': COLORS['text'],
        'axes.labelcolor': COLORS['text'],
        'xtick.color': COLORS['text'],
        'ytick.color': COLORS['text'],
        'axes.labelsize': 11,
        'axes.titlesize': 14,
        'legend.fontsize': 9,
        'xtick.labelsize': 9,
        'ytick.labelsize': 9,
        'axes.spines.top': False,
        'axes.spines.right': False,
        'axes.grid': False,
        'grid.color': COLORS['grid'],
    })
