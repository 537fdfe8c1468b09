"""
FireHistory: Historical Wildfire Map Framework

Bins a static collection of fire incidents by ignition year and keeps a
time-sliced point map and an annual acreage chart in lockstep with a
year slider / playback cursor.

Data: MTBS / WFIGS combined fire points, 1984 onward
"""

__version__ = "1.0.0"

from .config import FireHistoryConfig

__all__ = ["FireHistoryConfig", "__version__"]
