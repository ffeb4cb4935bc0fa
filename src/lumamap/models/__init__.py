"""Data models for LumaMap."""

from .color import Color
from .config import AppConfig
from .enums import AppMode, IntensityMode, StrokeState
from .point import SURFACE_MAX, SURFACE_MIN, Point
from .project import Project
from .region import MIN_REGION_POINTS, OMNI_CHANNEL, Region, RegionDefaults

__all__ = [
    "AppConfig",
    # Models
    "Color",
    "Point",
    "Project",
    "Region",
    "RegionDefaults",
    # Enums
    "AppMode",
    "IntensityMode",
    "StrokeState",
    # Constants
    "MIN_REGION_POINTS",
    "OMNI_CHANNEL",
    "SURFACE_MAX",
    "SURFACE_MIN",
]
