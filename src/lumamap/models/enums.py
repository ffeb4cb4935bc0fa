"""Enumerations for LumaMap."""

from enum import Enum


class IntensityMode(str, Enum):
    """How a lit region derives its fill intensity."""

    FIXED = "fixed"  # Always base_intensity while any trigger note sounds
    VELOCITY_SCALED = "velocity_scaled"  # Loudest matching velocity / 127 * base_intensity


class AppMode(str, Enum):
    """Top-level application mode."""

    EDIT = "edit"  # Authoring surface accepts drawing and vertex editing
    PERFORMANCE = "performance"  # Output only, authoring input is ignored


class StrokeState(str, Enum):
    """Outline style a renderer should draw for a region."""

    NONE = "none"
    NORMAL = "normal"
    SELECTED = "selected"
