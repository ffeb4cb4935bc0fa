"""LumaMap: light up projected polygons from MIDI notes."""

__version__ = "0.1.0"

# Activation engine and authoring surface
from .core import ActivationEngine, ActivationStore, InteractionStateMachine

# Region ownership
from .services import RegionRegistry

__all__ = [
    "ActivationEngine",
    "ActivationStore",
    "InteractionStateMachine",
    "RegionRegistry",
]
