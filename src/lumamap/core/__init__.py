"""Core activation engine and authoring state machine."""

from .activation_store import ActivationEntry, ActivationStore
from .engine import ActivationEngine
from .geometry import SurfaceBounds
from .interaction import DragSession, InteractionState, InteractionStateMachine
from .matcher import Activation, evaluate, evaluate_all
from .renderer import RenderedRegion, RenderFrame, render_frame, render_regions

__all__ = [
    "Activation",
    "ActivationEngine",
    "ActivationEntry",
    "ActivationStore",
    "DragSession",
    "InteractionState",
    "InteractionStateMachine",
    "RenderFrame",
    "RenderedRegion",
    "SurfaceBounds",
    "evaluate",
    "evaluate_all",
    "render_frame",
    "render_regions",
]
