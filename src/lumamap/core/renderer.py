"""Per-tick render output for the projection surface."""

from collections.abc import Mapping
from dataclasses import dataclass

from lumamap.models import AppMode, Color, Point, Region, StrokeState

from .activation_store import ActivationEntry, NoteKey
from .interaction import InteractionState, InteractionStateMachine
from .matcher import evaluate


@dataclass(frozen=True)
class RenderedRegion:
    """What to draw for one region this tick."""

    id: str
    name: str
    points: tuple[Point, ...]
    stroke_state: StrokeState
    fill_color: Color
    fill_opacity: float  # Matcher intensity, 0 when inactive


@dataclass(frozen=True)
class RenderFrame:
    """Everything a surface draws in one tick."""

    regions: tuple[RenderedRegion, ...]
    draft_points: tuple[Point, ...] = ()  # Polyline of the polygon being drawn
    handles: tuple[Point, ...] = ()  # Vertex handles of the selected region
    mode: AppMode = AppMode.EDIT
    active_count: int = 0


def _stroke_for(region: Region, mode: AppMode, selected_id: str | None) -> StrokeState:
    if mode == AppMode.PERFORMANCE:
        return StrokeState.NONE
    if region.id == selected_id:
        return StrokeState.SELECTED
    return StrokeState.NORMAL


def render_regions(
    regions: list[Region],
    snapshot: Mapping[NoteKey, ActivationEntry],
    mode: AppMode = AppMode.EDIT,
    selected_id: str | None = None,
) -> tuple[RenderedRegion, ...]:
    """Evaluate and style every region, preserving draw order."""
    rendered = []
    for region in regions:
        activation = evaluate(region, snapshot)
        rendered.append(
            RenderedRegion(
                id=region.id,
                name=region.name,
                points=tuple(region.points),
                stroke_state=_stroke_for(region, mode, selected_id),
                fill_color=region.color,
                fill_opacity=activation.intensity,
            )
        )
    return tuple(rendered)


def render_frame(
    regions: list[Region],
    snapshot: Mapping[NoteKey, ActivationEntry],
    interaction: InteractionStateMachine,
) -> RenderFrame:
    """
    Build a full frame from the region list, a store snapshot and the
    authoring state. Pure read: nothing is mutated.
    """
    mode = interaction.mode
    rendered = render_regions(regions, snapshot, mode, interaction.selected_region_id)

    handles: tuple[Point, ...] = ()
    selected = interaction.selected_region
    if (
        mode == AppMode.EDIT
        and selected is not None
        and interaction.state != InteractionState.DRAWING
    ):
        handles = tuple(selected.points)

    return RenderFrame(
        regions=rendered,
        draft_points=interaction.draw_points,
        handles=handles,
        mode=mode,
        active_count=sum(1 for region in rendered if region.fill_opacity > 0),
    )
