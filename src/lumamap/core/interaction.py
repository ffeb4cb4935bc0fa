"""Authoring state machine: polygon drawing and vertex dragging."""

import logging
from dataclasses import dataclass
from enum import Enum

from lumamap.model_manager import ObserverManager
from lumamap.models import MIN_REGION_POINTS, AppMode, Point, Region
from lumamap.protocols import (
    EditEvent,
    InteractionEvent,
    InteractionObserver,
    SelectionEvent,
    SelectionObserver,
)
from lumamap.services.region_registry import RegionRegistry

from .geometry import SurfaceBounds, clamp_point, find_vertex, normalize, point_in_polygon

logger = logging.getLogger(__name__)

COMMIT_KEY = "Enter"
CANCEL_KEY = "Escape"


class InteractionState(str, Enum):
    """Authoring surface states."""

    IDLE = "idle"
    DRAWING = "drawing"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class DragSession:
    """The vertex currently being repositioned."""

    region_id: str
    point_index: int


class InteractionStateMachine:
    """
    Governs one authoring surface.

    States:
        IDLE      -- nothing in progress; clicks select regions or start drawing
        DRAWING   -- collecting polygon points until commit or cancel
        DRAGGING  -- moving one vertex of the selected region

    Drawing and dragging are mutually exclusive: a draw only starts from IDLE
    with nothing selected, and a drag only starts from IDLE on a vertex of
    the selected region.

    Pointer methods take client coordinates and normalize them against
    `bounds` before anything else happens, so all stored state is in
    surface percent. With the default bounds (0, 0, 100, 100) client and
    surface coordinates coincide.

    Pointer-up ends a drag wherever it happens, so hosts should forward
    release events from the whole window, not only from the surface.

    Region mutations go through the RegionRegistry; the machine listens to
    the registry so deleting the selected region clears the selection and
    ends any drag on it.
    """

    def __init__(
        self,
        registry: RegionRegistry,
        bounds: SurfaceBounds | None = None,
        mode: AppMode = AppMode.EDIT,
    ):
        """
        Initialize the state machine.

        Args:
            registry: Region registry to create and update regions through
            bounds: Surface position in client coordinates
            mode: Starting application mode
        """
        self._registry = registry
        self.bounds = bounds or SurfaceBounds()
        self._mode = mode
        self._draw_points: list[Point] | None = None
        self._drag: DragSession | None = None
        self._selected_id: str | None = None

        self._interaction_observers = ObserverManager[InteractionObserver](observer_type_name="interaction")
        self._selection_observers = ObserverManager[SelectionObserver](observer_type_name="selection")

        registry.register_observer(self)

    # =================================================================
    # State
    # =================================================================

    @property
    def state(self) -> InteractionState:
        if self._drag is not None:
            return InteractionState.DRAGGING
        if self._draw_points is not None:
            return InteractionState.DRAWING
        return InteractionState.IDLE

    @property
    def mode(self) -> AppMode:
        return self._mode

    @property
    def draw_points(self) -> tuple[Point, ...]:
        """Points of the polygon being drawn (empty when not drawing)."""
        return tuple(self._draw_points or ())

    @property
    def drag(self) -> DragSession | None:
        return self._drag

    @property
    def selected_region_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_region(self) -> Region | None:
        if self._selected_id is None:
            return None
        return self._registry.get(self._selected_id)

    @property
    def _authoring(self) -> bool:
        return self._mode == AppMode.EDIT

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: InteractionObserver | SelectionObserver) -> None:
        """Register for interaction and/or selection events, depending on what it implements."""
        if isinstance(observer, InteractionObserver):
            self._interaction_observers.register(observer)
        if isinstance(observer, SelectionObserver):
            self._selection_observers.register(observer)

    def unregister_observer(self, observer: InteractionObserver | SelectionObserver) -> None:
        if observer in self._interaction_observers:
            self._interaction_observers.unregister(observer)
        if observer in self._selection_observers:
            self._selection_observers.unregister(observer)

    def _notify(self, event: InteractionEvent, region_id: str | None = None) -> None:
        self._interaction_observers.notify("on_interaction_event", event, region_id)

    # =================================================================
    # Configuration
    # =================================================================

    def set_bounds(self, bounds: SurfaceBounds) -> None:
        """Update the surface position after a resize."""
        self.bounds = bounds

    def set_mode(self, mode: AppMode) -> None:
        """
        Switch between EDIT and PERFORMANCE.

        Entering PERFORMANCE discards any draw or drag session.
        """
        if mode == self._mode:
            return

        if mode == AppMode.PERFORMANCE:
            if self._draw_points is not None:
                self._discard_drawing()
            if self._drag is not None:
                self._end_drag()

        self._mode = mode
        self._notify(InteractionEvent.MODE_CHANGED)
        logger.info(f"Mode changed to {mode.value}")

    # =================================================================
    # Selection
    # =================================================================

    def select(self, region_id: str | None) -> None:
        """Select a region by id, or clear the selection with None."""
        if region_id is not None and region_id not in self._registry:
            logger.warning(f"Ignoring selection of unknown region {region_id}")
            return
        if region_id == self._selected_id:
            return

        self._selected_id = region_id
        if region_id is None:
            self._selection_observers.notify("on_selection_event", SelectionEvent.CLEARED, None)
        else:
            self._selection_observers.notify("on_selection_event", SelectionEvent.CHANGED, region_id)
        logger.debug(f"Selection: {region_id}")

    def click_region(self, region_id: str) -> None:
        """A click landed on a region's body."""
        if not self._authoring or self.state != InteractionState.IDLE:
            return
        self.select(region_id)

    def region_at(self, point: Point) -> Region | None:
        """Topmost region whose polygon contains `point`."""
        for region in reversed(self._registry.list()):
            if point_in_polygon(point, region.points):
                return region
        return None

    # =================================================================
    # Pointer input
    # =================================================================

    def on_surface_click(self, client_x: float, client_y: float) -> None:
        """
        Handle a click on the surface.

        DRAWING: append the point. IDLE: select the region under the pointer;
        on background, clear the selection if there is one, otherwise start
        drawing at the pointer.
        """
        if not self._authoring:
            return

        point = normalize(client_x, client_y, self.bounds)
        state = self.state

        if state == InteractionState.DRAGGING:
            return

        if state == InteractionState.DRAWING:
            self._draw_points.append(point)
            self._notify(InteractionEvent.POINT_ADDED)
            return

        hit = self.region_at(point)
        if hit is not None:
            self.click_region(hit.id)
        elif self._selected_id is not None:
            self.select(None)
        else:
            self._draw_points = [point]
            self._notify(InteractionEvent.DRAW_STARTED)
            logger.debug(f"Drawing started at ({point.x:.1f}, {point.y:.1f})")

    def on_pointer_down(self, client_x: float, client_y: float) -> bool:
        """
        Pick up a vertex handle of the selected region under the pointer.

        Returns:
            True if a drag started
        """
        region = self.selected_region
        if region is None:
            return False

        index = find_vertex(normalize(client_x, client_y, self.bounds), region.points)
        if index is None:
            return False
        return self.begin_drag(region.id, index)

    def begin_drag(self, region_id: str, point_index: int) -> bool:
        """
        Start dragging a vertex of the selected region.

        Returns:
            True if the drag started; False if not idle, not in EDIT mode,
            the region is not the selected one, or the index is out of range
        """
        if not self._authoring or self.state != InteractionState.IDLE:
            return False
        if region_id != self._selected_id:
            return False

        region = self._registry.get(region_id)
        if region is None or not 0 <= point_index < len(region.points):
            return False

        self._drag = DragSession(region_id=region_id, point_index=point_index)
        self._notify(InteractionEvent.DRAG_STARTED, region_id)
        logger.debug(f"Dragging vertex {point_index} of region {region_id}")
        return True

    def on_pointer_move(self, client_x: float, client_y: float) -> None:
        """Move the dragged vertex, clamped to the surface."""
        drag = self._drag
        if drag is None:
            return

        region = self._registry.get(drag.region_id)
        if region is None:
            self._end_drag()
            return
        if drag.point_index >= len(region.points):
            return

        point = clamp_point(normalize(client_x, client_y, self.bounds))
        region.move_point(drag.point_index, point)
        self._registry.update(region)

    def on_pointer_up(self) -> None:
        """Release the dragged vertex. Safe to call in any state."""
        if self._drag is not None:
            self._end_drag()

    def _end_drag(self) -> None:
        drag = self._drag
        self._drag = None
        self._notify(InteractionEvent.DRAG_ENDED, drag.region_id if drag else None)

    # =================================================================
    # Commit / cancel
    # =================================================================

    def commit(self) -> Region | None:
        """
        Turn the drawn points into a region.

        With fewer than three points nothing happens and drawing continues.

        Returns:
            The created Region (now selected), or None
        """
        if self._draw_points is None:
            return None
        if len(self._draw_points) < MIN_REGION_POINTS:
            logger.debug(f"Commit ignored: {len(self._draw_points)} point(s) drawn")
            return None

        points = self._draw_points
        self._draw_points = None
        region = self._registry.create(points)

        self._notify(InteractionEvent.DRAW_COMMITTED, region.id)
        self.select(region.id)
        return region

    def cancel(self) -> None:
        """Abandon the polygon being drawn, whatever its size."""
        if self._draw_points is not None:
            self._discard_drawing()

    def _discard_drawing(self) -> None:
        count = len(self._draw_points or ())
        self._draw_points = None
        self._notify(InteractionEvent.DRAW_CANCELLED)
        logger.debug(f"Drawing cancelled ({count} point(s) discarded)")

    def global_cancel(self) -> None:
        """
        Window-level cancel.

        PERFORMANCE: return to EDIT. DRAWING: discard the session.
        DRAGGING: release the vertex and clear the selection.
        IDLE: clear the selection.
        """
        if not self._authoring:
            self.set_mode(AppMode.EDIT)
            return

        state = self.state
        if state == InteractionState.DRAWING:
            self._discard_drawing()
            return
        if state == InteractionState.DRAGGING:
            self._end_drag()
        self.select(None)

    def on_key(self, key: str) -> None:
        """Keyboard shortcuts: Enter commits, Escape is the global cancel."""
        if key == COMMIT_KEY:
            if self._authoring:
                self.commit()
        elif key == CANCEL_KEY:
            self.global_cancel()

    # =================================================================
    # Registry events
    # =================================================================

    def on_edit_event(self, event: EditEvent, regions: list[Region]) -> None:
        """Drop selection and drag state that refer to regions that no longer exist."""
        if event not in (EditEvent.REGION_DELETED, EditEvent.REGIONS_REPLACED):
            return

        if self._drag is not None and self._drag.region_id not in self._registry:
            self._end_drag()
        if self._selected_id is not None and self._selected_id not in self._registry:
            self.select(None)
