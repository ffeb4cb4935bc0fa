"""Tests for the authoring state machine."""

from unittest.mock import Mock

import pytest

from lumamap.core import InteractionState, InteractionStateMachine, SurfaceBounds
from lumamap.models import AppMode, Point
from lumamap.protocols import (
    InteractionEvent,
    InteractionObserver,
    SelectionEvent,
    SelectionObserver,
)


def _draw(machine, *coords):
    for x, y in coords:
        machine.on_surface_click(x, y)


TRIANGLE_CLICKS = [(70, 70), (90, 70), (70, 90)]


@pytest.fixture
def selected(machine, registry, triangle):
    """A region that is already selected."""
    region = registry.create(triangle)
    machine.select(region.id)
    return region


@pytest.mark.unit
class TestDrawing:
    """Test polygon drawing."""

    def test_starts_idle(self, machine):
        assert machine.state == InteractionState.IDLE
        assert machine.mode == AppMode.EDIT
        assert machine.draw_points == ()
        assert machine.selected_region_id is None

    def test_background_click_starts_drawing(self, machine):
        machine.on_surface_click(70, 70)

        assert machine.state == InteractionState.DRAWING
        assert machine.draw_points == (Point(x=70, y=70),)

    def test_clicks_append_points(self, machine):
        _draw(machine, *TRIANGLE_CLICKS)
        assert len(machine.draw_points) == 3

    def test_drawn_points_are_not_clamped(self, machine):
        _draw(machine, (50, 50), (120, -10))
        assert machine.draw_points[1] == Point(x=120, y=-10)

    def test_clicks_are_normalized(self, registry):
        machine = InteractionStateMachine(registry, SurfaceBounds(left=100, top=0, width=400, height=200))
        machine.on_surface_click(300, 100)
        assert machine.draw_points == (Point(x=50, y=50),)

    def test_clicks_on_existing_region_while_drawing_add_points(self, machine, registry, triangle):
        registry.create(triangle)
        _draw(machine, (70, 70), (15, 15))
        assert machine.draw_points[-1] == Point(x=15, y=15)

    def test_commit_creates_region(self, machine, registry):
        _draw(machine, *TRIANGLE_CLICKS)

        region = machine.commit()

        assert region is not None
        assert registry.list() == [region]
        assert [p.to_tuple() for p in region.points] == TRIANGLE_CLICKS
        assert machine.state == InteractionState.IDLE
        assert machine.draw_points == ()
        assert machine.selected_region_id == region.id

    def test_commit_with_too_few_points_keeps_drawing(self, machine, registry):
        _draw(machine, (70, 70), (90, 70))

        assert machine.commit() is None

        assert machine.state == InteractionState.DRAWING
        assert len(machine.draw_points) == 2
        assert len(registry) == 0

    def test_commit_when_idle(self, machine):
        assert machine.commit() is None

    def test_enter_commits(self, machine, registry):
        _draw(machine, *TRIANGLE_CLICKS)
        machine.on_key("Enter")
        assert len(registry) == 1

    def test_cancel_discards_any_size(self, machine, registry):
        _draw(machine, *TRIANGLE_CLICKS, (80, 95))

        machine.cancel()

        assert machine.state == InteractionState.IDLE
        assert machine.draw_points == ()
        assert len(registry) == 0

    def test_escape_discards_drawing(self, machine, registry):
        _draw(machine, *TRIANGLE_CLICKS)
        machine.on_key("Escape")
        assert machine.state == InteractionState.IDLE
        assert len(registry) == 0

    def test_other_keys_ignored(self, machine):
        _draw(machine, *TRIANGLE_CLICKS)
        machine.on_key("a")
        assert machine.state == InteractionState.DRAWING

    def test_events(self, machine):
        observer = Mock(spec=InteractionObserver)
        machine.register_observer(observer)

        _draw(machine, *TRIANGLE_CLICKS)
        region = machine.commit()

        events = [c.args for c in observer.on_interaction_event.call_args_list]
        assert events == [
            (InteractionEvent.DRAW_STARTED, None),
            (InteractionEvent.POINT_ADDED, None),
            (InteractionEvent.POINT_ADDED, None),
            (InteractionEvent.DRAW_COMMITTED, region.id),
        ]


@pytest.mark.unit
class TestSelection:
    """Test region selection."""

    def test_click_inside_region_selects(self, machine, registry, triangle):
        region = registry.create(triangle)

        machine.on_surface_click(15, 15)

        assert machine.selected_region_id == region.id
        assert machine.state == InteractionState.IDLE

    def test_topmost_region_wins(self, machine, registry, triangle):
        registry.create(triangle)
        top = registry.create(triangle)

        machine.on_surface_click(15, 15)

        assert machine.selected_region_id == top.id

    def test_background_click_clears_selection(self, machine, selected):
        machine.on_surface_click(80, 80)

        assert machine.selected_region_id is None
        assert machine.state == InteractionState.IDLE

    def test_background_click_after_deselect_draws(self, machine, selected):
        machine.on_surface_click(80, 80)
        machine.on_surface_click(80, 80)
        assert machine.state == InteractionState.DRAWING

    def test_click_region_ignored_while_drawing(self, machine, registry, triangle):
        region = registry.create(triangle)
        machine.on_surface_click(70, 70)

        machine.click_region(region.id)

        assert machine.selected_region_id is None
        assert machine.state == InteractionState.DRAWING

    def test_select_unknown_ignored(self, machine):
        machine.select("missing")
        assert machine.selected_region_id is None

    def test_selected_region(self, machine, selected):
        assert machine.selected_region is selected

    def test_selection_events(self, machine, registry, triangle):
        observer = Mock(spec=SelectionObserver)
        machine.register_observer(observer)
        region = registry.create(triangle)

        machine.select(region.id)
        machine.select(region.id)
        machine.select(None)

        events = [c.args for c in observer.on_selection_event.call_args_list]
        assert events == [
            (SelectionEvent.CHANGED, region.id),
            (SelectionEvent.CLEARED, None),
        ]

    def test_selection_observer_gets_no_interaction_events(self, machine):
        observer = Mock(spec=SelectionObserver)
        machine.register_observer(observer)

        machine.on_surface_click(70, 70)

        assert not hasattr(observer, "on_interaction_event")
        observer.on_selection_event.assert_not_called()

    def test_escape_clears_selection(self, machine, selected):
        machine.on_key("Escape")
        assert machine.selected_region_id is None

    def test_delete_selected_clears_selection(self, machine, registry, selected):
        registry.delete(selected.id)
        assert machine.selected_region_id is None

    def test_replace_all_clears_stale_selection(self, machine, registry, selected, region_c4):
        registry.replace_all([region_c4])
        assert machine.selected_region_id is None

    def test_replace_all_keeps_surviving_selection(self, machine, registry, selected, region_c4):
        registry.replace_all([selected, region_c4])
        assert machine.selected_region_id == selected.id


@pytest.mark.unit
class TestDragging:
    """Test vertex dragging."""

    def test_begin_drag(self, machine, selected):
        assert machine.begin_drag(selected.id, 1)
        assert machine.state == InteractionState.DRAGGING
        assert machine.drag.region_id == selected.id
        assert machine.drag.point_index == 1

    def test_begin_drag_requires_selection(self, machine, registry, triangle):
        region = registry.create(triangle)
        assert not machine.begin_drag(region.id, 0)
        assert machine.state == InteractionState.IDLE

    def test_begin_drag_bad_index(self, machine, selected):
        assert not machine.begin_drag(selected.id, 3)
        assert not machine.begin_drag(selected.id, -1)

    def test_pointer_down_on_vertex(self, machine, selected):
        assert machine.on_pointer_down(40.5, 10.2)
        assert machine.drag.point_index == 1

    def test_pointer_down_off_vertex(self, machine, selected):
        assert not machine.on_pointer_down(25, 25)
        assert machine.state == InteractionState.IDLE

    def test_move_updates_vertex(self, machine, registry, selected):
        machine.begin_drag(selected.id, 1)

        machine.on_pointer_move(55, 20)

        assert registry.get(selected.id).points[1] == Point(x=55, y=20)

    def test_move_is_clamped(self, machine, registry, selected):
        machine.begin_drag(selected.id, 0)

        machine.on_pointer_move(-30, 150)

        assert registry.get(selected.id).points[0] == Point(x=0, y=100)

    def test_move_without_drag_is_noop(self, machine, registry, selected):
        before = list(selected.points)
        machine.on_pointer_move(55, 20)
        assert registry.get(selected.id).points == before

    def test_pointer_up_ends_drag(self, machine, selected):
        machine.begin_drag(selected.id, 0)

        machine.on_pointer_up()

        assert machine.state == InteractionState.IDLE
        assert machine.selected_region_id == selected.id

    def test_pointer_up_when_idle(self, machine):
        machine.on_pointer_up()
        assert machine.state == InteractionState.IDLE

    def test_clicks_ignored_while_dragging(self, machine, selected):
        machine.begin_drag(selected.id, 0)
        machine.on_surface_click(80, 80)
        assert machine.state == InteractionState.DRAGGING
        assert machine.draw_points == ()

    def test_escape_while_dragging(self, machine, selected):
        machine.begin_drag(selected.id, 0)

        machine.on_key("Escape")

        assert machine.state == InteractionState.IDLE
        assert machine.selected_region_id is None

    def test_delete_dragged_region_ends_drag(self, machine, registry, selected):
        machine.begin_drag(selected.id, 0)

        registry.delete(selected.id)

        assert machine.state == InteractionState.IDLE
        assert machine.drag is None

    def test_drag_events(self, machine, selected):
        observer = Mock(spec=InteractionObserver)
        machine.register_observer(observer)

        machine.begin_drag(selected.id, 0)
        machine.on_pointer_up()

        events = [c.args for c in observer.on_interaction_event.call_args_list]
        assert events == [
            (InteractionEvent.DRAG_STARTED, selected.id),
            (InteractionEvent.DRAG_ENDED, selected.id),
        ]


@pytest.mark.unit
class TestModes:
    """Test EDIT / PERFORMANCE switching."""

    def test_performance_discards_drawing(self, machine):
        _draw(machine, *TRIANGLE_CLICKS)

        machine.set_mode(AppMode.PERFORMANCE)

        assert machine.mode == AppMode.PERFORMANCE
        assert machine.state == InteractionState.IDLE
        assert machine.draw_points == ()

    def test_performance_ends_drag(self, machine, selected):
        machine.begin_drag(selected.id, 0)
        machine.set_mode(AppMode.PERFORMANCE)
        assert machine.state == InteractionState.IDLE

    def test_clicks_ignored_in_performance(self, machine, registry, triangle):
        registry.create(triangle)
        machine.set_mode(AppMode.PERFORMANCE)

        machine.on_surface_click(15, 15)
        machine.on_surface_click(80, 80)

        assert machine.selected_region_id is None
        assert machine.state == InteractionState.IDLE

    def test_no_drag_in_performance(self, machine, selected):
        machine.set_mode(AppMode.PERFORMANCE)
        assert not machine.begin_drag(selected.id, 0)

    def test_enter_ignored_in_performance(self, machine, registry):
        machine.set_mode(AppMode.PERFORMANCE)
        machine.on_key("Enter")
        assert len(registry) == 0

    def test_escape_returns_to_edit(self, machine):
        machine.set_mode(AppMode.PERFORMANCE)
        machine.on_key("Escape")
        assert machine.mode == AppMode.EDIT

    def test_mode_changed_event(self, machine):
        observer = Mock(spec=InteractionObserver)
        machine.register_observer(observer)

        machine.set_mode(AppMode.PERFORMANCE)
        machine.set_mode(AppMode.PERFORMANCE)

        observer.on_interaction_event.assert_called_once_with(InteractionEvent.MODE_CHANGED, None)

    def test_unregister_observer(self, machine):
        observer = Mock(spec=InteractionObserver)
        machine.register_observer(observer)
        machine.unregister_observer(observer)

        machine.set_mode(AppMode.PERFORMANCE)

        observer.on_interaction_event.assert_not_called()
