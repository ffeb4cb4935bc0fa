"""Tests for frame rendering."""

import pytest

from lumamap.core import ActivationStore, render_frame, render_regions
from lumamap.models import AppMode, StrokeState


@pytest.fixture
def lit_c4():
    store = ActivationStore()
    store.note_on(1, 60, 127, now=0.0)
    return store.snapshot()


@pytest.mark.unit
class TestRenderRegions:
    """Test render_regions()."""

    def test_preserves_order(self, region_c4, velocity_region):
        rendered = render_regions([velocity_region, region_c4], ActivationStore().snapshot())
        assert [r.id for r in rendered] == [velocity_region.id, region_c4.id]

    def test_inactive_region_has_zero_opacity(self, region_c4):
        (rendered,) = render_regions([region_c4], ActivationStore().snapshot())
        assert rendered.fill_opacity == 0.0
        assert rendered.fill_color == region_c4.color

    def test_active_region_uses_intensity(self, region_c4, lit_c4):
        (rendered,) = render_regions([region_c4], lit_c4)
        assert rendered.fill_opacity == 1.0

    def test_stroke_states(self, region_c4, velocity_region, lit_c4):
        rendered = render_regions([region_c4, velocity_region], lit_c4, AppMode.EDIT, region_c4.id)
        assert rendered[0].stroke_state == StrokeState.SELECTED
        assert rendered[1].stroke_state == StrokeState.NORMAL

    def test_no_stroke_in_performance(self, region_c4, lit_c4):
        (rendered,) = render_regions([region_c4], lit_c4, AppMode.PERFORMANCE, region_c4.id)
        assert rendered.stroke_state == StrokeState.NONE

    def test_points_are_a_snapshot(self, region_c4, lit_c4):
        (rendered,) = render_regions([region_c4], lit_c4)
        assert rendered.points == tuple(region_c4.points)
        assert isinstance(rendered.points, tuple)


@pytest.mark.unit
class TestRenderFrame:
    """Test render_frame()."""

    def test_empty_frame(self, machine):
        frame = render_frame([], ActivationStore().snapshot(), machine)

        assert frame.regions == ()
        assert frame.draft_points == ()
        assert frame.handles == ()
        assert frame.mode == AppMode.EDIT
        assert frame.active_count == 0

    def test_active_count(self, machine, registry, region_c4, velocity_region, lit_c4):
        registry.replace_all([region_c4, velocity_region])
        frame = render_frame(registry.list(), lit_c4, machine)
        assert frame.active_count == 1

    def test_draft_points_while_drawing(self, machine, registry):
        machine.on_surface_click(70, 70)
        machine.on_surface_click(90, 70)

        frame = render_frame(registry.list(), ActivationStore().snapshot(), machine)

        assert len(frame.draft_points) == 2

    def test_handles_for_selected_region(self, machine, registry, triangle):
        region = registry.create(triangle)
        machine.select(region.id)

        frame = render_frame(registry.list(), ActivationStore().snapshot(), machine)

        assert frame.handles == tuple(triangle)
        assert frame.regions[0].stroke_state == StrokeState.SELECTED

    def test_no_handles_in_performance(self, machine, registry, triangle):
        region = registry.create(triangle)
        machine.select(region.id)
        machine.set_mode(AppMode.PERFORMANCE)

        frame = render_frame(registry.list(), ActivationStore().snapshot(), machine)

        assert frame.handles == ()
        assert frame.mode == AppMode.PERFORMANCE
        assert frame.regions[0].stroke_state == StrokeState.NONE

    def test_does_not_mutate(self, machine, registry, region_c4, lit_c4):
        registry.replace_all([region_c4])
        before = region_c4.model_dump()

        render_frame(registry.list(), lit_c4, machine)

        assert region_c4.model_dump() == before
        assert len(registry) == 1
