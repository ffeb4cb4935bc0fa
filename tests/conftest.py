"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from lumamap.core import ActivationEngine, ActivationStore, InteractionStateMachine
from lumamap.models import AppConfig, IntensityMode, Point, Region
from lumamap.services import RegionRegistry


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    """AppConfig that keeps everything inside the temp directory."""
    return AppConfig(projects_dir=temp_dir / "projects")


@pytest.fixture
def triangle():
    """Three points forming a triangle in the upper-left quadrant."""
    return [Point(x=10, y=10), Point(x=40, y=10), Point(x=10, y=40)]


@pytest.fixture
def square():
    """A square covering the centre of the surface."""
    return [Point(x=40, y=40), Point(x=60, y=40), Point(x=60, y=60), Point(x=40, y=60)]


@pytest.fixture
def region_c4(triangle):
    """Omni region triggered by middle C at full intensity."""
    return Region(name="C4", points=triangle, note_range_low=60, note_range_high=60)


@pytest.fixture
def velocity_region(square):
    """Channel 2 region over C4..E4 that scales with velocity."""
    return Region(
        name="Velocity",
        points=square,
        channel_filter=2,
        note_range_low=60,
        note_range_high=64,
        intensity_mode=IntensityMode.VELOCITY_SCALED,
        base_intensity=0.5,
    )


@pytest.fixture
def store():
    """Empty activation store."""
    return ActivationStore()


@pytest.fixture
def engine(store):
    """Activation engine driving the `store` fixture."""
    return ActivationEngine(store)


@pytest.fixture
def registry():
    """Empty region registry with default region settings."""
    return RegionRegistry()


@pytest.fixture
def machine(registry):
    """Interaction state machine over the `registry` fixture, in EDIT mode."""
    return InteractionStateMachine(registry)
