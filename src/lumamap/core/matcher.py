"""Derive each region's activation from a store snapshot."""

from collections.abc import Iterable, Mapping
from typing import NamedTuple

from lumamap.models import IntensityMode, Region

from .activation_store import ActivationEntry, NoteKey

MAX_VELOCITY = 127


class Activation(NamedTuple):
    """Evaluation result for one region."""

    active: bool
    intensity: float  # 0-1, 0 when inactive

    @classmethod
    def inactive(cls) -> "Activation":
        return cls(active=False, intensity=0.0)


def evaluate(region: Region, snapshot: Mapping[NoteKey, ActivationEntry]) -> Activation:
    """
    Evaluate a region against the sounding notes.

    Every note in the region's trigger range is checked on every candidate
    channel (just the filter channel, or all sixteen for omni). All matches
    are scanned and the loudest one sets the velocity; an inverted range
    scans nothing and stays inactive.

    Args:
        region: Region to evaluate
        snapshot: Result of ActivationStore.snapshot()

    Returns:
        Activation with the reported fill intensity
    """
    active = False
    max_intensity = 0

    for note in region.trigger_notes:
        for channel in region.trigger_channels:
            entry = snapshot.get((channel, note))
            if entry is not None:
                active = True
                max_intensity = max(max_intensity, entry.intensity)

    if not active:
        return Activation.inactive()

    if region.intensity_mode == IntensityMode.VELOCITY_SCALED:
        return Activation(True, max_intensity / MAX_VELOCITY * region.base_intensity)
    return Activation(True, region.base_intensity)


def evaluate_all(
    regions: Iterable[Region], snapshot: Mapping[NoteKey, ActivationEntry]
) -> dict[str, Activation]:
    """Evaluate every region against one snapshot, keyed by region id."""
    return {region.id: evaluate(region, snapshot) for region in regions}
