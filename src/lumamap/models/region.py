"""Region model: a polygon on the surface plus its note trigger."""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .color import Color
from .enums import IntensityMode
from .point import Point

OMNI_CHANNEL = 0
MIN_REGION_POINTS = 3

DEFAULT_REGION_COLOR = Color(r=0x00, g=0xFF, b=0xCC)


def _new_region_id() -> str:
    return uuid4().hex


class RegionDefaults(BaseModel):
    """Starting configuration applied to every newly committed region."""

    channel_filter: int = Field(default=OMNI_CHANNEL, ge=0, le=16, description="0 = omni, 1-16 = exact channel")
    note_range_low: int = Field(default=60, ge=0, le=127, description="Lowest trigger note (60 = middle C)")
    note_range_high: int = Field(default=60, ge=0, le=127, description="Highest trigger note")
    intensity_mode: IntensityMode = Field(default=IntensityMode.FIXED, description="Fill intensity mode")
    base_intensity: float = Field(default=1.0, gt=0.0, le=1.0, description="Fill intensity when lit (0-1]")
    color: Color = Field(default=DEFAULT_REGION_COLOR, description="Fill color")
    name_template: str = Field(default="Region {number}", description="Name for new regions")


class Region(BaseModel):
    """A user-authored polygon with a note-trigger configuration.

    Trigger fields are range-checked individually, but the relationship
    between them is not: a region whose `note_range_low` is above its
    `note_range_high`, or one with fewer than three points, loads fine and
    simply never lights up.

    Unknown keys are rejected, so a file written with other field names
    fails to load instead of silently falling back to default triggers.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=_new_region_id, description="Stable unique identity")
    name: str = Field(default="", description="Display label")
    points: list[Point] = Field(default_factory=list, description="Polygon vertices in surface percent")
    channel_filter: int = Field(default=OMNI_CHANNEL, ge=0, le=16, description="0 = omni, 1-16 = exact channel")
    note_range_low: int = Field(default=60, ge=0, le=127, description="Lowest trigger note (inclusive)")
    note_range_high: int = Field(default=60, ge=0, le=127, description="Highest trigger note (inclusive)")
    intensity_mode: IntensityMode = Field(default=IntensityMode.FIXED, description="Fill intensity mode")
    base_intensity: float = Field(default=1.0, gt=0.0, le=1.0, description="Fill intensity when lit (0-1]")
    color: Color = Field(default=DEFAULT_REGION_COLOR, description="Fill color")

    @property
    def is_omni(self) -> bool:
        """Check if the region listens on every channel."""
        return self.channel_filter == OMNI_CHANNEL

    @property
    def trigger_channels(self) -> range:
        """Channels this region responds to (1-based)."""
        if self.is_omni:
            return range(1, 17)
        return range(self.channel_filter, self.channel_filter + 1)

    @property
    def trigger_notes(self) -> range:
        """Inclusive note window; empty when the bounds are inverted."""
        return range(self.note_range_low, self.note_range_high + 1)

    @property
    def is_degenerate(self) -> bool:
        """True if the region cannot be drawn or can never match."""
        return len(self.points) < MIN_REGION_POINTS or self.note_range_low > self.note_range_high

    def move_point(self, index: int, point: Point) -> None:
        """Replace the vertex at `index` in place."""
        self.points[index] = point

    @classmethod
    def from_points(cls, points: list[Point], defaults: RegionDefaults, number: int) -> "Region":
        """Create a region from committed points and the configured defaults."""
        return cls(
            name=defaults.name_template.format(number=number),
            points=list(points),
            channel_filter=defaults.channel_filter,
            note_range_low=defaults.note_range_low,
            note_range_high=defaults.note_range_high,
            intensity_mode=defaults.intensity_mode,
            base_intensity=defaults.base_intensity,
            color=defaults.color,
        )
