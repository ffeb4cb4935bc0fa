"""Point model for the normalized authoring surface."""

from pydantic import BaseModel, ConfigDict

SURFACE_MIN = 0.0
SURFACE_MAX = 100.0


class Point(BaseModel):
    """A vertex on the normalized surface, in percent of width/height.

    Range is not enforced here: freshly drawn points are stored as
    captured and only drag updates are clamped.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @property
    def is_on_surface(self) -> bool:
        """True if both axes lie within [0, 100]."""
        return (
            SURFACE_MIN <= self.x <= SURFACE_MAX
            and SURFACE_MIN <= self.y <= SURFACE_MAX
        )

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)
