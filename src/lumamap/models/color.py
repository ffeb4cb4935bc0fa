"""Color model for region fills."""

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    The model is frozen so colors can be shared between regions and
    used as dictionary keys by renderers.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a CSS hex color string.

        Example:
            >>> Color.from_hex("#00ffcc")
            Color(r=0, g=255, b=204)

        Raises:
            ValueError: If the string is not '#RRGGBB' or 'RRGGBB'
        """
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected a #RRGGBB color, got {value!r}")
        return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#00FFCC')."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
