"""Region and MIDI input exceptions."""

from .base import LumaMapError


class RegionNotFoundError(LumaMapError):
    """A region id does not exist in the registry."""

    def __init__(self, region_id: str, operation: str = "access"):
        super().__init__(
            user_message=f"Region not found: {region_id}",
            technical_message=f"Cannot {operation} unknown region {region_id!r}",
            recoverable=True,
        )
        self.region_id = region_id
        self.operation = operation


class MidiPortError(LumaMapError):
    """A MIDI input port could not be opened."""

    def __init__(self, port_name: str | None, original_error: str | None = None):
        target = port_name or "any MIDI input"
        tech_msg = f"Failed to open MIDI input {target}"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=f"Could not open MIDI input: {target}",
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint="Run 'lumamap midi list' to see available MIDI inputs",
        )
        self.port_name = port_name
        self.original_error = original_error
