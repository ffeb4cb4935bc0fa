"""Domain events for the observer pattern.

- MIDI events: activation store changes driven by hardware input
- Edit events: persistent region mutations
- Selection events: ephemeral selection changes on the authoring surface
- Interaction events: drawing and vertex-drag session lifecycle
"""

from enum import Enum


class MidiEvent(Enum):
    """Events from the activation engine."""

    NOTE_ON = "note_on"                          # Note started sounding
    NOTE_OFF = "note_off"                        # Note stopped (note-off or zero-velocity note-on)
    ACTIVATIONS_CLEARED = "activations_cleared"  # Store wiped (input source changed)


class EditEvent(Enum):
    """
    Events that occur when regions are mutated.

    These represent PERSISTENT state changes (saved with the project).
    For ephemeral UI state (selection), see SelectionEvent.
    """

    REGION_CREATED = "region_created"    # Polygon committed
    REGION_UPDATED = "region_updated"    # Points or trigger fields changed
    REGION_DELETED = "region_deleted"    # Region removed
    REGIONS_REPLACED = "regions_replaced"  # Whole list replaced (project opened)


class SelectionEvent(Enum):
    """Selection changes on the authoring surface (not persisted)."""

    CHANGED = "changed"  # A region is now selected
    CLEARED = "cleared"  # Nothing is selected


class InteractionEvent(Enum):
    """Authoring session lifecycle."""

    DRAW_STARTED = "draw_started"
    POINT_ADDED = "point_added"
    DRAW_COMMITTED = "draw_committed"
    DRAW_CANCELLED = "draw_cancelled"
    DRAG_STARTED = "drag_started"
    DRAG_ENDED = "drag_ended"
    MODE_CHANGED = "mode_changed"
