"""Observer protocol definitions for domain events."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lumamap.models import Region

from .events import EditEvent, InteractionEvent, MidiEvent, SelectionEvent


@runtime_checkable
class MidiObserver(Protocol):
    """
    Observer that receives activation store changes.

    Note:
        Called from mido's input thread when driven by a live port, so
        implementations should be fast and must not block.
    """

    def on_midi_event(self, event: MidiEvent, channel: int, note: int, intensity: int) -> None:
        """
        Handle an activation change.

        Args:
            event: The type of MIDI event
            channel: 1-based channel (0 for ACTIVATIONS_CLEARED)
            note: Note number (0 for ACTIVATIONS_CLEARED)
            intensity: Velocity of the note-on, 0 otherwise
        """
        ...


@runtime_checkable
class EditObserver(Protocol):
    """Observer that receives region registry mutations."""

    def on_edit_event(self, event: EditEvent, regions: list["Region"]) -> None:
        """
        Handle a registry mutation.

        Args:
            event: The type of editing event
            regions: Affected regions (post-edit; pre-delete state for REGION_DELETED)
        """
        ...


@runtime_checkable
class SelectionObserver(Protocol):
    """Observer that receives selection changes."""

    def on_selection_event(self, event: SelectionEvent, region_id: str | None) -> None:
        """
        Handle a selection change.

        Args:
            event: CHANGED or CLEARED
            region_id: Newly selected region, or None when cleared
        """
        ...


@runtime_checkable
class InteractionObserver(Protocol):
    """Observer that receives draw/drag session transitions."""

    def on_interaction_event(self, event: InteractionEvent, region_id: str | None) -> None:
        """
        Handle an authoring transition.

        Args:
            event: The transition that occurred
            region_id: Region involved (committed or dragged), None otherwise
        """
        ...
