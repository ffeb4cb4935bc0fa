"""Protocol definitions for domain events and their observers."""

from .events import EditEvent, InteractionEvent, MidiEvent, SelectionEvent
from .observers import EditObserver, InteractionObserver, MidiObserver, SelectionObserver

__all__ = [
    # Events
    "EditEvent",
    "InteractionEvent",
    "MidiEvent",
    "SelectionEvent",
    # Observers
    "EditObserver",
    "InteractionObserver",
    "MidiObserver",
    "SelectionObserver",
]
