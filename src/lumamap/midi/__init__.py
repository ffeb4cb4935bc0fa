"""MIDI input: raw message decoding and hot-plug port management."""

from .base_manager import BaseMidiManager
from .decoder import NOTE_OFF, NOTE_ON, DecodedMessage, decode, note_name
from .input_manager import MidiInputManager, port_filter

__all__ = [
    "BaseMidiManager",
    "DecodedMessage",
    "MidiInputManager",
    "NOTE_OFF",
    "NOTE_ON",
    "decode",
    "note_name",
    "port_filter",
]
