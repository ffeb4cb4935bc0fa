"""Raw MIDI channel-message decoding.

Works directly on the status/data bytes so that short messages (a two-byte
note-off from some controllers) still decode, which mido's own parser
rejects.
"""

from collections.abc import Sequence
from typing import NamedTuple

NOTE_OFF = 0x8
NOTE_ON = 0x9

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


class DecodedMessage(NamedTuple):
    """A channel message split into its fields."""

    command: int  # Status high nibble (8 = note off, 9 = note on)
    channel: int  # 1-16
    note: int
    intensity: int  # Velocity, 0 when the message has no third byte

    @property
    def is_note_on(self) -> bool:
        return self.command == NOTE_ON

    @property
    def is_note_off(self) -> bool:
        return self.command == NOTE_OFF


def decode(data: Sequence[int]) -> DecodedMessage | None:
    """
    Decode a raw 2- or 3-byte channel message.

    Args:
        data: Message bytes (bytes, bytearray or a sequence of ints)

    Returns:
        DecodedMessage, or None if fewer than two bytes were given

    Example:
        >>> decode(bytes([0x91, 61, 80]))
        DecodedMessage(command=9, channel=2, note=61, intensity=80)
    """
    if len(data) < 2:
        return None

    status = data[0]
    return DecodedMessage(
        command=status >> 4,
        channel=(status & 0x0F) + 1,
        note=data[1],
        intensity=data[2] if len(data) > 2 else 0,
    )


def note_name(note: int) -> str:
    """
    Scientific pitch name for a note number.

    Example:
        >>> note_name(60)
        'C4'
    """
    octave = note // 12 - 1
    return f"{NOTE_NAMES[note % 12]}{octave}"
