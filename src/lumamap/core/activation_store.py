"""Keyed record of which (channel, note) pairs are currently sounding."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from threading import Lock
from types import MappingProxyType

logger = logging.getLogger(__name__)

NoteKey = tuple[int, int]  # (channel 1-16, note 0-127)

MAX_INTENSITY = 127


@dataclass(frozen=True)
class ActivationEntry:
    """A sounding note."""

    intensity: int  # Note-on velocity, 1-127
    activated_at: float  # Monotonic timestamp of the note-on


class ActivationStore:
    """
    The single authoritative map of sounding notes.

    An entry exists for a (channel, note) key if and only if the last event
    seen for that key was a note-on with non-zero intensity. Writers call
    `note_on` / `note_off`; readers take a `snapshot()` once per evaluation
    pass and never see later mutations.

    The store belongs to the selected input source and is emptied with
    `clear()` when the source changes.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[NoteKey, ActivationEntry] = {}

    def note_on(self, channel: int, note: int, intensity: int, now: float) -> None:
        """
        Record a note-on.

        A zero intensity is the alternate note-off encoding and removes the
        entry instead. A repeated note-on replaces the existing entry. Data
        bytes above 127 are clamped to 127.
        """
        if intensity == 0:
            self.note_off(channel, note)
            return

        with self._lock:
            self._entries[(channel, note)] = ActivationEntry(
                intensity=min(intensity, MAX_INTENSITY), activated_at=now
            )

    def note_off(self, channel: int, note: int) -> None:
        """Remove the entry for (channel, note); unknown keys are ignored."""
        with self._lock:
            removed = self._entries.pop((channel, note), None)

        if removed is None:
            logger.debug(f"Note off for silent key ch{channel} note {note}")

    def snapshot(self) -> Mapping[NoteKey, ActivationEntry]:
        """Immutable copy of the current entries for one matching pass."""
        with self._lock:
            return MappingProxyType(dict(self._entries))

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logger.info(f"Cleared {count} active note(s)")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
