"""Activation engine: hardware event ingress into the activation store."""

import logging
import time
from collections.abc import Mapping, Sequence

import mido

from lumamap.midi.decoder import decode
from lumamap.model_manager import ObserverManager
from lumamap.protocols import MidiEvent, MidiObserver

from .activation_store import ActivationEntry, ActivationStore, NoteKey

logger = logging.getLogger(__name__)


class ActivationEngine:
    """
    Applies decoded note events to an ActivationStore and notifies observers.

    Each event is applied fully before the next. Malformed messages and
    commands other than note-on/note-off leave the store untouched; nothing
    here raises for bad input.
    """

    def __init__(self, store: ActivationStore | None = None) -> None:
        """
        Initialize the engine.

        Args:
            store: Store to drive. A fresh store is created if None.
        """
        self.store = store if store is not None else ActivationStore()
        self._observers = ObserverManager[MidiObserver](observer_type_name="midi")

    def register_observer(self, observer: MidiObserver) -> None:
        self._observers.register(observer)

    def unregister_observer(self, observer: MidiObserver) -> None:
        self._observers.unregister(observer)

    def on_event(self, data: Sequence[int], now: float | None = None) -> None:
        """
        Handle one raw hardware message.

        Args:
            data: 2-3 message bytes
            now: Monotonic timestamp; defaults to time.monotonic()
        """
        message = decode(data)
        if message is None:
            logger.debug(f"Dropping malformed MIDI message: {list(data)}")
            return

        if now is None:
            now = time.monotonic()

        if message.is_note_on and message.intensity > 0:
            self.store.note_on(message.channel, message.note, message.intensity, now)
            self._observers.notify(
                "on_midi_event", MidiEvent.NOTE_ON, message.channel, message.note, message.intensity
            )
        elif message.is_note_on or message.is_note_off:
            self.store.note_off(message.channel, message.note)
            self._observers.notify("on_midi_event", MidiEvent.NOTE_OFF, message.channel, message.note, 0)

    def handle_message(self, msg: mido.Message) -> None:
        """Handle a message delivered by a mido input port."""
        if msg.is_meta or msg.type in ("clock", "sysex"):
            return
        self.on_event(msg.bytes())

    def snapshot(self) -> Mapping[NoteKey, ActivationEntry]:
        """Read-only view of the store for an evaluation pass."""
        return self.store.snapshot()

    def clear(self) -> None:
        """Forget every sounding note (e.g. after switching input source)."""
        self.store.clear()
        self._observers.notify("on_midi_event", MidiEvent.ACTIVATIONS_CLEARED, 0, 0, 0)
