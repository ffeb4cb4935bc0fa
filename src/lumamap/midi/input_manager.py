"""MIDI input with hot-plug support."""

import logging
from collections.abc import Callable

import mido

from .base_manager import BaseMidiManager

logger = logging.getLogger(__name__)

MessageCallback = Callable[[mido.Message], None]


def port_filter(name: str | None) -> Callable[[str], bool]:
    """
    Device filter for a partial port name.

    Matching is a case-insensitive substring test, so "launchkey" picks
    "Launchkey MK3 MIDI 1". An empty name accepts any port.
    """
    if not name:
        return lambda port: True
    needle = name.lower()
    return lambda port: needle in port.lower()


class MidiInputManager(BaseMidiManager[mido.ports.BaseInput]):
    """
    Listens on the first matching MIDI input and hands every message to
    one callback (normally `ActivationEngine.handle_message`).
    """

    def __init__(
        self,
        device_filter: Callable[[str], bool],
        poll_interval: float = 5.0,
        port_selector: Callable[[list[str]], str | None] | None = None,
    ):
        super().__init__(device_filter, poll_interval, port_selector)
        self._message_callback: MessageCallback | None = None

    def on_message(self, callback: MessageCallback) -> None:
        """
        Set the message callback.

        It runs on mido's I/O thread, once per message, and must return quickly.
        """
        self._message_callback = callback

    @staticmethod
    def list_ports() -> list[str]:
        """Names of the MIDI inputs the backend can see."""
        return mido.get_input_names()

    def _get_available_ports(self) -> list[str]:
        return self.list_ports()

    def _open_port(self, port_name: str) -> mido.ports.BaseInput:
        return mido.open_input(port_name, callback=self._midi_callback)

    def _get_port_type_name(self) -> str:
        return "input"

    def _midi_callback(self, msg: mido.Message) -> None:
        callback = self._message_callback
        if callback is None:
            return
        try:
            callback(msg)
        except Exception as e:
            logger.error(f"MIDI message handler failed on {msg}: {e}", exc_info=True)
