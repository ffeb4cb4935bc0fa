"""Hot-plug MIDI port monitoring."""

import contextlib
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

import mido

logger = logging.getLogger(__name__)

PortType = TypeVar('PortType', bound=mido.ports.BasePort)

ConnectionCallback = Callable[[bool, Optional[str]], None]


class BaseMidiManager(ABC, Generic[PortType]):
    """
    Keeps one MIDI port open on the first device that matches a filter.

    A daemon thread polls the port list every `poll_interval` seconds. When
    the open port vanishes it is closed and the connection callback fires
    with `(False, None)`; when a matching port appears it is opened and the
    callback fires with `(True, name)`.

    The filter can be swapped with `select_device`. That drops the open port
    and wakes the monitor immediately instead of waiting for the next poll.

    Subclasses supply port discovery and opening for one direction.
    """

    def __init__(
        self,
        device_filter: Callable[[str], bool],
        poll_interval: float = 5.0,
        port_selector: Optional[Callable[[list[str]], Optional[str]]] = None
    ):
        """
        Args:
            device_filter: Returns True for acceptable port names
            poll_interval: Seconds between port list checks
            port_selector: Picks one port among the matches (default: the first)
        """
        self._device_filter = device_filter
        self._poll_interval = poll_interval
        self._port_selector = port_selector
        self._port: Optional[PortType] = None
        self._port_lock = threading.Lock()
        self._running = False
        self._wake = threading.Event()
        self._monitor_thread: Optional[threading.Thread] = None
        self._warned_missing = False
        self._on_connection_changed: Optional[ConnectionCallback] = None

    # =================================================================
    # Port operations (subclass)
    # =================================================================

    @abstractmethod
    def _get_available_ports(self) -> list[str]:
        """Names of the ports currently present."""

    @abstractmethod
    def _open_port(self, port_name: str) -> PortType:
        """Open `port_name`; may raise whatever the backend raises."""

    @abstractmethod
    def _get_port_type_name(self) -> str:
        """Direction label for log messages ("input")."""

    # =================================================================
    # Lifecycle
    # =================================================================

    def start(self) -> None:
        """Begin watching for devices in a background thread."""
        kind = self._get_port_type_name()
        if self._running:
            logger.warning(f"MIDI {kind} monitor already running")
            return

        self._running = True
        self._wake.clear()
        self._monitor_thread = threading.Thread(
            target=self._monitor_devices, name=f"midi-{kind}-monitor", daemon=True
        )
        self._monitor_thread.start()
        logger.debug(f"MIDI {kind} monitor started")

    def stop(self) -> None:
        """Stop watching and close the open port."""
        self._running = False
        self._wake.set()

        with self._port_lock:
            self._close_port_locked()

        if self._monitor_thread and self._monitor_thread.is_alive():
            self._monitor_thread.join(timeout=1.0)
        logger.debug(f"MIDI {self._get_port_type_name()} monitor stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    # =================================================================
    # Device selection
    # =================================================================

    def on_connection_changed(self, callback: ConnectionCallback) -> None:
        """Set the callback receiving `(connected, port_name)`; it runs on its own thread."""
        self._on_connection_changed = callback

    def select_device(self, device_filter: Callable[[str], bool]) -> None:
        """Replace the device filter and reconnect on the monitor's next pass."""
        with self._port_lock:
            self._device_filter = device_filter
            self._warned_missing = False
            if self._port is not None:
                self._close_port_locked()
                self._fire_connection_changed(False, None)
        self._wake.set()

    @property
    def is_connected(self) -> bool:
        with self._port_lock:
            return self._port is not None

    @property
    def current_port(self) -> Optional[str]:
        """Name of the open port, or None."""
        with self._port_lock:
            return self._port.name if self._port is not None else None

    # =================================================================
    # Monitoring
    # =================================================================

    def _monitor_devices(self) -> None:
        kind = self._get_port_type_name()
        seen: set[str] = set()
        while self._running:
            try:
                seen = self._poll_once(seen)
            except Exception as e:
                logger.error(f"MIDI {kind} monitor pass failed: {e}")
            self._wake.wait(self._poll_interval)
            self._wake.clear()

    def _poll_once(self, previous: set[str]) -> set[str]:
        """One monitor pass. Returns the port names seen, for the next diff."""
        kind = self._get_port_type_name()
        present = set(self._get_available_ports())
        for name in sorted(present - previous):
            logger.info(f"MIDI {kind} appeared: {name}")
        for name in sorted(previous - present):
            logger.info(f"MIDI {kind} went away: {name}")

        with self._port_lock:
            if self._port is not None and self._port.name not in present:
                logger.warning(f"Lost MIDI {kind} {self._port.name}")
                self._close_port_locked()
                self._warned_missing = False
                self._fire_connection_changed(False, None)

            if self._port is None:
                candidate = self._find_matching_port()
                if candidate:
                    self._connect_to_port(candidate)
                elif not self._warned_missing:
                    logger.warning(f"No matching MIDI {kind} found, still looking")
                    self._warned_missing = True

        return present

    def _find_matching_port(self) -> Optional[str]:
        matches = [name for name in self._get_available_ports() if self._device_filter(name)]
        if not matches:
            return None
        if self._port_selector:
            return self._port_selector(matches)
        return matches[0]

    def _connect_to_port(self, port_name: str) -> None:
        """Open `port_name`. Caller holds `_port_lock`."""
        kind = self._get_port_type_name()
        try:
            self._port = self._open_port(port_name)
        except Exception as e:
            logger.error(f"Cannot open MIDI {kind} {port_name}: {e}")
            self._port = None
            return
        logger.info(f"Listening on MIDI {kind}: {port_name}")
        self._fire_connection_changed(True, port_name)

    def _close_port_locked(self) -> None:
        if self._port is None:
            return
        with contextlib.suppress(Exception):
            self._port.close()
        self._port = None

    def _fire_connection_changed(self, connected: bool, port_name: Optional[str]) -> None:
        """Run the connection callback off the monitor thread so it can't stall polling."""
        callback = self._on_connection_changed
        if callback is None:
            return

        def run() -> None:
            try:
                callback(connected, port_name)
            except Exception as e:
                logger.error(f"MIDI connection callback failed: {e}")

        threading.Thread(target=run, daemon=True).start()
