"""Observer lists shared by every LumaMap event source.

The region registry, the activation engine and the interaction state
machine each own one `ObserverManager` per protocol they publish.
"""

import logging
from threading import Lock
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=object)


class ObserverManager(Generic[T]):
    """
    Ordered, duplicate-free list of observers for one event protocol.

    Type Parameters:
        T: Observer protocol (EditObserver, MidiObserver, ...)

    Thread Safety:
        MIDI events arrive on mido's I/O thread while edits come from the
        host, so the list is guarded by a lock. Notification iterates over
        a copy taken under the lock and calls observers without holding it,
        which lets a callback unregister itself.

    Example:
        ```python
        self._observers = ObserverManager[MidiObserver](observer_type_name="midi")
        self._observers.notify("on_midi_event", MidiEvent.NOTE_ON, 1, 60, 100)
        ```
    """

    def __init__(self, observer_type_name: str = "observer"):
        """
        Args:
            observer_type_name: Label used in log messages ("edit", "midi", ...)
        """
        self._observers: list[T] = []
        self._lock = Lock()
        self._kind = observer_type_name

    def register(self, observer: T) -> None:
        """Add an observer. Registering twice has no effect."""
        with self._lock:
            if observer in self._observers:
                logger.debug(f"Ignoring duplicate {self._kind} observer {observer}")
                return
            self._observers.append(observer)
        logger.debug(f"Added {self._kind} observer {observer}")

    def unregister(self, observer: T) -> None:
        """Remove an observer. Unknown observers are logged and ignored."""
        with self._lock:
            try:
                self._observers.remove(observer)
            except ValueError:
                logger.warning(f"Cannot remove unknown {self._kind} observer {observer}")
                return
        logger.debug(f"Removed {self._kind} observer {observer}")

    def notify(self, callback_name: str, *args: Any, **kwargs: Any) -> None:
        """
        Call `callback_name` on every observer, in registration order.

        A failing observer is logged with its traceback and the remaining
        observers are still called.
        """
        with self._lock:
            targets = tuple(self._observers)

        for observer in targets:
            callback = getattr(observer, callback_name, None)
            if callback is None:
                logger.error(f"{self._kind} observer {observer} does not implement {callback_name}()")
                continue
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{self._kind} observer {observer} failed in {callback_name}(): {e}",
                    exc_info=True,
                )

    def clear(self) -> None:
        """Drop every observer."""
        with self._lock:
            dropped = len(self._observers)
            self._observers = []
        if dropped:
            logger.debug(f"Dropped {dropped} {self._kind} observer(s)")

    def __contains__(self, observer: object) -> bool:
        with self._lock:
            return observer in self._observers

    def __len__(self) -> int:
        with self._lock:
            return len(self._observers)

    def __bool__(self) -> bool:
        return len(self) > 0
