"""One-second tick sources.

The engine only needs something it can bind a callback to, start and
stop.  :class:`QtTickSource` is the production source: a repeating
``QTimer`` owned by the GUI thread, so every tick is delivered through
the same event loop as user commands and can never interleave with them.
Stopping the ``QTimer`` guarantees no further ``timeout`` is dispatched.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


TICK_INTERVAL_MS = 1000


class TickSource(Protocol):
    def bind(self, callback: Callable[[], None]) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...

    @property
    def is_active(self) -> bool: ...


class QtTickSource(QObject):
    """Repeating ``QTimer`` that calls one bound callback per interval."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._callback: Callable[[], None] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    def bind(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    def start(self) -> None:
        # restarting an active QTimer would shift the cadence
        if not self._qt_timer.isActive():
            self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
