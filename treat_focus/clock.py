from typing import Callable

from .config import TICK_INTERVAL_MS


class TkTicker:
    def __init__(self, widget, interval_ms: int, callback: Callable[[], None]):
        self._widget = widget
        self._interval_ms = interval_ms
        self._callback = callback
        self._after_id = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    def start(self) -> None:
        self._schedule()

    def cancel(self) -> None:
        self._cancelled = True
        if self._after_id is not None:
            try:
                self._widget.after_cancel(self._after_id)
            except Exception:
                pass
            self._after_id = None

    def _schedule(self) -> None:
        if self._cancelled:
            return
        self._after_id = self._widget.after(self._interval_ms, self._fire)

    def _fire(self) -> None:
        self._after_id = None
        if self._cancelled:
            return
        self._callback()
        self._schedule()


class TkClock:
    def __init__(self, widget, interval_ms: int = TICK_INTERVAL_MS):
        self._widget = widget
        self._interval_ms = interval_ms

    def every_second(self, callback: Callable[[], None]) -> TkTicker:
        ticker = TkTicker(self._widget, self._interval_ms, callback)
        ticker.start()
        return ticker
