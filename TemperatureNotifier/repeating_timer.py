"""Background timer that fires a callback immediately and then at a fixed interval."""
import logging
import threading
from typing import Callable, Optional


class RepeatingTimer:
    """
    Calls ``callback`` on a daemon thread: once right away, then every
    ``interval`` seconds until :meth:`cancel` is called.

    The wait between calls starts after the previous call returns, so calls
    from one timer never overlap.
    """

    def __init__(self, interval: float, callback: Callable[[], object]):
        if interval <= 0:
            raise ValueError(f"Timer interval must be positive: {interval}")
        self.interval = interval
        self.callback = callback
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_active(self) -> bool:
        return self._thread is not None and not self._cancelled.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("Timer already started")
        self._thread = threading.Thread(target=self._run, name="RepeatingTimer", daemon=True)
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._cancelled.is_set():
            try:
                self.callback()
            except Exception as exc:
                logging.exception("Timer callback raised: %s", exc)
            if self._cancelled.wait(self.interval):
                break
