"""Named notifications delivered to any number of observers."""
import logging
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List

Observer = Callable[[Any], None]


class NotificationCenter:
    """Broadcasts a payload to every observer registered under a name."""

    def __init__(self):
        self._observers: Dict[str, List[Observer]] = defaultdict(list)
        self._lock = threading.Lock()

    def add_observer(self, name: str, callback: Observer) -> Callable[[], None]:
        """
        Register ``callback`` for notifications posted under ``name``.

        Returns:
            A no-argument callable that removes the registration again
        """
        with self._lock:
            self._observers[name].append(callback)
        return lambda: self.remove_observer(name, callback)

    def remove_observer(self, name: str, callback: Observer) -> None:
        with self._lock:
            observers = self._observers.get(name, [])
            if callback in observers:
                observers.remove(callback)

    def observer_count(self, name: str) -> int:
        with self._lock:
            return len(self._observers.get(name, []))

    def post(self, name: str, payload: Any = None) -> None:
        """Deliver ``payload`` to the observers of ``name`` in registration order."""
        with self._lock:
            observers = list(self._observers.get(name, []))

        logging.debug(f"Posting {name} to {len(observers)} observer(s)")
        for callback in observers:
            try:
                callback(payload)
            except Exception as exc:
                logging.exception("Observer for %s raised: %s", name, exc)
