"""Periodic temperature refresh that notifies observers when the reading changes."""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from location_provider import LocationProviderBase, LocationUnavailable
from notification_center import NotificationCenter
from repeating_timer import RepeatingTimer
from weather_data import TemperatureReading
from weather_provider import WeatherProviderBase, WeatherProviderError

TEMPERATURE_DID_CHANGE = "TemperatureNotifier.TemperatureDidChangeNotification"
TEMPERATURE_FETCH_FAILED = "TemperatureNotifier.TemperatureFetchFailedNotification"

DEFAULT_INTERVAL_SECONDS = 600.0


class CycleStatus(Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    SKIPPED = "skipped"  # another cycle of the same run was still in flight
    STALE = "stale"  # stop() or start() happened while the cycle was running


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one location -> fetch -> compare cycle."""
    status: CycleStatus
    reading: Optional[TemperatureReading] = None
    error: Optional[Exception] = None


class TemperatureNotifier:
    """
    Polls the current location and temperature on a repeating timer.

    Each cycle asks the location provider for a coordinate, fetches the
    temperature there, and, if it differs from the last stored reading,
    stores it and posts ``TEMPERATURE_DID_CHANGE`` with the new reading.
    Failures only abort the cycle they happen in.
    """

    def __init__(
        self,
        location_provider: LocationProviderBase,
        weather_provider: WeatherProviderBase,
        notification_center: Optional[NotificationCenter] = None,
        timer_factory: Callable[[float, Callable[[], object]], RepeatingTimer] = RepeatingTimer,
    ):
        """
        Initialize the notifier.

        Args:
            location_provider: Source of the current coordinate
            weather_provider: Client used to fetch the temperature
            notification_center: Where change/failure notifications are posted
            timer_factory: Builds the repeating timer from (interval, callback)
        """
        self.location_provider = location_provider
        self.weather_provider = weather_provider
        self.notification_center = notification_center or NotificationCenter()
        self.timer_factory = timer_factory

        self._lock = threading.Lock()
        # Held across store + post; reentrant so observers may call start()/stop()
        self._post_lock = threading.RLock()
        self._weather_info: Optional[TemperatureReading] = None
        self._timer = None
        self._generation = 0
        self._in_flight_generation: Optional[int] = None

    @property
    def weather_info(self) -> Optional[TemperatureReading]:
        """Most recent accepted reading, or None before the first successful fetch."""
        with self._lock:
            return self._weather_info

    @property
    def is_started(self) -> bool:
        with self._lock:
            return self._timer is not None and self._timer.is_active

    def subscribe(self, callback: Callable[[TemperatureReading], None]) -> Callable[[], None]:
        """Call ``callback`` with every new reading. Returns an unsubscribe function."""
        return self.notification_center.add_observer(TEMPERATURE_DID_CHANGE, callback)

    def start(self, interval: float = DEFAULT_INTERVAL_SECONDS) -> None:
        """
        Start refreshing every ``interval`` seconds, beginning immediately.

        Restarting a running notifier replaces its timer.
        """
        if interval <= 0:
            raise ValueError(f"Refresh interval must be positive: {interval}")

        timer = self.timer_factory(interval, self.refresh)
        with self._post_lock:
            with self._lock:
                previous = self._timer
                self._generation += 1
                self._timer = timer
        if previous is not None:
            previous.cancel()
            logging.info("Restarting temperature refresh")

        logging.info(f"Starting temperature refresh every {interval}s")
        timer.start()

    def stop(self) -> None:
        """
        Stop refreshing. The last stored reading is kept.

        Waits for a notification already being delivered, so no event is
        posted once this returns.
        """
        with self._post_lock:
            with self._lock:
                timer = self._timer
                self._timer = None
                if timer is not None:
                    self._generation += 1
        if timer is not None:
            timer.cancel()
            logging.info("Stopped temperature refresh")

    def refresh(self) -> CycleResult:
        """Run one location -> fetch -> compare -> notify cycle on the calling thread."""
        with self._lock:
            generation = self._generation
            if self._in_flight_generation == generation:
                logging.debug("Previous refresh still in flight, skipping tick")
                return CycleResult(CycleStatus.SKIPPED)
            self._in_flight_generation = generation

        try:
            return self._run_cycle(generation)
        finally:
            with self._lock:
                if self._in_flight_generation == generation:
                    self._in_flight_generation = None

    def _run_cycle(self, generation: int) -> CycleResult:
        try:
            coordinate = self.location_provider.current_location()
            reading = self.weather_provider.fetch_temperature(coordinate)
        except (LocationUnavailable, WeatherProviderError) as err:
            logging.error(f"Temperature refresh failed: {err}")
            return self._report_failure(generation, err)
        except Exception as exc:
            logging.exception("Unexpected error during temperature refresh: %s", exc)
            return self._report_failure(generation, exc)

        # Store and post as one step so observers see changes in stored order
        with self._post_lock:
            with self._lock:
                if generation != self._generation:
                    logging.info(f"Discarding reading {reading} from a superseded refresh")
                    return CycleResult(CycleStatus.STALE, reading=reading)
                if reading == self._weather_info:
                    logging.debug(f"Temperature unchanged: {reading}")
                    return CycleResult(CycleStatus.UNCHANGED, reading=reading)
                self._weather_info = reading

            logging.info(f"Temperature changed: {reading}")
            self.notification_center.post(TEMPERATURE_DID_CHANGE, reading)
        return CycleResult(CycleStatus.CHANGED, reading=reading)

    def _report_failure(self, generation: int, error: Exception) -> CycleResult:
        with self._post_lock:
            with self._lock:
                stale = generation != self._generation
            if stale:
                return CycleResult(CycleStatus.STALE, error=error)
            self.notification_center.post(TEMPERATURE_FETCH_FAILED, error)
        return CycleResult(CycleStatus.FAILED, error=error)
