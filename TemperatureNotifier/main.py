"""Command-line temperature notifier."""
import argparse
import logging
import os
import signal
import sys
import threading
from typing import Optional, Tuple

from dotenv import load_dotenv

from location_provider import IpInfoLocationProvider, LocationProviderBase, StaticLocationProvider
from openweather_provider import OpenWeatherProvider
from temperature_notifier import DEFAULT_INTERVAL_SECONDS, CycleStatus, TemperatureNotifier
from weather_data import TemperatureReading, TemperatureUnit

UNIT_CHOICES = {
    "kelvin": TemperatureUnit.KELVIN,
    "celsius": TemperatureUnit.CELSIUS,
    "fahrenheit": TemperatureUnit.FAHRENHEIT,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Temperature change notifier")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--interval", type=float, default=DEFAULT_INTERVAL_SECONDS, help="Seconds between refreshes")
    parser.add_argument("--units", choices=sorted(UNIT_CHOICES), default="celsius")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--once", action="store_true", help="Fetch once and exit")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def load_config() -> Tuple[str, Optional[float], Optional[float]]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    lat = os.getenv("WEATHER_LAT")
    lon = os.getenv("WEATHER_LON")

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    if bool(lat) != bool(lon):
        raise SystemExit("Set both WEATHER_LAT and WEATHER_LON, or neither")
    if not lat:
        logging.info("Configuration loaded: location from IP geolocation")
        return api_key, None, None

    try:
        lat_val = float(lat)
        lon_val = float(lon)
    except ValueError as exc:
        raise SystemExit(f"Invalid coordinates: {exc}") from exc

    logging.info("Configuration loaded: lat=%s lon=%s", lat_val, lon_val)
    return api_key, lat_val, lon_val


def build_location_provider(lat: Optional[float], lon: Optional[float]) -> LocationProviderBase:
    if lat is None or lon is None:
        return IpInfoLocationProvider()
    try:
        return StaticLocationProvider(lat, lon)
    except ValueError as exc:
        raise SystemExit(f"Invalid coordinates: {exc}") from exc


def build_notifier(api_key: str, lat: Optional[float], lon: Optional[float], args: argparse.Namespace) -> TemperatureNotifier:
    notifier = TemperatureNotifier(
        location_provider=build_location_provider(lat, lon),
        weather_provider=OpenWeatherProvider(api_key=api_key, timeout=args.timeout),
    )
    logging.info("Temperature notifier ready (interval=%ss)", args.interval)
    return notifier


def format_reading(reading: TemperatureReading, unit: TemperatureUnit) -> str:
    text = str(reading.to(unit))
    if reading.weather is not None:
        text += f", {reading.weather.description or reading.weather.main}"
    return text


def signal_handler(signum, frame):
    logging.info("Received signal %s, shutting down", signum)
    raise KeyboardInterrupt()


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, lat, lon = load_config()
    notifier = build_notifier(api_key, lat, lon, args)
    unit = UNIT_CHOICES[args.units]

    notifier.subscribe(lambda reading: print(f"Temperature: {format_reading(reading, unit)}", flush=True))

    if args.once:
        result = notifier.refresh()
        return 1 if result.status == CycleStatus.FAILED else 0

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    notifier.start(args.interval)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logging.info("Stopping notifier")
    finally:
        notifier.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
