"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from openweather_provider import OpenWeatherProvider
from location_provider import StaticLocationProvider
from temperature_notifier import CycleStatus, TemperatureNotifier
from weather_data import Coordinate, TemperatureUnit


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    provider = OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY"))

    reading = provider.fetch_temperature(Coordinate(33.44, -94.04))

    assert reading.unit == TemperatureUnit.KELVIN
    # Anything on Earth is comfortably inside this range
    assert 180.0 < reading.value < 340.0


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_temperature_notifier_integration():
    """Integration test for TemperatureNotifier with real API."""
    notifier = TemperatureNotifier(
        location_provider=StaticLocationProvider(33.44, -94.04),
        weather_provider=OpenWeatherProvider(api_key=os.environ.get("OPENWEATHER_API_KEY")),
    )
    events = []
    notifier.subscribe(events.append)

    first = notifier.refresh()
    assert first.status == CycleStatus.CHANGED
    assert events == [notifier.weather_info]
