"""Tests for the command-line entry point."""
import pytest
from unittest.mock import patch
from location_provider import IpInfoLocationProvider, StaticLocationProvider
from main import build_location_provider, format_reading, load_config, main, parse_args
from weather_data import TemperatureReading, TemperatureUnit, WeatherSummary
from weather_provider import FetchTransportError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("WEATHER_API_KEY", "WEATHER_LAT", "WEATHER_LON"):
        monkeypatch.delenv(name, raising=False)
    with patch('main.load_dotenv'):
        yield monkeypatch


def test_parse_args_defaults():
    args = parse_args([])

    assert args.interval == 600
    assert args.units == "celsius"
    assert args.timeout == 10
    assert args.once is False


def test_load_config_with_coordinates(clean_env):
    clean_env.setenv("WEATHER_API_KEY", "key")
    clean_env.setenv("WEATHER_LAT", "33.44")
    clean_env.setenv("WEATHER_LON", "-94.04")

    assert load_config() == ("key", 33.44, -94.04)


def test_load_config_without_coordinates(clean_env):
    clean_env.setenv("WEATHER_API_KEY", "key")

    assert load_config() == ("key", None, None)


def test_load_config_requires_api_key(clean_env):
    with pytest.raises(SystemExit):
        load_config()


@pytest.mark.parametrize("lat,lon", [("33.44", None), ("north", "west")])
def test_load_config_rejects_bad_coordinates(clean_env, lat, lon):
    clean_env.setenv("WEATHER_API_KEY", "key")
    clean_env.setenv("WEATHER_LAT", lat)
    if lon is not None:
        clean_env.setenv("WEATHER_LON", lon)

    with pytest.raises(SystemExit):
        load_config()


def test_build_location_provider():
    assert isinstance(build_location_provider(None, None), IpInfoLocationProvider)
    assert isinstance(build_location_provider(33.44, -94.04), StaticLocationProvider)
    with pytest.raises(SystemExit):
        build_location_provider(100.0, 0.0)


def test_format_reading():
    reading = TemperatureReading(293.15, TemperatureUnit.KELVIN, WeatherSummary("Clouds", "broken clouds"))

    assert format_reading(reading, TemperatureUnit.CELSIUS) == "20.0 °C, broken clouds"
    assert format_reading(TemperatureReading(290.0), TemperatureUnit.KELVIN) == "290.0 K"


def test_main_once_prints_reading(clean_env, capsys):
    clean_env.setenv("WEATHER_API_KEY", "key")
    clean_env.setenv("WEATHER_LAT", "33.44")
    clean_env.setenv("WEATHER_LON", "-94.04")
    reading = TemperatureReading(293.15, TemperatureUnit.KELVIN, WeatherSummary("Clear", "clear sky"))

    with patch('main.setup_logging'), \
            patch('main.OpenWeatherProvider.fetch_temperature', return_value=reading) as mock_fetch:
        status = main(["--once"])

    assert status == 0
    mock_fetch.assert_called_once()
    assert "Temperature: 20.0 °C, clear sky" in capsys.readouterr().out


def test_main_once_reports_failure(clean_env):
    clean_env.setenv("WEATHER_API_KEY", "key")
    clean_env.setenv("WEATHER_LAT", "33.44")
    clean_env.setenv("WEATHER_LON", "-94.04")

    with patch('main.setup_logging'), \
            patch('main.OpenWeatherProvider.fetch_temperature', side_effect=FetchTransportError("down")):
        assert main(["--once"]) == 1
