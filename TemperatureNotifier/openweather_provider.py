"""OpenWeather Current Weather API provider implementation."""
import logging
import numbers
import requests
from typing import Optional
from weather_provider import WeatherProviderBase, FetchDecodeError, FetchTransportError
from weather_data import Coordinate, TemperatureReading, TemperatureUnit, WeatherSummary


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    No ``units`` parameter is sent, so temperatures come back in Kelvin.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    # Always ask for live data; never accept a cached copy from an intermediary.
    NO_CACHE_HEADERS = {
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }

    def __init__(self, api_key: str, timeout: int = 10):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.timeout = timeout

    def build_params(self, coordinate: Coordinate) -> dict:
        return {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "APPID": self.api_key,
        }

    def fetch_temperature(self, coordinate: Coordinate) -> TemperatureReading:
        """
        Fetch current temperature from OpenWeather Current Weather API.

        Returns:
            TemperatureReading: Temperature in Kelvin plus the first reported
            weather condition, if any

        Raises:
            FetchTransportError: If the request fails or returns a non-2xx status
            FetchDecodeError: If the response body can't be parsed
        """
        try:
            logging.info(f"Making OpenWeather API request: {self.BASE_URL}")
            logging.debug(f"Request parameters: lat={coordinate.latitude}, lon={coordinate.longitude}")

            response = requests.get(
                self.BASE_URL,
                params=self.build_params(coordinate),
                headers=self.NO_CACHE_HEADERS,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise FetchTransportError(f"Network error: {str(e)}") from e

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Response body is not JSON: {e}")
            raise FetchDecodeError(f"Failed to parse response: {str(e)}") from e

        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        reading = self.parse_response(data)
        logging.info(f"Successfully parsed temperature: {reading}")
        return reading

    @staticmethod
    def parse_response(data) -> TemperatureReading:
        """Map a Current Weather API body onto a TemperatureReading."""
        if not isinstance(data, dict):
            raise FetchDecodeError("Response body is not a JSON object")

        main_data = data.get("main")
        if not isinstance(main_data, dict):
            raise FetchDecodeError("Response missing 'main' block")

        temp = main_data.get("temp")
        if isinstance(temp, bool) or not isinstance(temp, numbers.Real):
            raise FetchDecodeError(f"Response 'main.temp' is not a number: {temp!r}")

        weather_array = data.get("weather", [])
        if not isinstance(weather_array, list):
            raise FetchDecodeError("Response 'weather' is not an array")

        summary: Optional[WeatherSummary] = None
        if weather_array:
            first = weather_array[0]
            if not isinstance(first, dict):
                raise FetchDecodeError("Response 'weather' entries must be objects")
            summary = WeatherSummary(
                main=str(first.get("main") or "Unknown"),
                description=str(first.get("description") or ""),
            )
            logging.debug(f"Weather condition: {summary.main} - {summary.description}")

        return TemperatureReading(value=float(temp), unit=TemperatureUnit.KELVIN, weather=summary)

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise FetchTransportError(f"HTTP {response.status_code}: {response.text[:200]}")

        logging.error(f"OpenWeather API error response: {error_data}")
        if not isinstance(error_data, dict):
            raise FetchTransportError(f"HTTP {response.status_code}: {error_data}")

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        raise FetchTransportError(f"OpenWeather API error {cod}: {message}")
