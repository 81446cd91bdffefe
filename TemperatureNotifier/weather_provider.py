"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from weather_data import Coordinate, TemperatureReading


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def fetch_temperature(self, coordinate: Coordinate) -> TemperatureReading:
        """
        Fetch the current temperature at a coordinate.

        Args:
            coordinate: Location to fetch weather for

        Returns:
            TemperatureReading: Current temperature and weather condition

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class FetchTransportError(WeatherProviderError):
    """The request never produced a successful HTTP response."""
    pass


class FetchDecodeError(WeatherProviderError):
    """The response body did not have the expected shape."""
    pass
