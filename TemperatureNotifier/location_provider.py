"""Location sources the notifier can ask for the current coordinate."""
import logging
from abc import ABC, abstractmethod

import requests

from weather_data import Coordinate


class LocationUnavailable(Exception):
    """Exception raised when the current location can't be determined."""
    pass


class LocationProviderBase(ABC):
    """Abstract base class for location providers."""

    @abstractmethod
    def current_location(self) -> Coordinate:
        """
        Determine the current location.

        Returns:
            Coordinate: Current latitude/longitude

        Raises:
            LocationUnavailable: If no location could be determined
        """
        pass


class StaticLocationProvider(LocationProviderBase):
    """Always reports the same, configured coordinate."""

    def __init__(self, lat: float, lon: float):
        self.coordinate = Coordinate(latitude=lat, longitude=lon)

    def current_location(self) -> Coordinate:
        return self.coordinate


class IpInfoLocationProvider(LocationProviderBase):
    """
    Approximate location from the public IP address via ipinfo.io.

    ipinfo.io answers with ``{"loc": "lat,lon", ...}``.
    """

    URL = "https://ipinfo.io/json"

    def __init__(self, timeout: int = 5):
        self.timeout = timeout

    def current_location(self) -> Coordinate:
        try:
            response = requests.get(self.URL, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during location lookup: {e}")
            raise LocationUnavailable(f"Network error: {str(e)}") from e

        if not response.ok:
            raise LocationUnavailable(f"Location lookup failed with HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise LocationUnavailable(f"Failed to parse location response: {str(e)}") from e

        loc = data.get("loc", "") if isinstance(data, dict) else ""
        if not isinstance(loc, str) or "," not in loc:
            raise LocationUnavailable(f"Location response missing 'loc': {data!r}")

        lat_str, lon_str = loc.split(",", 1)
        try:
            coordinate = Coordinate(latitude=float(lat_str), longitude=float(lon_str))
        except ValueError as e:
            raise LocationUnavailable(f"Invalid location '{loc}': {e}") from e

        logging.debug(f"Location from ipinfo.io: {coordinate.latitude}, {coordinate.longitude}")
        return coordinate
