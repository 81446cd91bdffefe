"""Weather domain model - pure data structures independent of any API."""
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class TemperatureUnit(Enum):
    """Temperature scales a reading can be expressed in."""
    KELVIN = "K"
    CELSIUS = "°C"
    FAHRENHEIT = "°F"


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(f"Coordinate values must be finite: {self.latitude}, {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range (-90 to 90): {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range (-180 to 180): {self.longitude}")


@dataclass(frozen=True)
class WeatherSummary:
    """Short weather condition as reported alongside a temperature."""
    main: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "broken clouds", "light rain"


@dataclass(frozen=True)
class TemperatureReading:
    """
    A temperature measurement plus the weather condition it was reported with.

    Two readings are equal when value and unit match; the weather summary
    is carried along but ignored for equality.
    """
    value: float
    unit: TemperatureUnit = TemperatureUnit.KELVIN
    weather: Optional[WeatherSummary] = field(default=None, compare=False)

    def to(self, unit: TemperatureUnit) -> "TemperatureReading":
        """Convert this reading to another temperature unit."""
        if unit == self.unit:
            return self
        kelvin = _to_kelvin(self.value, self.unit)
        return replace(self, value=_from_kelvin(kelvin, unit), unit=unit)

    def __str__(self) -> str:
        return f"{self.value:.1f} {self.unit.value}"


def _to_kelvin(value: float, unit: TemperatureUnit) -> float:
    if unit == TemperatureUnit.CELSIUS:
        return value + 273.15
    if unit == TemperatureUnit.FAHRENHEIT:
        return (value - 32.0) * 5.0 / 9.0 + 273.15
    return value


def _from_kelvin(value: float, unit: TemperatureUnit) -> float:
    if unit == TemperatureUnit.CELSIUS:
        return value - 273.15
    if unit == TemperatureUnit.FAHRENHEIT:
        return (value - 273.15) * 9.0 / 5.0 + 32.0
    return value
