"""Pydantic models for API responses and upstream payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TemperatureCategory = Literal["hot", "cold", "moderate"]


class Coordinate(BaseModel):
    """Validated latitude/longitude pair."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")

    def __str__(self) -> str:
        return f"{self.latitude:.4f}, {self.longitude:.4f}"


class ForecastPeriod(BaseModel):
    """A single period of an NWS forecast.

    Fields sent as null read as their empty value. The temperature must be
    a JSON integer; strings, floats and booleans are rejected.
    """

    model_config = ConfigDict(populate_by_name=True)

    short_forecast: str = Field(default="", alias="shortForecast")
    temperature: int = Field(default=0, strict=True)
    temperature_unit: str = Field(default="", alias="temperatureUnit")

    @field_validator("short_forecast", "temperature_unit", mode="before")
    @classmethod
    def null_as_empty_text(cls, value):
        return "" if value is None else value

    @field_validator("temperature", mode="before")
    @classmethod
    def null_as_zero(cls, value):
        return 0 if value is None else value


class ForecastResult(BaseModel):
    """Forecast text and temperature resolved for a coordinate."""

    model_config = ConfigDict(frozen=True)

    short_forecast: str = Field(..., description="Short human-readable forecast")
    temperature: int = Field(..., description="Temperature in Fahrenheit")
    temperature_unit: str = Field(..., description="Unit reported by the forecast service")


class WeatherResponse(BaseModel):
    """Weather endpoint response model.

    Either the forecast fields or ``error`` are set, never both. Unset
    fields are left out of the serialized body.
    """

    forecast: str | None = Field(None, description="Short forecast for the current period")
    temperature: TemperatureCategory | None = Field(None, description="Temperature category")
    coordinates: str | None = Field(None, description="Requested coordinates, 4 decimals")
    error: str | None = Field(None, description="Error message")
