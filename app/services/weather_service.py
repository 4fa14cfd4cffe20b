"""
Weather Service – resolver stage of the CEP weather pipeline.

Composes the three steps behind GET /weather:
- Resolves the CEP to a city through ViaCEP
- Fetches the current temperature for that city from WeatherAPI
- Converts Celsius to Fahrenheit and Kelvin

Every failure propagates as a WeatherPipelineError; a failed weather lookup is
never replaced by a zero-valued reading.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from services.weather.city_resolver import CityResolver
from services.weather.errors import InvalidZipcodeError
from services.weather.weather_api import WeatherAPI
from utils.helpers import convert_temperature, validate_zipcode

logger = logging.getLogger("cepweather")

STAGE = "resolver"


class WeatherReading(BaseModel):
    """Normalized current weather for the city behind a CEP."""

    city: str = Field(..., description="City name as returned by ViaCEP")
    temp_C: float = Field(..., description="Temperature in Celsius")
    temp_F: float = Field(..., description="Temperature in Fahrenheit")
    temp_K: float = Field(..., description="Temperature in Kelvin")

    class Config:
        """Pydantic configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "city": "São Paulo",
                "temp_C": 25.0,
                "temp_F": 77.0,
                "temp_K": 298.0,
            }
        }

    @classmethod
    def from_celsius(cls, city: str, temp_c: float) -> "WeatherReading":
        temp_f, temp_k = convert_temperature(temp_c)
        return cls(city=city, temp_C=temp_c, temp_F=temp_f, temp_K=temp_k)


class WeatherOrchestrator:
    """Runs CEP -> city -> weather -> unit conversion for one request."""

    def __init__(
        self,
        city_resolver: Optional[CityResolver] = None,
        weather_api: Optional[WeatherAPI] = None,
    ):
        self.city_resolver = city_resolver or CityResolver()
        self.weather_api = weather_api or WeatherAPI()

    def handle(self, cep: str) -> WeatherReading:
        """
        Build the weather reading for a CEP.

        Args:
            cep: Postal code from the query string

        Returns:
            WeatherReading with all three temperature scales

        Raises:
            InvalidZipcodeError: CEP is not exactly 8 digits
            ZipcodeNotFoundError: ViaCEP does not know the CEP
            UpstreamUnavailableError: ViaCEP or WeatherAPI failed (includes decode errors)
            APIKeyMissingError: WeatherAPI credential is not configured
        """
        # Callers are expected to validate, but this stage is reachable directly too.
        if not validate_zipcode(cep):
            logger.info(f"Rejected invalid CEP {cep!r}")
            raise InvalidZipcodeError(f"invalid zipcode {cep!r}", stage=STAGE)

        city = self.city_resolver.resolve(cep)
        temp_c = self.weather_api.fetch_current_celsius(city)

        reading = WeatherReading.from_celsius(city, temp_c)
        logger.info(
            f"Weather for CEP {cep}: {reading.city} "
            f"{reading.temp_C}°C / {reading.temp_F}°F / {reading.temp_K}K"
        )
        return reading
