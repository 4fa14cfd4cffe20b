import logging
from typing import Optional

import requests
from pydantic import BaseModel, StrictFloat, ValidationError

from config import settings
from services.weather.errors import (
    APIKeyMissingError,
    ProviderDecodeError,
    UpstreamUnavailableError,
    field_from_validation_error,
)

logger = logging.getLogger("cepweather.weatherapi")

STAGE = "weatherapi"


class CurrentConditions(BaseModel):
    # strict: ints are accepted, numeric strings and booleans are not
    temp_c: StrictFloat


class WeatherApiCurrentPayload(BaseModel):
    """Shape of a WeatherAPI current.json response, reduced to what we read"""

    current: CurrentConditions


class WeatherAPI:
    """Handles current weather lookups against WeatherAPI.com"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        session=None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.WEATHERAPI_KEY
        self.base_url = base_url or settings.WEATHERAPI_URL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._http = session if session is not None else requests

    def fetch_current_celsius(self, city: str) -> float:
        """Fetch the current temperature (°C) for a city"""
        if not self.api_key:
            logger.error(
                "WEATHERAPI_KEY environment variable not set. "
                "Please configure the API key before fetching weather."
            )
            raise APIKeyMissingError("WEATHERAPI_KEY is not configured", stage=STAGE)

        # requests URL-encodes the query string, so non-ASCII city names are safe here
        params = {"key": self.api_key, "q": city}

        try:
            response = self._http.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as err:
            logger.error(f"⏱️ WeatherAPI timeout for {city} ({self.timeout}s)")
            raise UpstreamUnavailableError("WeatherAPI request timed out", stage=STAGE) from err
        except requests.exceptions.RequestException as err:
            logger.error(f"🔌 WeatherAPI request failed for {city}: {err}")
            raise UpstreamUnavailableError("WeatherAPI request failed", stage=STAGE) from err

        try:
            if not 200 <= response.status_code < 300:
                logger.error(f"✗ WeatherAPI returned status {response.status_code} for {city}")
                raise UpstreamUnavailableError(
                    f"WeatherAPI returned status {response.status_code}", stage=STAGE
                )

            try:
                data = response.json()
            except ValueError as err:
                logger.error(f"✗ WeatherAPI returned a non-JSON body for {city}")
                raise ProviderDecodeError("WeatherAPI body is not JSON", stage=STAGE) from err
        finally:
            response.close()

        try:
            payload = WeatherApiCurrentPayload.model_validate(data)
        except ValidationError as err:
            field = field_from_validation_error(err)
            logger.error(f"✗ WeatherAPI payload for {city} has an invalid '{field}' field")
            raise ProviderDecodeError(
                f"WeatherAPI payload has an invalid '{field}' field", stage=STAGE, field=field
            ) from err

        temp_c = float(payload.current.temp_c)
        logger.info(f"✓ Successfully fetched weather for {city}: {temp_c}°C")
        return temp_c
