"""
City Resolver - Resolves a Brazilian postal code (CEP) to a city name using ViaCEP
"""

import logging
from typing import Optional

import requests
from pydantic import BaseModel, Field, StrictStr, ValidationError

from config import settings
from services.weather.errors import (
    ProviderDecodeError,
    UpstreamUnavailableError,
    ZipcodeNotFoundError,
    field_from_validation_error,
)

logger = logging.getLogger("cepweather.viacep")

STAGE = "viacep"

# ViaCEP answers malformed CEPs with 400; some mirrors use 404 for unknown ones.
NOT_FOUND_STATUSES = (400, 404)


class ViaCepAddress(BaseModel):
    """The subset of a ViaCEP address record the pipeline relies on."""

    localidade: StrictStr = Field(..., min_length=1, description="City name")
    uf: Optional[str] = Field(None, description="State abbreviation")


class CityResolver:
    """Resolves postal codes to city names through the ViaCEP API"""

    def __init__(self, session=None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self._http = session if session is not None else requests
        self.base_url = (base_url or settings.VIACEP_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    def _url(self, cep: str) -> str:
        return f"{self.base_url}/{cep}/json/"

    def resolve(self, cep: str) -> str:
        """
        Resolve a CEP to its city name.

        Raises:
            ZipcodeNotFoundError: The provider does not know this CEP
            ProviderDecodeError: The provider payload is not an address record
            UpstreamUnavailableError: The provider is unreachable or failing
        """
        logger.info(f"📍 Resolving city for CEP {cep}")

        try:
            response = self._http.get(self._url(cep), timeout=self.timeout)
        except requests.exceptions.Timeout as err:
            logger.error(f"⏱️ ViaCEP timeout for CEP {cep} ({self.timeout}s)")
            raise UpstreamUnavailableError("ViaCEP request timed out", stage=STAGE) from err
        except requests.exceptions.RequestException as err:
            logger.error(f"🔌 ViaCEP request failed for CEP {cep}: {err}")
            raise UpstreamUnavailableError("ViaCEP request failed", stage=STAGE) from err

        try:
            if response.status_code in NOT_FOUND_STATUSES:
                logger.warning(f"CEP not found by ViaCEP: {cep} (status {response.status_code})")
                raise ZipcodeNotFoundError(f"CEP {cep} not found", stage=STAGE)

            if not 200 <= response.status_code < 300:
                logger.error(f"✗ ViaCEP returned status {response.status_code} for CEP {cep}")
                raise UpstreamUnavailableError(
                    f"ViaCEP returned status {response.status_code}", stage=STAGE
                )

            return self._parse_city(cep, response)
        finally:
            response.close()

    def _parse_city(self, cep: str, response) -> str:
        try:
            data = response.json()
        except ValueError as err:
            logger.error(f"✗ ViaCEP returned a non-JSON body for CEP {cep}")
            raise ProviderDecodeError("ViaCEP body is not JSON", stage=STAGE) from err

        if not isinstance(data, dict):
            logger.error(f"✗ ViaCEP returned a non-object body for CEP {cep}: {type(data).__name__}")
            raise ProviderDecodeError("ViaCEP body is not an object", stage=STAGE, field="<root>")

        if data.get("erro"):
            logger.warning(f"CEP not found by ViaCEP: {cep}")
            raise ZipcodeNotFoundError(f"CEP {cep} not found", stage=STAGE)

        try:
            address = ViaCepAddress.model_validate(data)
        except ValidationError as err:
            field = field_from_validation_error(err)
            logger.error(f"✗ ViaCEP payload for CEP {cep} has an invalid '{field}' field")
            raise ProviderDecodeError(
                f"ViaCEP payload has an invalid '{field}' field", stage=STAGE, field=field
            ) from err

        logger.info(f"✓ CEP {cep} resolved to {address.localidade}")
        return address.localidade
