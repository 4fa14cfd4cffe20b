"""
Gateway Service – first stage of the CEP weather pipeline.

Validates the POST /zipcode body and brokers the CEP to the resolver stage.
Resolver answers are relayed as-is, status code included, so clients can tell
a 404 (unknown CEP) from a 502 (provider down).
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from pydantic import BaseModel, StrictStr, ValidationError

from config import settings
from services.weather.errors import (
    InvalidZipcodeError,
    MalformedRequestError,
    UpstreamUnavailableError,
)
from utils.helpers import validate_zipcode

logger = logging.getLogger("cepweather.gateway")

STAGE = "gateway"
JSON_MEDIA_TYPE = "application/json"


class ZipcodeRequest(BaseModel):
    """Request body accepted by POST /zipcode."""

    cep: StrictStr = ""

    class Config:
        """Pydantic configuration."""
        json_schema_extra = {"example": {"cep": "01001000"}}


@dataclass(frozen=True)
class RelayedResponse:
    status_code: int
    body: bytes
    media_type: str = JSON_MEDIA_TYPE


class ResolverClient:
    """HTTP client for the resolver stage's GET /weather endpoint."""

    def __init__(self, session=None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self._http = session if session is not None else requests
        self.base_url = (base_url or settings.RESOLVER_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    def fetch_weather(self, cep: str) -> RelayedResponse:
        url = f"{self.base_url}/weather"
        try:
            response = self._http.get(url, params={"cep": cep}, timeout=self.timeout)
        except requests.exceptions.Timeout as err:
            logger.error(f"⏱️ Resolver timeout for CEP {cep} ({self.timeout}s)")
            raise UpstreamUnavailableError("resolver request timed out", stage=STAGE) from err
        except requests.exceptions.RequestException as err:
            logger.error(f"🔌 Failed to communicate with resolver: {err}")
            raise UpstreamUnavailableError("failed to communicate with resolver", stage=STAGE) from err

        try:
            body = response.content
            media_type = response.headers.get("content-type") or JSON_MEDIA_TYPE
            return RelayedResponse(response.status_code, body, media_type)
        except requests.exceptions.RequestException as err:
            logger.error(f"✗ Failed to read response from resolver: {err}")
            raise UpstreamUnavailableError("failed to read response from resolver", stage=STAGE) from err
        finally:
            response.close()


class GatewayOrchestrator:
    """Validates a zipcode request and forwards it to the resolver stage."""

    def __init__(self, resolver_client: Optional[ResolverClient] = None):
        self.resolver_client = resolver_client or ResolverClient()

    @staticmethod
    def parse_request(raw_body: bytes) -> str:
        try:
            request = ZipcodeRequest.model_validate_json(raw_body or b"")
        except ValidationError as err:
            logger.info("Rejected malformed /zipcode body")
            raise MalformedRequestError("request body is not a valid zipcode request", stage=STAGE) from err

        if not validate_zipcode(request.cep):
            logger.info(f"Rejected invalid CEP {request.cep!r}")
            raise InvalidZipcodeError(f"invalid zipcode {request.cep!r}", stage=STAGE)
        return request.cep

    def handle(self, raw_body: bytes) -> RelayedResponse:
        """
        Validate the request body and relay the resolver's answer.

        Raises:
            MalformedRequestError: Body is not a JSON object with a string "cep"
            InvalidZipcodeError: "cep" is not exactly 8 digits
            UpstreamUnavailableError: Resolver could not be reached
        """
        cep = self.parse_request(raw_body)
        relayed = self.resolver_client.fetch_weather(cep)

        if relayed.status_code == 200:
            logger.info(f"✓ Weather for CEP {cep} relayed")
            return RelayedResponse(200, relayed.body, JSON_MEDIA_TYPE)

        logger.warning(f"Resolver answered {relayed.status_code} for CEP {cep}; relaying")
        return relayed
