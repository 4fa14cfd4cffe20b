"""
Failure taxonomy for the CEP weather pipeline.

Every component raises a subclass of WeatherPipelineError. Each exception
knows which stage detected it, what kind of failure it is and which HTTP
status the stage boundary should answer with.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    MALFORMED_REQUEST = "malformed_request"
    INVALID_ZIPCODE = "invalid_zipcode"
    NOT_FOUND = "not_found"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    DECODE_ERROR = "decode_error"
    MISCONFIGURED = "misconfigured"


STATUS_BY_KIND = {
    FailureKind.MALFORMED_REQUEST: 400,
    FailureKind.INVALID_ZIPCODE: 422,
    FailureKind.NOT_FOUND: 404,
    FailureKind.UPSTREAM_UNAVAILABLE: 502,
    FailureKind.DECODE_ERROR: 502,
    FailureKind.MISCONFIGURED: 500,
}


@dataclass(frozen=True)
class FailureOutcome:
    """Why a stage failed, before it is mapped to a transport status."""

    stage: str
    kind: FailureKind
    message: str

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class WeatherPipelineError(Exception):
    """Base error for all pipeline failures."""

    kind = FailureKind.UPSTREAM_UNAVAILABLE
    public_message = "weather service unavailable"

    def __init__(self, message: str, *, stage: str) -> None:
        super().__init__(message)
        self.stage = stage

    @property
    def outcome(self) -> FailureOutcome:
        return FailureOutcome(stage=self.stage, kind=self.kind, message=str(self))

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class MalformedRequestError(WeatherPipelineError):
    """Request body could not be decoded."""

    kind = FailureKind.MALFORMED_REQUEST
    public_message = "invalid request body"


class InvalidZipcodeError(WeatherPipelineError):
    """CEP is not exactly 8 digits."""

    kind = FailureKind.INVALID_ZIPCODE
    public_message = "invalid zipcode"


class ZipcodeNotFoundError(WeatherPipelineError):
    """CEP is well formed but has no known city."""

    kind = FailureKind.NOT_FOUND
    public_message = "can not find zipcode"


class UpstreamUnavailableError(WeatherPipelineError):
    """Provider or peer service unreachable or answered with an error."""


class ProviderDecodeError(UpstreamUnavailableError):
    """Provider answered, but the payload does not have the expected shape."""

    kind = FailureKind.DECODE_ERROR

    def __init__(self, message: str, *, stage: str, field: Optional[str] = None) -> None:
        super().__init__(message, stage=stage)
        self.field = field


class APIKeyMissingError(WeatherPipelineError):
    """Provider credential is not configured."""

    kind = FailureKind.MISCONFIGURED
    public_message = "weather service misconfigured"


def field_from_validation_error(exc) -> str:
    """Dotted path of the first offending field in a pydantic ValidationError."""
    errors = exc.errors()
    if not errors:
        return "<root>"
    loc = errors[0].get("loc") or ()
    return ".".join(str(part) for part in loc) or "<root>"
