"""
Weather API route – resolver stage.

GET /weather?cep=<8 digits> resolves the CEP, fetches current weather and
returns the temperature in Celsius, Fahrenheit and Kelvin.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.services.weather_service import WeatherOrchestrator, WeatherReading
from services.weather.errors import WeatherPipelineError

logger = logging.getLogger("cepweather")

router = APIRouter(tags=["weather"])


def get_weather_orchestrator() -> WeatherOrchestrator:
    """Build the orchestrator for one request; overridden in tests."""
    return WeatherOrchestrator()


@router.get("/weather", response_model=WeatherReading)
def get_weather(
    cep: str = Query("", alias="cep"),
    orchestrator: WeatherOrchestrator = Depends(get_weather_orchestrator),
) -> WeatherReading:
    """
    GET /weather?cep=<cep>

    Returns (200): city, temp_C, temp_F, temp_K.
    Errors: 422 invalid zipcode, 404 unknown zipcode, 502 provider failure,
    500 misconfiguration.
    """
    try:
        return orchestrator.handle(cep)
    except WeatherPipelineError as exc:
        outcome = exc.outcome
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Weather request for CEP %r failed at %s (%s): %s",
            cep, outcome.stage, outcome.kind.value, outcome.message,
        )
        raise HTTPException(status_code=exc.status_code, detail=exc.public_message) from exc
