"""
Zipcode API route – gateway stage.

POST /zipcode validates {"cep": "<8 digits>"} and relays the resolver
stage's answer, preserving its status code.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.concurrency import run_in_threadpool

from app.services.gateway_service import GatewayOrchestrator
from services.weather.errors import WeatherPipelineError

logger = logging.getLogger("cepweather.gateway")

router = APIRouter(tags=["zipcode"])


def get_gateway_orchestrator() -> GatewayOrchestrator:
    """Build the gateway orchestrator for one request; overridden in tests."""
    return GatewayOrchestrator()


@router.post("/zipcode")
async def post_zipcode(
    request: Request,
    orchestrator: GatewayOrchestrator = Depends(get_gateway_orchestrator),
) -> Response:
    """
    POST /zipcode

    Request body (JSON):
    ```json
    {"cep": "01001000"}
    ```

    Returns (200): the resolver's weather payload, verbatim.
    Errors: 400 malformed body, 422 invalid zipcode, 502 resolver unreachable;
    any other resolver error status is relayed with its body.
    """
    raw_body = await request.body()
    try:
        # The resolver call blocks, so keep it off the event loop.
        relayed = await run_in_threadpool(orchestrator.handle, raw_body)
    except WeatherPipelineError as exc:
        outcome = exc.outcome
        log = logger.error if exc.status_code >= 500 else logger.info
        log("Zipcode request failed at %s (%s): %s", outcome.stage, outcome.kind.value, outcome.message)
        raise HTTPException(status_code=exc.status_code, detail=exc.public_message) from exc

    return Response(
        content=relayed.body,
        status_code=relayed.status_code,
        media_type=relayed.media_type,
    )
