import argparse
import logging

from fastapi import FastAPI

from app.routers.weather import router as weather_router
from app.routers.zipcode import router as zipcode_router
from config import settings

logger = logging.getLogger("cepweather")


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(level=level, format=settings.LOG_FORMAT)


def _add_health_route(app: FastAPI, service: str) -> None:
    @app.get("/health")
    async def health():
        return {"status": "ok", "service": service}


def create_resolver_app() -> FastAPI:
    """Create the resolver stage: GET /weather."""
    app = FastAPI(title="CEP Weather - Resolver")
    _add_health_route(app, "resolver")
    app.include_router(weather_router)
    return app


def create_gateway_app() -> FastAPI:
    """Create the gateway stage: POST /zipcode."""
    app = FastAPI(title="CEP Weather - Gateway")
    _add_health_route(app, "gateway")
    app.include_router(zipcode_router)
    return app


resolver_app = create_resolver_app()
gateway_app = create_gateway_app()

DEFAULT_PORTS = {
    "gateway": settings.GATEWAY_PORT,
    "resolver": settings.RESOLVER_PORT,
}


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run one stage of the CEP weather pipeline")
    parser.add_argument("--service", choices=sorted(DEFAULT_PORTS), required=True)
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)

    import uvicorn

    configure_logging()
    port = args.port or DEFAULT_PORTS[args.service]
    logger.info(f"Service {args.service} running on port {port}")
    uvicorn.run(f"app.main:{args.service}_app", host=args.host, port=port, reload=False)


if __name__ == "__main__":
    main()
