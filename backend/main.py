import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config import AppConfig
from errors import register_error_handlers
from routers import speech
from schemas import HealthResponse, RootResponse


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig.from_env()
    configure_logging(config.log_level)

    app = FastAPI(title="WordWanderer Speech API", version=config.version)
    app.state.config = config

    # === CORS Config ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Cookie", "X-Requested-With"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        origin = request.headers.get("origin") or "No Origin"
        logger.info("%s %s - Origin: %s", request.method, request.url.path, origin)
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    register_error_handlers(app)

    # === Include Routers ===
    app.include_router(speech.router)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(
            status="OK",
            message="WordWanderer API is running",
            timestamp=datetime.now(timezone.utc).isoformat(),
            environment=config.environment,
        )

    @app.get("/", response_model=RootResponse)
    def root():
        return RootResponse(
            message="Welcome to WordWanderer API",
            version=config.version,
            documentation="/docs",
            health="/health",
        )

    logger.info("Speech API configured for %s (origins: %s)", config.environment, ", ".join(config.cors_origins))
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=app.state.config.port)
