from typing import Optional

from fastapi import FastAPI
import uvicorn
from api.middleware import CORSHeadersMiddleware, ErrorHandlerMiddleware, RateLimitMiddleware
from api.routes.transcript import router as transcript_router
from config import Settings, configure_logging, settings as default_settings
from schemas.transcript import HealthResponse
from services.rate_limiter import RateLimiter
from services.transcript_service import TranscriptService, YouTubeCaptionSource, utc_now_iso
import logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    transcript_service: Optional[TranscriptService] = None,
    rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    """
    Build the API. Collaborators default to the production ones built from
    settings; tests pass their own.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Transcript Service API",
        version=VERSION,
    )

    app.state.settings = settings
    app.state.transcript_service = transcript_service or TranscriptService(
        YouTubeCaptionSource(),
        language=settings.CAPTION_LANGUAGE,
    )

    # add_middleware wraps, so the last one added runs first
    if settings.RATE_LIMIT_ENABLED:
        app.state.rate_limiter = rate_limiter or RateLimiter(
            max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
        )
        app.add_middleware(RateLimitMiddleware, limiter=app.state.rate_limiter)
    app.add_middleware(ErrorHandlerMiddleware, expose_details=settings.is_development)
    app.add_middleware(CORSHeadersMiddleware)

    app.include_router(
        transcript_router,
        tags=["transcript"],
    )

    # Routes
    @app.get("/")
    async def root():
        return {"message": "Transcript Service API", "version": VERSION}

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(status="healthy", timestamp=utc_now_iso())

    return app


configure_logging(default_settings.LOG_LEVEL)
app = create_app()


def run():
    logger.info(f"Server is running on port {default_settings.PORT}")
    uvicorn.run(
        "main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.is_development,
    )


if __name__ == "__main__":
    run()
