import logging
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 3004

    # "development" exposes error details in fallback 500 responses
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # Caption track requested from YouTube (fixed, not a request parameter)
    CAPTION_LANGUAGE: str = "en"

    # Per-client sliding window: 100 requests / 15 minutes
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100

    class Config:
        env_file = ".env"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
