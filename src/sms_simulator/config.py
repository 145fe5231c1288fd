from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SIMULATOR_BASE_URL: str = "http://localhost:8080"
    SIMULATOR_API_PREFIX: str = "/api/simulator"
    HTTP_TIMEOUT: float = 10.0

    POLL_INTERVAL: float = 2.0

    COUNTRY_CODE: str = "249"

    MOCK_HOST: str = "0.0.0.0"
    MOCK_PORT: int = 8080

    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    @property
    def api_url(self) -> str:
        return self.SIMULATOR_BASE_URL.rstrip("/") + self.SIMULATOR_API_PREFIX

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
