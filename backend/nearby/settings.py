from __future__ import annotations

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

REPO_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = REPO_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE), env_file_encoding="utf-8", extra="ignore"
    )

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # server bind
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # persistence directory (defaults to ~/.nearby-eats-data)
    DATA_DIR: Path | None = None
    DB_FILENAME: str = "db.json"

    # CORS allow origins (comma-separated). Default "*" (allow all).
    CORS_ALLOW_ORIGINS: str = "*"

    # External places provider; search runs local-only unless both are set
    PLACES_API_KEY: str | None = None
    PLACES_API_URL: str | None = None
    DEFAULT_RADIUS: float = 5000

    # Directions provider
    MAPBOX_TOKEN: str | None = None
    MAPBOX_DIRECTIONS_URL: str = "https://api.mapbox.com/directions/v5/mapbox/driving"

    # Observability
    SENTRY_DSN: str | None = None
    SENTRY_ENVIRONMENT: str = "development"
    SENTRY_RELEASE: str | None = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.2

    @property
    def allow_origins(self) -> list[str]:
        s = (self.CORS_ALLOW_ORIGINS or "").strip()
        if s == "*":
            return ["*"]
        if s == "":
            return []
        return [part.strip() for part in s.split(",") if part.strip()]

    @property
    def data_dir(self) -> Path:
        # Blank DATA_DIR values count as unset so we never write into the repo root.
        def _materialize(path: Path) -> Path:
            path.mkdir(parents=True, exist_ok=True)
            return path

        raw_env = os.getenv("DATA_DIR")
        if raw_env is not None:
            trimmed = raw_env.strip()
            if trimmed:
                return _materialize(Path(trimmed).expanduser().resolve())
            return _materialize(Path.home() / ".nearby-eats-data")

        if self.DATA_DIR is not None:
            candidate = Path(self.DATA_DIR).expanduser()
            candidate_str = str(candidate).strip()
            if candidate_str and candidate_str not in {".", "./", ".\\"}:
                return _materialize(candidate.resolve())
        return _materialize(Path.home() / ".nearby-eats-data")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.DB_FILENAME

    @property
    def places_configured(self) -> bool:
        return bool(self.PLACES_API_KEY) and bool(self.PLACES_API_URL)


settings = Settings()
