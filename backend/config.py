from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv


DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
]


def _split_origins(raw: Optional[str]) -> List[str]:
    return [origin.strip() for origin in (raw or "").split(",") if origin.strip()]


@dataclass
class AppConfig:
    environment: str
    log_level: str
    version: str
    port: int = 5000
    cors_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "AppConfig":
        load_dotenv()

        environment = os.getenv("APP_ENV", "development").strip() or "development"
        default_level = "DEBUG" if environment == "development" else "INFO"
        log_level = (os.getenv("LOG_LEVEL") or default_level).strip().upper()

        origins = _split_origins(os.getenv("CORS_ORIGINS"))
        frontend_url = os.getenv("FRONTEND_URL")
        if frontend_url and frontend_url.strip():
            origins.append(frontend_url.strip())

        return cls(
            environment=environment,
            log_level=log_level,
            version=os.getenv("API_VERSION", "1.0.0"),
            port=int(os.getenv("PORT", "5000")),
            cors_origins=origins or list(DEFAULT_ORIGINS),
        )
