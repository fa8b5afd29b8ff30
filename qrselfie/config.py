from pathlib import Path
from typing import List, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    # Absolute base for view URLs; derived from the LAN address when empty
    PUBLIC_BASE_URL: str = ""

    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000,http://127.0.0.1:3000"

    # Storage
    PUBLIC_DIR: Path = PACKAGE_DIR / "static"
    UPLOADS_DIR: Path = Path("./uploads")
    DATA_DIR: Path = Path("./data")
    MANIFEST_FILE: str = "manifest.json"
    MANIFEST_STRICT: bool = False

    # Photo ids
    ID_LENGTH: int = 10
    ID_MAX_ATTEMPTS: int = 5

    # QR rendering
    QR_WIDTH: int = 256
    QR_MARGIN: int = 1

    # Observability
    METRICS_ENABLED: bool = False
    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v

    @property
    def manifest_path(self) -> Path:
        return self.DATA_DIR / self.MANIFEST_FILE

    # Pydantic v2 config
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
