from pathlib import Path
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Stockkeeper"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    DATA_DIR: str = "./data"
    AUTO_CREATE_DATA_FILES: bool = True
    CACHE_TTL_SECONDS: float = 10.0
    DEFAULT_REORDER_POINT: int = 10
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    ENABLE_REQUEST_ID: bool = True
    ENABLE_REQUEST_LOGGING: bool = True
    ENABLE_SECURITY_HEADERS: bool = True
    STRICT_TRANSPORT_SECURITY_SECONDS: int = 31536000
    READINESS_CHECK_STORAGE: bool = True

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR).expanduser()

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in {"prod", "production"}

    @model_validator(mode="after")
    def validate_production_safety(self):
        if not self.is_production:
            return self

        if not Path(self.DATA_DIR).expanduser().is_absolute():
            raise ValueError("DATA_DIR must be an absolute path when ENVIRONMENT is production.")

        if self.DEBUG:
            raise ValueError("DEBUG must be disabled in production.")

        return self


settings = Settings()
