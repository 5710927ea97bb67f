from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
import os
from urllib.parse import quote_plus
from pathlib import Path
from enum import Enum

class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class Settings(BaseSettings):
    # Environment Configuration
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    # Project Information
    PROJECT_NAME: str = "Sehaty"
    VERSION: str = "0.1.0"
    API_V1_STR: str = "/api/v1"

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # Database - PostgreSQL, or a full SQLALCHEMY_DATABASE_URI (sqlite:// for local tests)
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "sehaty"
    POSTGRES_PASSWORD: Optional[str] = None
    POSTGRES_DB: str = "sehaty"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None

    # Security
    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"

    # Timezone used to decide what "today" is for reminder status mirroring
    DEFAULT_TIMEZONE: str = "UTC"

    # File Uploads
    UPLOADS_LOCAL_DIR: Optional[str] = None  # Derived from project root when not set

    # OCR Configuration ("textract" or "none")
    OCR_PROVIDER: str = "none"
    OCR_MAX_FILE_SIZE: int = 10 * 1024 * 1024

    # AWS Configuration for Textract OCR
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: Optional[str] = None

    # CORS
    CORS_ORIGINS: List[str] = []

    # Logging / metrics
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    METRICS_ENABLED: bool = False

    # --- Validators & Derived Settings ---
    @field_validator("OCR_PROVIDER", mode="before")
    @classmethod
    def normalize_ocr_provider(cls, v: Optional[str]) -> str:
        if v is None or (isinstance(v, str) and v.strip() == ""):
            return "none"
        return str(v).strip().lower()

    @model_validator(mode="after")
    def _finalize_and_validate(self) -> "Settings":
        # Derive SQLALCHEMY_DATABASE_URI if not provided
        if not self.SQLALCHEMY_DATABASE_URI:
            safe_user = quote_plus(self.POSTGRES_USER)
            if self.POSTGRES_PASSWORD:
                safe_password = quote_plus(self.POSTGRES_PASSWORD)
                self.SQLALCHEMY_DATABASE_URI = (
                    f"postgresql://{safe_user}:{safe_password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
                )
            else:
                self.SQLALCHEMY_DATABASE_URI = (
                    f"postgresql://{safe_user}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
                )

        # UPLOADS_LOCAL_DIR: durable local storage for prescription images
        if not self.UPLOADS_LOCAL_DIR:
            try:
                project_root = Path(__file__).resolve().parents[2]
            except Exception:
                project_root = Path(os.getcwd())
            self.UPLOADS_LOCAL_DIR = str(project_root / "data" / "uploads")

        return self

    # Environment-specific properties
    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    @property
    def is_staging(self) -> bool:
        return self.ENVIRONMENT == Environment.STAGING

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def uses_sqlite(self) -> bool:
        return str(self.SQLALCHEMY_DATABASE_URI).startswith("sqlite")

    @property
    def allowed_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS:
            return self.CORS_ORIGINS
        if self.is_production:
            return []
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8081",
        ]

    @model_validator(mode='after')
    def validate_environment_config(self):
        """Validate environment-specific configuration requirements"""
        if self.is_production:
            if self.uses_sqlite:
                raise ValueError("Production must not run on SQLite")
            if len(self.SECRET_KEY) < 32:
                raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if self.OCR_PROVIDER not in ("none", "textract"):
            raise ValueError(f"Unsupported OCR_PROVIDER: {self.OCR_PROVIDER}")
        return self

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra='ignore')

settings = Settings()
