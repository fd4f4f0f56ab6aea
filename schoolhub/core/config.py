# schoolhub/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from sqlalchemy.engine import URL
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application Settings
    APP_NAME: str = "SchoolHub API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    DOCS_ENABLED: bool = True

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = int(os.environ.get("PORT", 8000))

    # Database Settings
    # DATABASE_URL wins; otherwise DB_HOST switches to MySQL, else local SQLite
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "school_management"
    DB_PORT: int = 3306
    DB_DRIVER: str = "mysql+pymysql"
    SQLITE_PATH: str = "./schoolhub.db"

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 0
    DB_POOL_TIMEOUT: int = 2
    DB_POOL_RECYCLE: int = 30

    # CORS Settings
    ALLOWED_ORIGINS: str = os.environ.get("ALLOWED_ORIGINS", "*")

    # File Upload Settings
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB
    ALLOWED_IMAGE_TYPES: List[str] = ["image/jpeg", "image/jpg", "image/png", "image/webp"]
    IMAGE_UPLOAD_DIR: str = os.path.join("public", "schoolImages")
    IMAGE_ROUTE_PREFIX: str = "/schoolImages"

    # Middleware settings
    GZIP_MIN_SIZE: int = 500
    # Non-multipart bodies only; uploads are capped per file
    MAX_REQUEST_SIZE: int = 10 * 1024 * 1024

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Base URL used to build absolute file URLs
    BASE_URL: str = os.environ.get("BASE_URL", "http://localhost:8000")

    # Client settings
    API_BASE_URL: str = "http://localhost:8000"
    CLIENT_TIMEOUT_SECONDS: float = 15.0

    def _split_csv(self, value: str) -> List[str]:
        if value is None:
            return []
        value = value.strip()
        if value == "":
            return []
        return [item.strip() for item in value.split(",")]

    @property
    def allowed_origins_list(self) -> List[str]:
        return self._split_csv(self.ALLOWED_ORIGINS)

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_HOST:
            return URL.create(
                self.DB_DRIVER,
                username=self.DB_USER,
                password=self.DB_PASSWORD or None,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return f"sqlite:///{self.SQLITE_PATH}"

@lru_cache()
def get_settings() -> Settings:
    return Settings()

settings: Settings = get_settings()
