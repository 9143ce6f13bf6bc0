from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # API settings
    API_TITLE: str = "School Management API"
    API_DESCRIPTION: str = "API for students, classes, fees, teachers, subjects, attendance & pictures"
    API_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Database settings
    DATABASE_URL: Optional[str] = None
    DB_DRIVER: str = "mysql+aiomysql"
    DB_HOST: str = "localhost"
    DB_PORT: str = "3306"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "school"
    DB_MAX_CLIENTS: int = 10
    DB_IDLE_TIMEOUT: int = 30  # seconds
    DB_CONNECTION_TIMEOUT: int = 5  # seconds
    DB_ECHO: bool = False

    # Media host (Cloudinary compatible upload API)
    MEDIA_CLOUD_NAME: str = ""
    MEDIA_API_KEY: str = ""
    MEDIA_API_SECRET: str = ""
    MEDIA_FOLDER: str = "school"
    MEDIA_UPLOAD_BASE_URL: str = "https://api.cloudinary.com/v1_1"
    MEDIA_UPLOAD_TIMEOUT: float = 30.0
    MAX_IMAGE_SIZE_MB: int = 5

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app.log"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def media_configured(self) -> bool:
        return bool(self.MEDIA_CLOUD_NAME and self.MEDIA_API_KEY and self.MEDIA_API_SECRET)


settings = Settings()
