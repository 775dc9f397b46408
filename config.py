# config.py
"""Application configuration"""
from typing import List
from pydantic_settings import BaseSettings
from utils.common import get_log_file_path

class Settings(BaseSettings):
    """
    Loads configuration from environment variables.
    Create a .env file in the root directory to set these values.
    """

    # Logger configuration
    LOGGER_NAME: str = "docsim"
    LOG_FILE_PATH: str = get_log_file_path()
    LOG_LEVEL: str = "DEBUG"
    LOG_CONSOLE_LEVEL: str = "INFO"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 5
    LOG_TO_FILE: bool = True

    # Document uploads
    ALLOWED_FILE_EXTENSIONS: List[str] = ["txt"]
    MAX_FILE_SIZE: int = 5 * 1024 * 1024  # 5MB
    TEXT_ENCODING: str = "utf-8"

    # Credits
    DEFAULT_DAILY_CREDITS: int = 20
    MIN_CREDIT_REQUEST: int = 1
    MAX_CREDIT_REQUEST: int = 100

    # Vector cache (off by default, every scan re-derives vectors)
    VECTOR_CACHE_ENABLED: bool = False
    VECTOR_CACHE_MAX_ENTRIES: int = 1000

    # Scan results
    SNIPPET_LENGTH: int = 200

    # Admin analytics
    ANALYTICS_TOP_USERS: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

# Create a single settings instance to be used across the application
settings = Settings()
