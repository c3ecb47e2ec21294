# stock_tracker/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    # Remote inventory API (products + current user)
    INVENTORY_API_URL: str = "http://127.0.0.1:3000/api"
    INVENTORY_API_TOKEN: Optional[str] = None
    REQUEST_TIMEOUT: float = 10.0

    # PDF export
    REPORT_STORAGE_DIR: str = "storage/reports"
    FONT_DIR: str = "assets/fonts"
    CURRENCY: str = "DH"

    # Search input coalescing window used by callers
    SEARCH_DEBOUNCE_MS: int = 300

    LOG_LEVEL: str = "INFO"

    # Local server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
