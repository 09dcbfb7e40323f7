import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent


@dataclass
class Settings:
    # API settings
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Database settings
    data_file: str = os.getenv("LIBRARY_DB_FILE") or os.getenv("LIBRARY_DATA_FILE", "library.db")

    # Rendering settings
    views_dir: str = os.getenv("LIBRARY_VIEWS_DIR", str(BASE_DIR / "views"))

    # Application settings
    app_name: str = os.getenv("APP_NAME", "Local Library")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
