import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings

# Load environment variables from the correct .env file
env_file = ".env" if os.getenv("APP_ENV", "development") == "development" else ".env.production"
load_dotenv(env_file)  # Load the .env file

class Settings(BaseSettings):
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Storage
    DATA_DIR: Path = Path.home() / ".medibridge"
    DATABASE_FILENAME: str = "medibridge.db"

    # Local server
    HOST: str = "127.0.0.1"
    PORT: int = 8765
    ALLOWED_ORIGINS: List[str] = ["http://127.0.0.1:8765", "http://localhost:8765"]

    # Bridge
    BRIDGE_URL: str = "http://127.0.0.1:8765"
    BRIDGE_ORIGIN: str = "http://127.0.0.1:8765"
    BRIDGE_ALLOWED_ORIGINS: List[str] = ["http://127.0.0.1:8765", "http://localhost:8765"]
    BRIDGE_WAIT_TIMEOUT_MS: int = 10000
    BRIDGE_POLL_INTERVAL_MS: int = 50
    BRIDGE_CALL_TIMEOUT_MS: int = 15000

    @field_validator("ALLOWED_ORIGINS", "BRIDGE_ALLOWED_ORIGINS", mode="before")
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def database_path(self) -> Path:
        return Path(self.DATA_DIR).expanduser() / self.DATABASE_FILENAME

    @property
    def bridge_ws_url(self) -> str:
        base = self.BRIDGE_URL.rstrip("/")
        if base.startswith("https://"):
            base = "wss://" + base[len("https://"):]
        elif base.startswith("http://"):
            base = "ws://" + base[len("http://"):]
        return f"{base}/bridge/ws"

settings = Settings()
