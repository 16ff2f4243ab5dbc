"""Application settings loaded from environment variables.

Keeps the port, credential and file locations in one place. Values from
a local ``.env`` file are loaded first; real environment variables win.
"""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_PORT = 5000
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_HISTORY_PATH = "data/chatHistory.json"


class Settings(BaseModel):
    """Runtime configuration for the server and the client."""

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Server port")
    google_api_key: str | None = Field(default=None, description="Gemini API credential")
    gemini_model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    history_path: Path = Field(default=Path(DEFAULT_HISTORY_PATH), description="History file")
    server_url: str = Field(default=f"http://localhost:{DEFAULT_PORT}", description="Client base URL")
    log_level: str = Field(default="info", description="Logging level name")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment.

        Environment variables:
            PORT: Server port (default: 5000)
            HOST: Server bind address (default: 127.0.0.1)
            GOOGLE_API_KEY: Gemini API key (GEMINI_API_KEY is accepted as a fallback)
            GEMINI_MODEL: Model name (default: gemini-2.5-flash)
            CHAT_HISTORY_PATH: History file (default: data/chatHistory.json)
            CHAT_SERVER_URL: Client base URL (default: http://localhost:<PORT>)
            LOG_LEVEL: Logging level (default: info)
        """
        port = int(os.getenv("PORT", str(DEFAULT_PORT)))
        return cls(
            host=os.getenv("HOST", "127.0.0.1"),
            port=port,
            google_api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            history_path=Path(os.getenv("CHAT_HISTORY_PATH", DEFAULT_HISTORY_PATH)),
            server_url=os.getenv("CHAT_SERVER_URL", f"http://localhost:{port}"),
            log_level=os.getenv("LOG_LEVEL", "info"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
