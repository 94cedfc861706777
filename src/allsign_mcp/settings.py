#!/usr/bin/env python3
"""
Settings module for the AllSign MCP connector.
Handles environment variable loading and validation.
"""
import os
from typing import Optional
from dotenv import load_dotenv

from .credentials import Endpoint, resolve_endpoint

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Configuration settings loaded from environment variables."""

    # AllSign Configuration
    ALLSIGN_API_KEY: Optional[str] = os.getenv("ALLSIGN_API_KEY")
    ALLSIGN_BASE_URL: Optional[str] = os.getenv("ALLSIGN_BASE_URL")
    ALLSIGN_ENVIRONMENT: Optional[str] = os.getenv("ALLSIGN_ENVIRONMENT")
    ALLSIGN_TIMEOUT: float = float(os.getenv("ALLSIGN_TIMEOUT", "30"))
    ALLSIGN_CONTINUE_ON_FAIL: bool = _env_flag("ALLSIGN_CONTINUE_ON_FAIL")

    # Server Configuration
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate_allsign_config(cls) -> bool:
        """Validate that the AllSign API key is set."""
        return cls.ALLSIGN_API_KEY is not None and cls.ALLSIGN_API_KEY.strip() != ""

    @classmethod
    def get_endpoint(cls) -> Endpoint:
        """Get the configured endpoint (literal base URL or environment)."""
        return resolve_endpoint(cls.ALLSIGN_BASE_URL, cls.ALLSIGN_ENVIRONMENT)

    @classmethod
    def get_allsign_config(cls) -> dict:
        """Get AllSign configuration as a dictionary."""
        if not cls.validate_allsign_config():
            raise ValueError("AllSign configuration is incomplete. Please set ALLSIGN_API_KEY.")

        return {
            "api_key": cls.ALLSIGN_API_KEY.strip(),
            "base_url": cls.ALLSIGN_BASE_URL,
            "environment": cls.ALLSIGN_ENVIRONMENT,
            "timeout": cls.ALLSIGN_TIMEOUT,
        }


# Global settings instance
settings = Settings()
