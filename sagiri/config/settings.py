"""
Application settings and configuration.

This module defines the configuration class for managing environment variables.
"""

import os


class Config:
    """Configuration class for managing environment variables."""

    TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
    KITSU_API_BASE: str = os.getenv("KITSU_API_BASE", "https://kitsu.io/api/edge")
    KITSU_PAGE_SIZE: int = int(os.getenv("KITSU_PAGE_SIZE", "10"))
    KITSU_TIMEOUT_SECONDS: float = float(os.getenv("KITSU_TIMEOUT_SECONDS", "10"))
    DB_HOST: str = os.getenv("DB_HOST", "")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "")
    DB_USER: str = os.getenv("DB_USER", "")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")

    @classmethod
    def validate(cls) -> bool:
        """
        Validate configuration.

        Checks that all required environment variables are set.

        Returns:
            True if validation succeeds

        Raises:
            ValueError: If any required environment variables are missing
        """
        required = [
            "TELEGRAM_BOT_TOKEN", "DB_HOST", "DB_NAME", "DB_USER", "DB_PASSWORD"
        ]
        missing = [var for var in required if not getattr(cls, var)]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        if cls.KITSU_PAGE_SIZE <= 0:
            raise ValueError("KITSU_PAGE_SIZE must be a positive integer")
        return True
