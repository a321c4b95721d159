"""
Configuration utilities.
"""
import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_STORAGE_DIR = "data/active"
DEFAULT_CONTACT_EMAIL = "careers@acmecorp.com"


class Config:
    """Configuration manager."""

    PREFIX = "APPLYFLOW_"

    def __init__(self, env_file: Optional[str] = None):
        """Initialize configuration.

        Args:
            env_file: Optional path to a .env file to load before reading values
        """
        if env_file:
            load_dotenv(env_file)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Keys are looked up with the ``APPLYFLOW_`` prefix first, then as given.
        """
        value = os.getenv(f"{self.PREFIX}{key.upper()}")
        if value is None:
            value = os.getenv(key)
        if value is None or value == "":
            return default
        return value

    @property
    def storage_dir(self) -> Path:
        return Path(self.get("storage_dir", DEFAULT_STORAGE_DIR))

    @property
    def contact_email(self) -> str:
        return self.get("contact_email", DEFAULT_CONTACT_EMAIL)

    @property
    def log_level(self) -> int:
        name = str(self.get("log_level", "INFO")).upper()
        level = logging.getLevelName(name)
        return level if isinstance(level, int) else logging.INFO

    @property
    def log_file(self) -> Optional[str]:
        return self.get("log_file")
