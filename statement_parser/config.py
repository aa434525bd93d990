"""
Runtime settings loaded from an optional YAML file and environment variables.
"""
import os
import yaml
from pathlib import Path
from typing import Optional, Union
import logging

from pydantic import BaseModel, field_validator

logger = logging.getLogger(__name__)

CONFIG_ENV = "STATEMENT_PARSER_CONFIG"
LOG_LEVEL_ENV = "STATEMENT_PARSER_LOG_LEVEL"
DATABASE_URL_ENV = "DATABASE_URL"


class Settings(BaseModel):
    """Settings shared by the CLI and the HTTP backend."""
    database_url: str = "sqlite:///budget.db"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8080

    @field_validator("log_level")
    def validate_log_level(cls, v):
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings.

    The YAML file is taken from ``path`` or the ``STATEMENT_PARSER_CONFIG``
    environment variable; ``DATABASE_URL`` and ``STATEMENT_PARSER_LOG_LEVEL``
    override whatever the file says.

    Args:
        path: Optional path to a YAML config file

    Returns:
        Settings object

    Raises:
        FileNotFoundError: an explicitly requested file does not exist
        ValueError: the file is not a YAML mapping
    """
    config_path = path or os.getenv(CONFIG_ENV)
    data = {}

    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")
        data.update(loaded)
        logger.debug(f"Loaded config from {config_path}")

    if os.getenv(DATABASE_URL_ENV):
        data["database_url"] = os.environ[DATABASE_URL_ENV]
    if os.getenv(LOG_LEVEL_ENV):
        data["log_level"] = os.environ[LOG_LEVEL_ENV]

    return Settings(**data)
