"""
Configuration loader for the customers service
"""

import os
import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "app_config.yml"


class AppConfig(BaseModel):
    """Application configuration"""

    title: str = "Customers API"
    version: str = "1.0.0"
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    seed_demo_customers: bool = False


def _env_overrides() -> dict:
    overrides = {}
    if os.getenv("LOG_LEVEL"):
        overrides["log_level"] = os.environ["LOG_LEVEL"].strip().upper()
    seed = os.getenv("SEED_DEMO_CUSTOMERS")
    if seed is not None and seed.strip():
        overrides["seed_demo_customers"] = seed.strip().lower() in ("1", "true", "yes")
    return overrides


def load_app_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load and validate application configuration from YAML file

    Environment variables (LOG_LEVEL, SEED_DEMO_CUSTOMERS) override
    values from the file.

    Args:
        config_path: Path to config file. Defaults to config/app_config.yml;
            when the default file is absent built-in defaults are used.

    Returns:
        Validated AppConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    config_data = {}
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    path = config_path or DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}

    config_data.update(_env_overrides())

    try:
        config = AppConfig(**config_data)
        logger.info(f"Loaded app config (source={path if path.exists() else 'defaults'})")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise
