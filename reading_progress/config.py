"""Configuration loader for the reading-progress engine."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class AppInfo(BaseModel):
    """Application metadata."""

    name: str = "Reading Progress"
    version: str = "1.0.0"
    log_level: str = "INFO"


class ProgressConfig(BaseModel):
    """Heuristics used to turn character counts into pages and minutes."""

    chars_per_page: int = Field(default=1500, gt=0)
    chars_per_minute: int = Field(default=1600, gt=0)
    document_cache_size: int = Field(default=8, ge=0)


class AppConfig(BaseModel):
    """Root application configuration."""

    app: AppInfo = Field(default_factory=AppInfo)
    progress: ProgressConfig = Field(default_factory=ProgressConfig)


# Environment variable -> (section, field)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "READING_PROGRESS_CHARS_PER_PAGE": ("progress", "chars_per_page"),
    "READING_PROGRESS_CHARS_PER_MINUTE": ("progress", "chars_per_minute"),
    "READING_PROGRESS_LOG_LEVEL": ("app", "log_level"),
}


def load_config(config_path: str | Path = "config.yaml") -> AppConfig:
    """Load configuration from YAML file and environment variables.

    Environment values win over the YAML file and are validated the same
    way, so a non-numeric page size fails loudly.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Fully populated AppConfig instance.
    """
    load_dotenv()

    yaml_data: dict = {}
    config_file = Path(config_path)
    if config_file.exists():
        with open(config_file) as f:
            yaml_data = yaml.safe_load(f) or {}

    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None:
            yaml_data.setdefault(section, {})[field] = value

    return AppConfig(**yaml_data)
