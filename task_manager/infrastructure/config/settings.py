"""Configuration management

Settings come from environment variables (prefix ``TASK_``, nested sections
separated by ``__``, e.g. ``TASK_DATABASE__URI``), an optional ``.env`` file,
and an optional YAML file whose values take precedence over the environment.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import json
import logging
import os

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "config.yaml"
CONFIG_FILE_ENV = "TASK_CONFIG_FILE"


class ServiceConfig(BaseModel):
    """Service configuration"""
    name: str = "task-manager"
    version: str = "1.0.0"
    environment: str = "development"  # development, staging, production
    api_version: str = "v1"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


class DatabaseConfig(BaseModel):
    """MongoDB configuration"""
    uri: str = "mongodb://localhost:27017"
    database: str = "task_mgt_db"
    max_retry_attempts: int = 5
    base_retry_interval: float = 5.0  # seconds
    server_selection_timeout_ms: int = 5000


class AuthConfig(BaseModel):
    """Authentication configuration"""
    secret_key: str = "your-secret"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    bcrypt_salt_rounds: int = Field(default=10, ge=4, le=31)


class CorsConfig(BaseModel):
    """CORS configuration"""
    origins: List[str] = ["http://localhost:3000"]
    methods: List[str] = ["GET", "POST", "PUT", "DELETE", "PATCH"]


class LoggingConfig(BaseModel):
    """Logging configuration"""
    level: Optional[str] = None  # derived from environment when unset
    log_dir: str = "logs"
    enable_file_logging: bool = True
    application_log_retention_days: int = 14
    error_log_retention_days: int = 30


class AppConfig(BaseSettings):
    """Main application configuration"""
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="TASK_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


def _read_config_file(config_path: Path) -> Dict[str, Any]:
    """Read a YAML or JSON configuration file"""
    with open(config_path, "r") as f:
        if config_path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from file (when present) and environment"""
    path = Path(config_path or os.getenv(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE))
    try:
        if path.exists():
            data = _read_config_file(path)
            logger.info(f"Loading configuration from {path}")
            return AppConfig(**data)
        return AppConfig()
    except (OSError, yaml.YAMLError, json.JSONDecodeError, ValidationError, SettingsError) as e:
        raise ConfigurationError(f"Failed to load config: {e}") from e


class ConfigurationError(Exception):
    """Configuration related errors"""
    pass


# Global configuration instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get current application configuration"""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call reloads it"""
    global _config
    _config = None
