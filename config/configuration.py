"""
Configuration Management Module.
Loads configuration from config.yaml and allows overrides via environment variables.
"""
import os
import yaml
from typing import List, Optional
from pathlib import Path
from pydantic import BaseModel, Field
import structlog

from services.common.exceptions import ConfigurationError
from services.infrastructure.connection_string_builder import DatabaseKind

logger = structlog.get_logger()

# --- Configuration Models ---

class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 9304
    transport: str = "stdio"
    log_level: str = "INFO"

class LoggingConfig(BaseModel):
    json_format: bool = True

class SetupConfig(BaseModel):
    # Database kinds the wizard offers; requests for others are refused
    allowed_db_types: List[DatabaseKind] = Field(default_factory=lambda: list(DatabaseKind))

    def is_db_type_allowed(self, db_type: str) -> bool:
        return db_type in [kind.value for kind in self.allowed_db_types]

class SetupServiceConfig(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    setup: SetupConfig = Field(default_factory=SetupConfig)

# --- Loader Logic ---

class ConfigLoader:
    _instance: Optional[SetupServiceConfig] = None

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> SetupServiceConfig:
        """
        Load configuration from YAML and override with Environment Variables.
        Singleton pattern to avoid reloading.
        """
        if cls._instance:
            return cls._instance

        if not config_path:
            config_path = os.getenv("SETUP_CONFIG_PATH", "config/config.yaml")

        path = Path(config_path)
        if not path.is_absolute():
            path = Path.cwd() / config_path

        config_data = {}
        if path.exists():
            try:
                with open(path, "r") as f:
                    config_data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.error("config_load_error", error=str(e), path=str(path))
                raise ConfigurationError(f"Failed to load config file at {path}: {e}", details={"path": str(path)})
        else:
            logger.warning("config_file_not_found", path=str(path))

        try:
            config = SetupServiceConfig(**config_data)
        except (TypeError, ValueError) as e:
            logger.error("config_validation_error", error=str(e))
            raise ConfigurationError(f"Invalid Configuration: {e}")

        mcp_transport = os.getenv("MCP_TRANSPORT")
        if mcp_transport:
            config.server.transport = mcp_transport
            logger.info("transport_overridden", transport=mcp_transport)

        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            config.server.log_level = log_level

        cls._instance = config
        return config

    @classmethod
    def reset(cls):
        """Drop the cached configuration so the next load re-reads it."""
        cls._instance = None


def get_config() -> SetupServiceConfig:
    return ConfigLoader.load()
