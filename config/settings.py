"""
Environment-driven setup using pydantic-settings.
Lets an unattended install describe its database through DB_* variables.
"""
from typing import Optional
import pydantic
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from services.common.exceptions import ValidationError
from services.infrastructure.install_request import CheckDatabaseRequest, parse_check_database_request


class Settings(BaseSettings):
    """
    Database settings loaded from environment variables and .env files.
    """
    model_config = SettingsConfigDict(
        env_file=('.env', '.env.local'),  # Load both .env and .env.local
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False
    )

    # --- Database Configuration ---
    DB_TYPE: Optional[str] = Field(None, description="Database type (postgres, sqlite3, mysql)")
    DB_USERNAME: str = Field("", description="Database user")
    DB_PASSWORD: SecretStr = Field(SecretStr(""), description="Database password")
    DB_HOST: str = Field("", description="Database host, optionally host:port")
    DB_NAME: str = Field("", description="Database name")
    DB_FILE: str = Field("", description="Database file for sqlite3")

    # --- SSL ---
    DB_SSL_ENABLED: bool = Field(False, description="Enable SSL (postgres only)")
    DB_SSL_MODE: str = Field("", description="SSL mode (require, verify-ca, verify-full)")
    DB_SSL_ROOT_CERT: str = Field("", description="Path to the root certificate")
    DB_SSL_CERT: str = Field("", description="Path to the client certificate")
    DB_SSL_KEY: str = Field("", description="Path to the client key")

    @classmethod
    def load(cls) -> "Settings":
        """
        Read the environment.

        Raises:
            ValidationError: if a DB_* variable has the wrong type
        """
        try:
            return cls()
        except pydantic.ValidationError as e:
            raise ValidationError(
                "Invalid database settings in environment",
                details={"errors": e.errors(include_url=False, include_input=False)},
            ) from e

    def database_request(self) -> Optional[CheckDatabaseRequest]:
        """
        Build a setup request from the environment.

        Returns None when DB_TYPE is not set.

        Raises:
            ValidationError: if DB_TYPE names an unsupported database
        """
        if not self.DB_TYPE:
            return None
        return parse_check_database_request({
            "db_type": self.DB_TYPE.lower(),
            "db_username": self.DB_USERNAME,
            "db_password": self.DB_PASSWORD,
            "db_host": self.DB_HOST,
            "db_name": self.DB_NAME,
            "db_file": self.DB_FILE,
            "ssl_enabled": self.DB_SSL_ENABLED,
            "ssl_mode": self.DB_SSL_MODE,
            "ssl_root_cert": self.DB_SSL_ROOT_CERT,
            "ssl_cert": self.DB_SSL_CERT,
            "ssl_key": self.DB_SSL_KEY,
        })
