"""
Connection String Builder for the setup wizard.
Turns a validated database description into the descriptor a driver opens.
"""
import os
from enum import Enum
from typing import Callable, Dict, Optional

import structlog
from pydantic import BaseModel, ConfigDict, SecretStr

from services.infrastructure.host_port import parse_host_port

logger = structlog.get_logger()

PathExists = Callable[[str], bool]


class DatabaseKind(str, Enum):
    SQLITE3 = "sqlite3"
    MYSQL = "mysql"
    POSTGRES = "postgres"


class SslMode(str, Enum):
    DISABLE = "disable"
    REQUIRE = "require"
    VERIFY_CA = "verify-ca"
    VERIFY_FULL = "verify-full"


class DatabaseConfig(BaseModel):
    """Database description handed over by the request layer."""
    model_config = ConfigDict(frozen=True)

    kind: DatabaseKind
    username: str = ""
    password: SecretStr = SecretStr("")
    host: str = ""
    database_name: str = ""
    file_path: str = ""
    ssl_enabled: bool = False
    # Free text: an unknown mode must reach the builder, not fail validation
    ssl_mode: str = ""
    ssl_root_cert: str = ""
    ssl_cert: str = ""
    ssl_key: str = ""


def resolve_ssl_mode(ssl_enabled: bool, raw_mode: str) -> Optional[SslMode]:
    """
    Decide the sslmode for a PostgreSQL descriptor.

    Returns None for combinations the wizard does not support
    (SSL enabled with an empty, unknown or "disable" mode).
    """
    if not ssl_enabled:
        return SslMode.DISABLE
    if raw_mode in (SslMode.REQUIRE.value, SslMode.VERIFY_CA.value, SslMode.VERIFY_FULL.value):
        return SslMode(raw_mode)
    return None


class ConnectionStringBuilder:
    """Builds driver connection strings for sqlite3, mysql and postgres."""

    def __init__(self, path_exists: PathExists = os.path.isfile):
        """
        Args:
            path_exists: Check used for the optional SSL certificate paths.
                Defaults to a regular-file check against the local filesystem.
        """
        self.path_exists = path_exists
        self._builders: Dict[DatabaseKind, Callable[[DatabaseConfig], str]] = {
            DatabaseKind.SQLITE3: self._build_sqlite3,
            DatabaseKind.MYSQL: self._build_mysql,
            DatabaseKind.POSTGRES: self._build_postgres,
        }

    def build(self, config: DatabaseConfig) -> str:
        """
        Build the connection string for config.

        Returns an empty string when no descriptor can be produced; callers
        treat that as an incomplete configuration.
        """
        builder = self._builders.get(config.kind)
        if builder is None:
            logger.warning("unsupported_database_kind", kind=str(config.kind))
            return ""
        connection = builder(config)
        logger.debug("connection_string_built", kind=config.kind.value, produced=bool(connection))
        return connection

    @staticmethod
    def _build_sqlite3(config: DatabaseConfig) -> str:
        return config.file_path

    @staticmethod
    def _build_mysql(config: DatabaseConfig) -> str:
        # host already uses the driver's native host:port syntax
        return "{}:{}@tcp({})/{}".format(
            config.username,
            config.password.get_secret_value(),
            config.host,
            config.database_name,
        )

    def _build_postgres(self, config: DatabaseConfig) -> str:
        ssl_mode = resolve_ssl_mode(config.ssl_enabled, config.ssl_mode)
        if ssl_mode is None:
            logger.warning("unsupported_ssl_mode", ssl_enabled=config.ssl_enabled, ssl_mode=config.ssl_mode)
            return ""

        host, port = parse_host_port(config.host)
        parts = [
            f"host={host}",
            f"port={port}",
            f"user={config.username}",
            f"password={config.password.get_secret_value()}",
            f"dbname={config.database_name}",
            f"sslmode={ssl_mode.value}",
        ]

        if ssl_mode in (SslMode.VERIFY_CA, SslMode.VERIFY_FULL):
            # Fixed order: rootcert, cert, key
            for key, path in (
                ("sslrootcert", config.ssl_root_cert),
                ("sslcert", config.ssl_cert),
                ("sslkey", config.ssl_key),
            ):
                if not path:
                    continue
                if self.path_exists(path):
                    parts.append(f"{key}={path}")
                else:
                    logger.warning("ssl_file_not_found", option=key, path=path)

        return " ".join(parts)


def build_connection_string(config: DatabaseConfig, path_exists: PathExists = os.path.isfile) -> str:
    """Build a connection string with a one-off builder."""
    return ConnectionStringBuilder(path_exists=path_exists).build(config)
