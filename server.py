"""
Database Setup MCP
Exposes the setup wizard's connection string builder as MCP tools.
"""
import sys
from typing import Dict, Any, Optional

import structlog
from mcp.server.fastmcp import FastMCP  # type: ignore[import-untyped]
from config.configuration import get_config
from config.settings import Settings
from services.common.exceptions import SetupError
from services.common.logging import configure_logging
from services.infrastructure import host_port
from services.infrastructure.install_request import (
    CheckDatabaseRequest,
    CheckDatabaseResponse,
    parse_check_database_request,
)

# Load Config
try:
    config = get_config()
except Exception as e:
    print(f"FATAL: Config load failed: {e}", file=sys.stderr)
    sys.exit(1)

configure_logging(log_level=config.server.log_level, json_format=config.logging.json_format)
logger = structlog.get_logger()

mcp = FastMCP("db-setup-mcp")


def _result(connection: str, db_type: Optional[str]) -> Dict[str, Any]:
    return {
        "success": bool(connection),
        "connection_string": connection,
        "db_type": db_type,
        **CheckDatabaseResponse(connection_success=bool(connection)).model_dump(),
    }


def _error_result(
    message: str,
    details: Optional[Dict[str, Any]] = None,
    db_type: Optional[str] = None,
) -> Dict[str, Any]:
    return {**_result("", db_type), "error": message, "details": details or {}}


def _build(request: CheckDatabaseRequest) -> Dict[str, Any]:
    if not config.setup.is_db_type_allowed(request.db_type):
        logger.warning("db_type_not_allowed", db_type=request.db_type)
        return _error_result(f"Database type '{request.db_type}' is not enabled for setup", db_type=request.db_type)

    connection = request.get_connection()
    if not connection:
        return _error_result("Database configuration is incomplete", db_type=request.db_type)
    logger.info("connection_string_ready", db_type=request.db_type)
    return _result(connection, request.db_type)


@mcp.tool()
def build_connection_string(
    db_type: str,
    db_username: str = "",
    db_password: str = "",
    db_host: str = "",
    db_name: str = "",
    db_file: str = "",
    ssl_enabled: bool = False,
    ssl_mode: str = "",
    ssl_root_cert: str = "",
    ssl_cert: str = "",
    ssl_key: str = "",
) -> Dict[str, Any]:
    """
    Build the driver connection string for a database described in the setup wizard.

    Args:
        db_type: One of postgres, sqlite3, mysql.
        db_host: host or host:port (postgres defaults to 127.0.0.1:5432).
        db_file: Database file path (sqlite3 only).
        ssl_enabled: Enable SSL (postgres only).
        ssl_mode: require, verify-ca or verify-full.
        ssl_root_cert, ssl_cert, ssl_key: Certificate paths; only included when the file exists.

    Returns success=False when no connection string can be produced.
    """
    try:
        request = parse_check_database_request({
            "db_type": db_type,
            "db_username": db_username,
            "db_password": db_password,
            "db_host": db_host,
            "db_name": db_name,
            "db_file": db_file,
            "ssl_enabled": ssl_enabled,
            "ssl_mode": ssl_mode,
            "ssl_root_cert": ssl_root_cert,
            "ssl_cert": ssl_cert,
            "ssl_key": ssl_key,
        })
    except SetupError as e:
        logger.warning("setup_request_rejected", error=str(e))
        return _error_result(str(e), e.details, db_type=db_type)
    return _build(request)


@mcp.tool()
def parse_host_port(raw: str) -> Dict[str, str]:
    """Split a "host[:port]" string the way postgres connection strings do."""
    host, port = host_port.parse_host_port(raw)
    return {"host": host, "port": port}


@mcp.tool()
def env_connection_string() -> Dict[str, Any]:
    """Build the connection string described by the DB_* environment variables."""
    try:
        request = Settings.load().database_request()
    except SetupError as e:
        logger.warning("env_settings_rejected", error=str(e))
        return _error_result(str(e), e.details)
    if request is None:
        return _error_result("DB_TYPE is not set")
    return _build(request)


@mcp.tool()
def config_info() -> Dict[str, Any]:
    """Return public configuration settings."""
    return {
        "transport": config.server.transport,
        "allowed_db_types": [kind.value for kind in config.setup.allowed_db_types],
    }


if __name__ == "__main__":
    import os
    server_host = os.getenv("HOST", config.server.host)
    server_port = int(os.getenv("PORT", str(config.server.port)))

    print(f"Starting Database Setup MCP ({config.server.transport}) on {server_host}:{server_port}", file=sys.stderr)
    if config.server.transport == "sse":
        mcp.settings.host = server_host
        mcp.settings.port = server_port
    mcp.run(transport=config.server.transport)
