"""
Unit tests for the MCP tool functions.
"""
import os
import pytest
from unittest.mock import patch
from pydantic_settings import SettingsConfigDict
from config.configuration import SetupServiceConfig
from config.settings import Settings

import server


class IsolatedSettings(Settings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore", case_sensitive=False)


@pytest.fixture
def postgres_only():
    config = SetupServiceConfig(setup={"allowed_db_types": ["postgres"]})
    with patch.object(server, "config", config):
        yield config


def test_build_postgres():
    result = server.build_connection_string(
        db_type="postgres", db_username="u", db_password="p", db_host="pg", db_name="d"
    )
    assert result == {
        "success": True,
        "connection_string": "host=pg port=5432 user=u password=p dbname=d sslmode=disable",
        "db_type": "postgres",
        "connection_success": True,
    }


def test_build_sqlite3():
    result = server.build_connection_string(db_type="sqlite3", db_file="/data/answer.db")
    assert result["success"] is True
    assert result["connection_string"] == "/data/answer.db"


def test_incomplete_ssl_configuration():
    result = server.build_connection_string(db_type="postgres", ssl_enabled=True, ssl_mode="prefer")
    assert result["success"] is False
    assert result["connection_string"] == ""
    assert result["error"] == "Database configuration is incomplete"
    assert result["db_type"] == "postgres"
    assert result["connection_success"] is False


def test_invalid_db_type():
    result = server.build_connection_string(db_type="oracle")
    assert result["success"] is False
    assert result["db_type"] == "oracle"
    assert result["details"]["errors"]


def test_db_type_not_allowed(postgres_only):
    result = server.build_connection_string(db_type="mysql", db_host="h:3306")
    assert result["success"] is False
    assert "not enabled" in result["error"]
    assert result["db_type"] == "mysql"


def test_parse_host_port_tool():
    assert server.parse_host_port("db.example.com:5433") == {"host": "db.example.com", "port": "5433"}


def test_env_connection_string():
    env = {"DB_TYPE": "mysql", "DB_USERNAME": "root", "DB_PASSWORD": "pw", "DB_HOST": "mysql:3306", "DB_NAME": "answer"}
    with patch.dict(os.environ, env, clear=True), patch.object(server, "Settings", IsolatedSettings):
        result = server.env_connection_string()
    assert result["success"] is True
    assert result["connection_string"] == "root:pw@tcp(mysql:3306)/answer"


def test_env_connection_string_without_db_type():
    with patch.dict(os.environ, {}, clear=True), patch.object(server, "Settings", IsolatedSettings):
        result = server.env_connection_string()
    assert result["success"] is False
    assert result["error"] == "DB_TYPE is not set"


def test_config_info(postgres_only):
    assert server.config_info() == {"transport": "stdio", "allowed_db_types": ["postgres"]}


def test_env_connection_string_with_invalid_value():
    env = {"DB_TYPE": "postgres", "DB_SSL_ENABLED": "maybe"}
    with patch.dict(os.environ, env, clear=True), patch.object(server, "Settings", IsolatedSettings):
        result = server.env_connection_string()
    assert result["success"] is False
    assert result["connection_success"] is False
    assert result["connection_string"] == ""
    assert any(error["loc"] == ("DB_SSL_ENABLED",) for error in result["details"]["errors"])


def test_result_shape_is_consistent():
    ok = server.build_connection_string(db_type="sqlite3", db_file="answer.db")
    failed = server.build_connection_string(db_type="postgres", ssl_enabled=True, ssl_mode="")
    rejected = server.build_connection_string(db_type="oracle")
    common = {"success", "connection_string", "db_type", "connection_success"}
    assert common <= set(ok)
    assert common | {"error", "details"} <= set(failed)
    assert common | {"error", "details"} <= set(rejected)
