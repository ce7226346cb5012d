"""
Request and response shapes of the wizard's "check database" step.
"""
import os
from typing import Any, Dict, Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from services.common.exceptions import ValidationError
from services.infrastructure.connection_string_builder import (
    ConnectionStringBuilder,
    DatabaseConfig,
    DatabaseKind,
    PathExists,
)


class CheckDatabaseRequest(BaseModel):
    """Database description as submitted by the setup wizard."""
    model_config = ConfigDict(extra="ignore")

    db_type: Literal["postgres", "sqlite3", "mysql"]
    db_username: str = ""
    db_password: SecretStr = SecretStr("")
    db_host: str = ""
    db_name: str = ""
    db_file: str = ""
    ssl_enabled: bool = False
    ssl_mode: str = ""
    ssl_root_cert: str = ""
    ssl_key: str = ""
    ssl_cert: str = ""

    def to_database_config(self) -> DatabaseConfig:
        return DatabaseConfig(
            kind=DatabaseKind(self.db_type),
            username=self.db_username,
            password=self.db_password,
            host=self.db_host,
            database_name=self.db_name,
            file_path=self.db_file,
            ssl_enabled=self.ssl_enabled,
            ssl_mode=self.ssl_mode,
            ssl_root_cert=self.ssl_root_cert,
            ssl_cert=self.ssl_cert,
            ssl_key=self.ssl_key,
        )

    def get_connection(self, path_exists: PathExists = os.path.isfile) -> str:
        """Connection string for this request, empty when it cannot be built."""
        return ConnectionStringBuilder(path_exists=path_exists).build(self.to_database_config())


class CheckDatabaseResponse(BaseModel):
    connection_success: bool = Field(False, description="Whether a connection string was produced")


def parse_check_database_request(payload: Dict[str, Any]) -> CheckDatabaseRequest:
    """
    Validate a raw wizard payload.

    Raises:
        ValidationError: if db_type is missing or unsupported, or a field has the wrong type
    """
    try:
        return CheckDatabaseRequest.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid database setup request",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e
