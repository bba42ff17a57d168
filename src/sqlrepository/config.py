# SPDX-FileCopyrightText: 2025 FanaticPythoner
# SPDX-License-Identifier: Apache-2.0

"""
Connection and pool configuration models.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import ConfigConstants


class ConnectionConfig(BaseModel):
    """Settings for a single physical database connection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    driver: str = ConfigConstants.DEFAULT_DRIVER
    database: str
    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=ConfigConstants.MIN_PORT, le=ConfigConstants.MAX_PORT)
    user: Optional[str] = None
    password: Optional[str] = Field(default=None, repr=False)
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("driver")
    @classmethod
    def normalize_driver(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("driver must not be empty")
        return value


class PoolConfig(BaseModel):
    """One writer plus zero or more readers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    writer: ConnectionConfig
    readers: List[ConnectionConfig] = Field(default_factory=list)

    @classmethod
    def from_env(
        cls,
        prefix: str = ConfigConstants.ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> PoolConfig:
        """
        Build a pool configuration from environment variables.

        Reads ``<prefix>DRIVER``, ``DATABASE``, ``HOST``, ``PORT``, ``USER`` and
        ``PASSWORD`` for the writer. ``<prefix>READER_DATABASES`` is an optional
        comma separated list; each entry becomes a reader sharing the writer's
        other settings.

        Args:
            prefix: Variable name prefix
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Validated PoolConfig

        Raises:
            pydantic.ValidationError: If required values are missing or invalid
        """
        env = os.environ if environ is None else environ

        def _get(key: str) -> Optional[str]:
            value = env.get(f"{prefix}{key}")
            return value if value else None

        writer_fields: Dict[str, Any] = {
            "driver": _get(ConfigConstants.ENV_DRIVER) or ConfigConstants.DEFAULT_DRIVER,
            "database": _get(ConfigConstants.ENV_DATABASE),
            "host": _get(ConfigConstants.ENV_HOST),
            "port": _get(ConfigConstants.ENV_PORT),
            "user": _get(ConfigConstants.ENV_USER),
            "password": _get(ConfigConstants.ENV_PASSWORD),
        }
        writer = ConnectionConfig(**writer_fields)

        readers: List[ConnectionConfig] = []
        reader_databases = _get(ConfigConstants.ENV_READER_DATABASES)
        if reader_databases:
            for database in reader_databases.split(ConfigConstants.LIST_SEPARATOR):
                database = database.strip()
                if database:
                    readers.append(writer.model_copy(update={"database": database}))

        return cls(writer=writer, readers=readers)
