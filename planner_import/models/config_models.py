from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the CSV user importer.

These are produced by planner_import.config.loader from config/import.yml and
consumed by the orchestrator and the CLI's database connection helper.
"""

DEFAULT_USERS_TABLE = "users"
DEFAULT_MAX_FILE_SIZE_BYTES = 2 * 1024 * 1024  # upload limit of the planner


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None
    port: int | None
    user: str | None
    password: str | None
    database: str | None
    dsn: str | None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for a batch import run."""
    source_directory: str  # Directory to scan for .csv files
    database: DatabaseConfig
    users_table: str = DEFAULT_USERS_TABLE
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
