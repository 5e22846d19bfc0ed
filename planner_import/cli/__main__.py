from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg2
from psycopg2.extensions import make_dsn
from dotenv import load_dotenv

from planner_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from planner_import.csvdata.reader import CsvImportError
from planner_import.importer.pipeline import parse_users_csv
from planner_import.logging.init import log_summary, set_debug, setup_logging
from planner_import.models.config_models import DEFAULT_MAX_FILE_SIZE_BYTES, ImportConfig
from planner_import.services.orchestrator import (
    FileRejectedError,
    ProcessingError,
    check_upload,
    process_all,
)
from planner_import.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Import every .csv file of source_directory (one transaction per file)
- Print the SUMMARY line and exit with the contract exit code

--inspect FILE applies the upload rules to a single CSV, parses it and prints
its report without touching the database.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _resolve_dsn(cfg: ImportConfig) -> str:
    """Build the connection DSN.

    Priority: DATABASE_URL / PGDSN, then the config's dsn, then PG* variables
    over the config's database section, then local defaults.
    """
    db = cfg.database
    explicit = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db.dsn
    if explicit:
        return explicit
    return make_dsn(
        host=os.getenv("PGHOST", db.host or "localhost"),
        port=os.getenv("PGPORT", str(db.port or 5432)),
        user=os.getenv("PGUSER", db.user or "postgres"),
        dbname=os.getenv("PGDATABASE", db.database or "postgres"),
        password=os.getenv("PGPASSWORD", db.password or "") or None,
    )


@contextmanager
def _db_connection(cfg: ImportConfig) -> Iterator[Any]:  # pragma: no cover (thin wrapper)
    """Provide a psycopg2 cursor; the orchestrator issues BEGIN/COMMIT itself."""
    conn = psycopg2.connect(_resolve_dsn(cfg))
    try:
        conn.autocommit = True
        with conn.cursor() as cur:
            yield cur
    finally:
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that its connection settings win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Weekly planner CSV user importer")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Validate and count without writing to the database")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to the YAML config")
    p.add_argument("--inspect", type=Path, metavar="FILE", help="Print the import report of one CSV file then exit")
    return p.parse_args(argv)


def _inspect_file(path: Path) -> int:
    if not path.exists():
        print(f"inspect: file not found: {path}")
        return EXIT_FATAL
    try:
        check_upload(path, path.stat().st_size, DEFAULT_MAX_FILE_SIZE_BYTES)
        report = parse_users_csv(path.read_bytes())
    except (FileRejectedError, CsvImportError) as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"FILE: {path.name} rows={report.rows_processed} accepted={report.rows_accepted}")
    for record in report.accepted:
        role = "admin" if record.is_admin else "teacher"
        print(f"  USER: {record.username} name={record.full_name!r} email={record.email!r} role={role}")
    for message in report.errors:
        print(f"  ERROR: {message}")
    for message in report.warnings:
        print(f"  WARN: {message}")
    return EXIT_SUCCESS_ALL if not report.errors else EXIT_PARTIAL_FAILURE


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read the process arguments when none were given (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.inspect is not None:
        return _inspect_file(args.inspect)

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Importing users from: {directory}")

    disable_db = args.dry_run or os.getenv("DISABLE_DB_CONNECT") == "1"
    db_mode = "mock"
    try:
        if disable_db:
            logger.debug("database disabled -> mock mode")
            result = process_all(cfg, cursor=None)
        else:
            try:
                with _db_connection(cfg) as cur:
                    db_mode = "live"
                    result = process_all(cfg, cursor=cur)
            except psycopg2.Error as db_e:
                logger.info(f"DB connection failed -> fallback to mock mode: {db_e}")
                db_mode = "mock"
                result = process_all(cfg, cursor=None)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    logger.info(f"mode={db_mode} users_created={result.users_created}")
    if result.error_log_path:
        logger.info(f"error log: {result.error_log_path}")

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0 or result.row_errors > 0 or result.users_skipped > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
