from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

"""Batched INSERT helper on top of psycopg2.extras.execute_values.

Statements are assembled from already-validated identifiers (configured table
name, fixed column list); values always travel as bound parameters.
"""

try:  # pragma: no cover - optional until psycopg2 present at runtime
    import psycopg2
    from psycopg2.extras import execute_values
except Exception:  # pragma: no cover
    psycopg2 = None  # type: ignore
    execute_values = None  # type: ignore


class BatchInsertError(Exception):
    pass


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    returned_values: list[tuple[Any, ...]] | None = None


def batch_insert(
    cursor: Any,
    table: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    returning: Sequence[str] | None = None,
    on_conflict: str | None = None,
    page_size: int = 1000,
) -> InsertResult:
    """Perform a batched INSERT using psycopg2.extras.execute_values.

    Parameters
    ----------
    cursor: psycopg2 cursor
    table: target table (validated identifier)
    columns: insert columns
    rows: row value sequences, in column order
    returning: columns for a RETURNING clause; rows actually inserted are then
        counted from the returned tuples
    on_conflict: conflict target column, rendered as
        ``ON CONFLICT ("col") DO NOTHING``
    page_size: execute_values page size
    """
    if execute_values is None:
        raise BatchInsertError("psycopg2 not available")

    rows_list = list(rows)
    if not rows_list:
        return InsertResult(inserted_rows=0, returned_values=[] if returning else None)

    cols_sql = ",".join(f'"{c}"' for c in columns)
    sql = f"INSERT INTO {table} ({cols_sql}) VALUES %s"
    if on_conflict:
        sql += f' ON CONFLICT ("{on_conflict}") DO NOTHING'
    if returning:
        sql += " RETURNING " + ",".join(f'"{c}"' for c in returning)

    try:
        # fetch=True collects RETURNING rows across every page
        returned = execute_values(
            cursor, sql, rows_list, page_size=page_size, fetch=bool(returning)
        )
    except Exception as e:
        raise BatchInsertError(str(e)) from e

    if returning:
        returned_list = [tuple(r) for r in (returned or [])]
        return InsertResult(inserted_rows=len(returned_list), returned_values=returned_list)
    return InsertResult(inserted_rows=len(rows_list), returned_values=None)
