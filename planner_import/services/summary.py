from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for batch import runs."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for tiny values
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY files={total}/{total} success={s} failed={f} rows={p} accepted={a}
    created={c} skipped={k} errors={e} warnings={w} elapsed_sec={t}
    throughput_rps={r}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 9, 2, 8, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 9, 2, 8, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, rows_processed=10, rows_accepted=9,
        ...     users_created=8, users_skipped=1, row_errors=1, row_warnings=2,
        ...     start_time=start, end_time=end, elapsed_seconds=2.0,
        ...     throughput_rows_per_sec=5.0,
        ... )
        >>> render_summary_line(1, result)  # doctest: +ELLIPSIS
        'SUMMARY files=1/1 success=1 failed=0 rows=10 accepted=9 created=8 skipped=1 ...'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.rows_processed} "
        f"accepted={result.rows_accepted} "
        f"created={result.users_created} "
        f"skipped={result.users_skipped} "
        f"errors={result.row_errors} "
        f"warnings={result.row_warnings} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
