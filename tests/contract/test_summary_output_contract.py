from __future__ import annotations

import re

from planner_import.cli import main as cli_main

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+accepted=([0-9]+)\s+created=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"errors=([0-9]+)\s+warnings=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)\s+throughput_rps=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=2/2 success=2 failed=0 rows=6 accepted=4 created=4 skipped=0 "
        "errors=2 warnings=4 elapsed_sec=0.084 throughput_rps=71.4"
    )
    assert SUMMARY_PATTERN.match(line)


def test_cli_summary_is_last_line_and_matches(write_config, teachers_csv, mixed_csv, capsys):
    cli_main(["--dry-run"])
    lines = capsys.readouterr().out.strip().splitlines()
    m = SUMMARY_PATTERN.match(lines[-1])
    assert m, lines[-1]
    assert m.group(1) == "2"
    assert m.group(5) == "6"  # rows
    assert m.group(6) == "4"  # accepted
    assert m.group(7) == "4"  # created
    assert m.group(9) == "2"  # errors
    assert m.group(10) == "4"  # warnings


def test_summary_line_printed_once(write_config, teachers_csv, capsys):
    cli_main(["--dry-run"])
    out = capsys.readouterr().out
    assert out.count("SUMMARY ") == 1
    assert "SUMMARY SUMMARY" not in out
