from __future__ import annotations

from pathlib import Path

from planner_import.cli import main as cli_main

"""Exit code contract: 0 all clean, 2 partial failure, 1 fatal."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_invalid_config(write_config: Path, capsys):
    write_config.write_text("source_directory: ./data\nunknown: 1\n", encoding="utf-8")
    assert cli_main(["--dry-run"]) == 1


def test_exit_code_all_success(write_config, teachers_csv, capsys):
    code = cli_main(["--dry-run"])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0" in out


def test_exit_code_partial_failure_rejected_rows(write_config, teachers_csv, mixed_csv, capsys):
    code = cli_main(["--dry-run"])
    out = capsys.readouterr().out
    # both files import, but mixed.csv has rejected rows
    assert code == 2
    assert "success=2 failed=0" in out
    assert "errors=2" in out


def test_exit_code_partial_failure_failed_file(write_config, teachers_csv, write_csv, capsys):
    write_csv("empty.csv", "")
    code = cli_main(["--dry-run"])
    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=2/2 success=1 failed=1" in out
