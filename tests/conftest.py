# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from planner_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    # never reach a real database or a developer's .env from the tests
    for var in ("DATABASE_URL", "PGDSN", "DISABLE_DB_CONNECT"):
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
users_table: users
max_file_size_bytes: 2097152
database:
  host: localhost
  port: 5432
  user: planner
  password: secret
  database: planner
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_csv(temp_workdir: Path) -> Callable[[str, str], Path]:
    def _write(name: str, content: str) -> Path:
        p = temp_workdir / "data" / name
        p.write_bytes(content.encode("utf-8"))
        return p
    return _write


@pytest.fixture()
def teachers_csv(write_csv) -> Path:
    return write_csv(
        "teachers.csv",
        "Username,Password,Full Name,Email,Role\n"
        "ama_mensah,secret123,Ama Mensah,ama@school.example,teacher\n"
        "kofi_owusu,secret456,,kofi@school.example,ADMIN\n",
    )


@pytest.fixture()
def mixed_csv(write_csv) -> Path:
    return write_csv(
        "mixed.csv",
        "user,pwd,mail,role\n"
        "esi_boateng,secret789,esi@school.example,teacher\n"
        "ab,secret789,,\n"
        "kwame_asante,123,kwame@school.example,teacher\n"
        "yaw_osei,secret000,not-an-email,principal\n",
    )
