"""Alembic migration tests.

File named test_zzz_alembic.py to sort LAST in pytest collection order.
Migrations run against a fresh SQLite file so they never touch the test database.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="module")
def alembic_env(tmp_path_factory: pytest.TempPathFactory) -> dict[str, str]:
    db_file = tmp_path_factory.mktemp("alembic") / "migrations.db"
    return {**os.environ, "TASKFLOW_DATABASE_URL": f"sqlite+aiosqlite:///{db_file}"}


def _alembic(env: dict[str, str], *args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "alembic", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        env=env,
        check=False,
    )


def test_alembic_upgrade_head(alembic_env: dict[str, str]) -> None:
    """alembic upgrade head succeeds without errors."""
    result = _alembic(alembic_env, "upgrade", "head")
    assert result.returncode == 0, f"alembic upgrade failed: {result.stderr}"


def test_alembic_current_shows_head(alembic_env: dict[str, str]) -> None:
    """alembic current shows the latest revision."""
    result = _alembic(alembic_env, "current")
    assert result.returncode == 0
    assert "001_initial_schema" in result.stdout


def test_alembic_downgrade_base(alembic_env: dict[str, str]) -> None:
    result = _alembic(alembic_env, "downgrade", "base")
    assert result.returncode == 0, f"alembic downgrade failed: {result.stderr}"
