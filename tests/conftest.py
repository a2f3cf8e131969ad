"""Root test configuration: shared fake history, vault builders and logger reset"""

import logging
import os
import shutil
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from vaultpub.config import Settings
from vaultpub.core.logging import LOGGER_NAME


CREATED = datetime(2023, 5, 1, 10, 0, 0, tzinfo=timezone(timedelta(hours=2)))
MODIFIED = datetime(2024, 2, 3, 8, 30, 15, tzinfo=timezone.utc)


class FakeHistory:
    """In-memory stand-in for GitHistory with fixed times and a call log."""

    def __init__(self, created=CREATED, modified=MODIFIED):
        self.created_at = created
        self.modified_at = modified
        self.calls = []

    def created(self, path):
        self.calls.append(("created", Path(path).name))
        return self.created_at

    def last_modified(self, path):
        self.calls.append(("last_modified", Path(path).name))
        return self.modified_at


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI runs so they never write to a closed stream."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(name="history")
def history_fixture():
    return FakeHistory()


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="vault")
def vault_fixture(tmp_path):
    """Return a writer that creates files (text or bytes) under tmp_path/vault."""
    root = tmp_path / "vault"
    root.mkdir()

    def write(rel: str, content="") -> Path:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    write.root = root
    return write


def _git(cwd: Path, *args: str, date: str = "2023-05-01T10:00:00+02:00") -> str:
    """Run git in cwd with a fixed identity and commit date."""
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Test", "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test", "GIT_COMMITTER_EMAIL": "test@example.com",
        "GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date,
        "GIT_CONFIG_NOSYSTEM": "1", "HOME": str(cwd),
    }
    proc = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd, env=env, capture_output=True, text=True, check=True,
    )
    return proc.stdout


@pytest.fixture(name="git")
def git_fixture():
    """The git runner; skips the test when git is not installed."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    return _git


@pytest.fixture(name="git_vault")
def git_vault_fixture(vault, git):
    """A vault that is also an initialized git repository."""
    git(vault.root, "init", "-q")
    return vault


@pytest.fixture(name="make_history")
def make_history_fixture():
    """Factory for FakeHistory with custom times."""
    return FakeHistory
