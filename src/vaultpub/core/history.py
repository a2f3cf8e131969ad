"""Git-backed creation and modification times for vault files"""

import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional

from vaultpub.core.errors import HistoryError
from vaultpub.core.logging import get_logger
from vaultpub.core.utils.timestamps import parse_git_time


logger = get_logger(__name__)


class GitHistory:
    """Query `git log` for a file's first-added and last-changed commit times.

    A file without history (untracked, or never committed) yields None.
    Anything else that goes wrong raises HistoryError.
    """

    def __init__(self, root: Path, staged_as_modified: bool = False, git: str = "git"):
        self.root = Path(root)
        self.staged_as_modified = staged_as_modified
        self.git = git

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.git, *args], cwd=self.root, capture_output=True, text=True, check=False,
            )
        except OSError as e:
            raise HistoryError(f"Could not run {self.git}: {e}") from e

    def _log(self, path: Path, *args: str) -> Optional[datetime]:
        proc = self._run(["log", *args, "--", str(path)])
        if proc.returncode != 0:
            raise HistoryError(f"git log failed for {path}: {proc.stderr.strip()}")
        out = proc.stdout.strip()
        if not out:
            return None
        try:
            return parse_git_time(out.splitlines()[0])
        except ValueError as e:
            raise HistoryError(f"Unexpected git log output for {path}: {out!r}") from e

    def has_staged_changes(self, path: Path) -> bool:
        proc = self._run(["diff", "--staged", "--quiet", "--", str(path)])
        if proc.returncode not in (0, 1):
            raise HistoryError(f"git diff failed for {path}: {proc.stderr.strip()}")
        return proc.returncode == 1

    def last_modified(self, path: Path) -> Optional[datetime]:
        """Time of the most recent commit touching path.

        With staged_as_modified, a file with staged changes counts as modified now.
        """
        if self.staged_as_modified and self.has_staged_changes(path):
            logger.debug("Staged changes, using current time: %s", path)
            return datetime.now().astimezone().replace(microsecond=0)
        return self._log(path, "-1", "--pretty=format:%ci")

    def created(self, path: Path) -> Optional[datetime]:
        """Time of the commit that first added path, following renames."""
        return self._log(path, "--diff-filter=A", "--follow", "--format=%ci", "-1")
