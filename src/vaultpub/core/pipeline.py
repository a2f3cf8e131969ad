"""Pipeline runs: walk -> transform -> confirm -> write, and the git mtime fix"""

import os
from pathlib import Path

from vaultpub.config import Settings
from vaultpub.core.confirm import ConfirmationGate
from vaultpub.core.history import GitHistory
from vaultpub.core.logging import get_logger
from vaultpub.core.models import Entry, EntryKind, Mode
from vaultpub.core.parse import read_document
from vaultpub.core.transform import PROMPTS, transform
from vaultpub.core.walk import iter_files, walk
from vaultpub.core.write import copy_asset, finalize_write


logger = get_logger(__name__)


def _excluded_targets(root: Path, target: Path) -> list[Path]:
    """The output root is pruned from the walk when it lives inside the vault."""
    if target != root and target.is_relative_to(root):
        return [target]
    return []


def _process(
    entry: Entry,
    root: Path,
    target: Path,
    mode: Mode,
    gate: ConfirmationGate,
    history: GitHistory,
    settings: Settings,
    ) -> str:
    """Handle one walker entry and return its status key."""
    if entry.kind is EntryKind.template:
        logger.debug("Skipping processing file: %s", entry.rel_path)
        return "skipped"
    if entry.kind is EntryKind.asset:
        if copy_asset(entry.path, target / entry.rel_path):
            logger.info("Copying file: %s", entry.rel_path)
            return "copied"
        return "unchanged"

    logger.debug("Processing file: %s", entry.rel_path)
    document = read_document(entry.path, root)
    result = transform(document, mode, history, settings)
    if not result.should_write:
        return "skipped"
    if not gate.confirm(PROMPTS[mode].format(entry.rel_path)):
        return "declined"
    return finalize_write(document, result.header, result.always, target)


def run_pipeline(
    root: Path,
    target: Path,
    mode: Mode,
    gate: ConfirmationGate,
    history: GitHistory,
    settings: Settings,
    ) -> dict[str, int]:
    """Process every vault entry sequentially.

    Returns status counts. Any failure aborts the run with the offending path
    in the message; files written before it stay written.
    """
    root, target = root.resolve(), target.resolve()
    counts = {"written": 0, "original": 0, "unchanged": 0, "skipped": 0, "declined": 0, "copied": 0}
    for entry in walk(root, settings, exclude=_excluded_targets(root, target)):
        try:
            status = _process(entry, root, target, mode, gate, history, settings)
        except Exception as e:
            raise RuntimeError(f"Failed to process {entry.rel_path}: {e}") from e
        counts[status] += 1
    return counts


def run_chtime_fix(root: Path, history: GitHistory, settings: Settings) -> int:
    """Set each tracked file's mtime to its last commit time. Returns the number changed."""
    root = root.resolve()
    changed = 0
    for path, rel_path in iter_files(root, settings.ignore_dirs):
        try:
            git_time = history.last_modified(path)
            if git_time is None:
                continue
            ts = git_time.timestamp()
            if ts != path.stat().st_mtime:
                logger.info("Changing chtime: %s", path.name)
                os.utime(path, (ts, ts))
                changed += 1
        except Exception as e:
            raise RuntimeError(f"Failed to fix chtime of {rel_path}: {e}") from e
    return changed
