"""Vault traversal: classify files as documents, templates or assets"""

import os
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator

from vaultpub.config import Settings
from vaultpub.core.models import Entry, EntryKind


def _raise(err: OSError) -> None:
    raise err


def _under(rel_path: PurePosixPath, prefix: str) -> bool:
    """True when rel_path starts with every component of prefix."""
    parts = PurePosixPath(prefix).parts
    return bool(parts) and rel_path.parts[:len(parts)] == parts


def iter_files(root: Path, ignore_dirs: Iterable[str] = (), exclude: Iterable[Path] = ()) -> Iterator[tuple[Path, PurePosixPath]]:
    """Yield (absolute, relative) for every file under root in lexical order.

    Directories named in ignore_dirs and the directories in exclude are pruned.
    Traversal errors are raised, not skipped.
    """
    ignored = set(ignore_dirs)
    excluded = {Path(p).resolve() for p in exclude}
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in ignored and (current / d).resolve() not in excluded
        )
        for name in sorted(filenames):
            path = current / name
            yield path, PurePosixPath(path.relative_to(root).as_posix())


def classify(rel_path: PurePosixPath, settings: Settings) -> EntryKind | None:
    """Return the entry kind for a relative path, or None when it should be ignored."""
    if _under(rel_path, settings.assets_prefix):
        return EntryKind.asset
    if rel_path.suffix not in settings.extensions:
        return None
    if _under(rel_path, settings.templates_prefix):
        return EntryKind.template
    return EntryKind.document


def walk(root: Path, settings: Settings, exclude: Iterable[Path] = ()) -> Iterator[Entry]:
    """Lazily yield the vault entries the pipeline acts on."""
    for path, rel_path in iter_files(root, settings.ignore_dirs, exclude):
        kind = classify(rel_path, settings)
        if kind is not None:
            yield Entry(path=path, rel_path=rel_path, kind=kind)
