"""Output writing: compare-and-write for documents, verbatim copies for assets"""

import os
import shutil
import stat
import tempfile
from pathlib import Path

from vaultpub.core.logging import get_logger
from vaultpub.core.models import Document, Header
from vaultpub.core.parse import serialize


logger = get_logger(__name__)

DIR_MODE = 0o775


def write_file(dest: Path, data: bytes, mode: int) -> None:
    """Atomically replace dest with data, applying the permission bits of mode."""
    dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=dest.parent, prefix=f".{dest.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, stat.S_IMODE(mode))
        os.replace(tmp, dest)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def copy_asset(src: Path, dest: Path) -> bool:
    """Copy src to dest byte-for-byte with its mode bits. Returns False if they are the same file."""
    if dest.exists() and os.path.samefile(src, dest):
        return False
    dest.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    shutil.copy(src, dest)
    return True


def finalize_write(document: Document, header: Header, always: bool, target_root: Path) -> str:
    """Serialize header + body and write it under target_root when it differs from the original.

    With always=True an unchanged document is still written, using its original bytes.
    Returns 'written', 'original' or 'unchanged'.
    """
    new = serialize(header.to_header(), document.body)
    dest = target_root / document.rel_path

    if new != document.raw:
        logger.info("Writing changed file: %s", document.rel_path)
        write_file(dest, new, document.mode)
        return "written"
    if always:
        logger.info("Writing file with original content: %s", document.rel_path)
        write_file(dest, document.raw, document.mode)
        return "original"
    logger.debug("Skipping writing file: %s", document.rel_path)
    return "unchanged"
