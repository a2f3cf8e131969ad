"""Unit tests for core/write.py"""

import stat
from datetime import datetime

from vaultpub.core.models import MatterIn
from vaultpub.core.parse import read_document
from vaultpub.core.write import copy_asset, finalize_write, write_file


CANONICAL = "---\ntags:\n- a\n---\nBody\n"


def test_write_file_creates_parents_and_mode(tmp_path):
    dest = tmp_path / "a" / "b" / "c.md"
    write_file(dest, b"data", 0o100600)
    assert dest.read_bytes() == b"data"
    assert stat.S_IMODE(dest.stat().st_mode) == 0o600


def test_write_file_leaves_no_temp_files(tmp_path):
    dest = tmp_path / "c.md"
    write_file(dest, b"one", 0o100644)
    write_file(dest, b"two", 0o100644)
    assert [p.name for p in tmp_path.iterdir()] == ["c.md"]
    assert dest.read_bytes() == b"two"


def test_copy_asset(vault, tmp_path):
    src = vault("assets/img.png", b"\x89PNG\r\n")
    src.chmod(0o600)
    dest = tmp_path / "out" / "assets" / "img.png"
    assert copy_asset(src, dest) is True
    assert dest.read_bytes() == b"\x89PNG\r\n"
    assert stat.S_IMODE(dest.stat().st_mode) == 0o600


def test_copy_asset_onto_itself_is_noop(vault):
    src = vault("assets/img.png", b"bytes")
    assert copy_asset(src, src) is False
    assert src.read_bytes() == b"bytes"


def test_finalize_write_unchanged_does_not_write(vault, tmp_path):
    """Identical output without the unconditional flag writes nothing."""
    doc = read_document(vault("n.md", CANONICAL), vault.root)
    target = tmp_path / "out"
    assert finalize_write(doc, doc.header, False, target) == "unchanged"
    assert not target.exists()


def test_finalize_write_unchanged_in_place_keeps_file(vault):
    path = vault("n.md", CANONICAL)
    before = path.stat().st_mtime_ns
    doc = read_document(path, vault.root)
    assert finalize_write(doc, doc.header, False, vault.root) == "unchanged"
    assert path.stat().st_mtime_ns == before


def test_finalize_write_changed(vault, tmp_path):
    path = vault("dir/n.md", "---\ntags: [a]\n---\n\n\nBody")
    path.chmod(0o640)
    doc = read_document(path, vault.root)
    target = tmp_path / "out"
    assert finalize_write(doc, doc.header, False, target) == "written"
    dest = target / "dir" / "n.md"
    assert dest.read_text() == CANONICAL
    assert stat.S_IMODE(dest.stat().st_mode) == 0o640


def test_finalize_write_always_writes_original_bytes(vault, tmp_path):
    """Unchanged content is still written when the write is unconditional."""
    doc = read_document(vault("n.md", CANONICAL), vault.root)
    target = tmp_path / "out"
    assert finalize_write(doc, doc.header, True, target) == "original"
    assert (target / "n.md").read_bytes() == CANONICAL.encode()


def test_finalize_write_in_place(vault):
    path = vault("n.md", "---\ntags: [wip]\n---\nBody\n")
    doc = read_document(path, vault.root)
    header = MatterIn(tags=["draft"], created=datetime(2023, 5, 1, 10, 0, 0))
    assert finalize_write(doc, header, False, vault.root) == "written"
    assert path.read_text() == "---\ncreated: Monday, 1 May 2023 10:00:00\ntags:\n- draft\n---\nBody\n"


def test_finalize_write_preserves_body(vault, tmp_path):
    body = "# Title\n\n  indented line\n\n| a | b |\n|---|---|\n\n---\n\nAfter rule  \n"
    doc = read_document(vault("n.md", "---\ntags: [a]\n---\n" + body), vault.root)
    finalize_write(doc, doc.header, True, tmp_path)
    out = (tmp_path / "n.md").read_text()
    assert out.endswith(body.strip() + "\n")
