"""Front matter codec: split, parse and serialize `---` delimited YAML headers"""

import os
import re
from datetime import datetime
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from vaultpub.core.errors import FrontMatterError
from vaultpub.core.models import Document, MatterIn


FRONTMATTER_RE = re.compile(r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)', re.DOTALL | re.MULTILINE)
DELIMITER = "---\n"
TEXT_LIST_FIELDS = ("tags", "aliases")
NULL_TAG = "tag:yaml.org,2002:null"


class HeaderDumper(yaml.SafeDumper):
    """SafeDumper that writes datetimes as ISO 8601 with a 'T' separator and their UTC offset."""


def _represent_datetime(dumper: yaml.SafeDumper, value: datetime) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:timestamp", value.isoformat())


HeaderDumper.add_representer(datetime, _represent_datetime)


def split_front_matter(text: str) -> tuple[str, str]:
    """Return (header_text, body). Text without a header yields ("", text)."""
    if not text.startswith("---"):
        return "", text
    m = FRONTMATTER_RE.match(text)
    if not m:
        first = text.split("\n", 1)[0].rstrip("\r")
        if first.rstrip(" \t") == "---":
            raise FrontMatterError("Unterminated front matter: missing closing '---'")
        return "", text
    return m.group(1), text[m.end():]


def _scalar_text_lists(header_text: str) -> dict[str, list[str]]:
    """Return tags/aliases as their source text, so `on`, `No` or `010` are not resolved to bool/int.

    Plain null items are dropped. Lists holding anything but scalars are left to validation.
    """
    root = yaml.compose(header_text, Loader=yaml.SafeLoader)
    lists: dict[str, list[str]] = {}
    for key, value in root.value:
        if key.value not in TEXT_LIST_FIELDS or not isinstance(value, yaml.SequenceNode):
            continue
        if not all(isinstance(item, yaml.ScalarNode) for item in value.value):
            continue
        lists[key.value] = [item.value for item in value.value if item.tag != NULL_TAG]
    return lists


def parse_header(header_text: str) -> MatterIn:
    """Load header YAML into the input dialect."""
    try:
        data = yaml.safe_load(header_text) if header_text.strip() else {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid YAML frontmatter: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"Invalid YAML frontmatter: expected a mapping, got {type(data).__name__}")
    data.update(_scalar_text_lists(header_text))
    try:
        return MatterIn.model_validate(data)
    except ValidationError as e:
        raise FrontMatterError(f"Invalid frontmatter fields: {e}") from e


def dump_header(header: dict[str, Any]) -> str:
    """Encode header as block-style YAML, keeping insertion order."""
    return yaml.dump(
        header,
        Dumper=HeaderDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )


def serialize(header: dict[str, Any], body: str) -> bytes:
    """Render delimiter, header, delimiter, then the trimmed body with one trailing newline."""
    text = DELIMITER + dump_header(header) + DELIMITER + body.strip() + "\n"
    return text.encode("utf-8")


def read_document(path: Path, root: Path) -> Document:
    """Read and parse a single vault file."""
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(f"Not valid UTF-8: {e}") from e
    header_text, body = split_front_matter(text)
    return Document(
        path=path,
        rel_path=PurePosixPath(Path(os.path.relpath(path, root)).as_posix()),
        raw=raw,
        mode=path.stat().st_mode,
        header=parse_header(header_text),
        body=body,
    )
