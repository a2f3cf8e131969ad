"""Header dialects and intermediate document types"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vaultpub.core.utils.timestamps import format_header_time, parse_header_time


class Mode(str, Enum):
    none = "none"
    reformat = "reformat"
    publish = "publish"
    chtime = "git-chtime"


class EntryKind(str, Enum):
    document = "document"
    template = "template"
    asset = "asset"


class MatterIn(BaseModel):
    """Vault (input) dialect. Unknown keys are dropped; empty fields are omitted on output."""
    model_config = ConfigDict(extra="ignore")

    created: Optional[datetime] = None
    tags:    list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    publish: bool = False

    @field_validator("created", mode="before")
    @classmethod
    def _parse_created(cls, value: Any) -> Optional[datetime]:
        return parse_header_time(value)

    @field_validator("tags", "aliases", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(v) if isinstance(v, (int, float, date)) else v for v in value if v is not None]
        return value

    @field_validator("publish", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    def to_header(self) -> dict[str, Any]:
        fm: dict[str, Any] = {}
        if self.created is not None:
            fm["created"] = format_header_time(self.created)
        if self.tags:
            fm["tags"] = list(self.tags)
        if self.aliases:
            fm["aliases"] = list(self.aliases)
        if self.publish:
            fm["publish"] = True
        return fm


class MatterOut(BaseModel):
    """Publish (Quartz) dialect. Every field is always emitted, in declaration order."""
    title:   str
    tags:    list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    created: Optional[datetime] = None
    lastmod: Optional[datetime] = None

    def to_header(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "tags": list(self.tags),
            "aliases": list(self.aliases),
            "created": self.created,
            "lastmod": self.lastmod,
        }


Header = Union[MatterIn, MatterOut]


@dataclass(frozen=True)
class Entry:
    """A path produced by the tree walker."""
    path:     Path              # absolute
    rel_path: PurePosixPath     # relative to the vault root
    kind:     EntryKind


@dataclass
class Document:
    """A parsed vault file; raw bytes are kept for the unchanged-content comparison."""
    path:     Path
    rel_path: PurePosixPath
    raw:      bytes
    mode:     int               # st_mode of the source file
    header:   MatterIn
    body:     str               # everything after the closing delimiter, untouched


class Transform(NamedTuple):
    header:       Optional[Header]
    should_write: bool
    always:       bool          # write even when the output equals the original
