"""Application configuration: settings schema and vaultpub.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "vaultpub.yaml"


class Settings(BaseModel):
    app_name:              str = "vaultpub"
    target:                Optional[str] = Field(default=None, description="Output root; defaults to the vault root")
    extensions:            list[str] = Field(default=[".md"], description="Suffixes treated as documents")
    templates_prefix:      str = Field(default="templates", description="Relative dir never transformed")
    assets_prefix:         str = Field(default="assets", description="Relative dir copied verbatim")
    ignore_dirs:           list[str] = Field(default=[".git"], description="Directory names pruned from the walk")
    draft_tag:             str = Field(default="draft", min_length=1, description="Tag marking unpublishable notes")
    deprecated_draft_tags: list[str] = Field(default=["wip"], description="Tags renamed to draft_tag on reformat")
    index_path:            str = Field(default="_index.md", description="Relative path of the site index note")
    index_title:           str = Field(default="Index", description="Title used for the index note")
    staged_as_modified:    bool = Field(default=False, description="Treat files with staged git changes as modified now")
    git_executable:        str = Field(default="git", description="git binary used for history queries")

    @field_validator("extensions", "ignore_dirs", "deprecated_draft_tags", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


def load_config(overrides: dict[str, Any] = None, config_dir: Path = Path(".")) -> Settings:
    """Load Settings from vaultpub.yaml, then VAULTPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    config_path = Path(config_dir) / CONFIG_FILE
    if config_path.exists():
        try:
            data = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"VAULTPUB_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
