"""CLI command implementations"""

import os
import shutil
from pathlib import Path
from typing import Annotated, Optional

import typer

from vaultpub.config import Settings, load_config
from vaultpub.core.confirm import ConfirmationGate
from vaultpub.core.history import GitHistory
from vaultpub.core.logging import setup_logging
from vaultpub.core.models import Mode
from vaultpub.core.pipeline import run_chtime_fix, run_pipeline


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(root: Path, overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides, config_dir=root)
    except ValueError as e:
        _fail(str(e))


def _mode(quartz: bool, reformat: bool, git_chtime: bool) -> Mode:
    """Resolve the mode flags; at most one may be set."""
    selected = [m for m, on in ((Mode.publish, quartz), (Mode.reformat, reformat), (Mode.chtime, git_chtime)) if on]
    if len(selected) > 1:
        _fail("--quartz, --reformat and --git-chtime are mutually exclusive")
    return selected[0] if selected else Mode.none


def _target_dir(cli_target: Optional[str], settings: Settings, root_dir: Path) -> Path:
    """--target is relative to the working dir; a configured target is relative to the vault root."""
    if cli_target:
        return Path(cli_target).resolve()
    if settings.target:
        return (root_dir / Path(settings.target).expanduser()).resolve()
    return root_dir


def _echo_summary(counts: dict) -> None:
    typer.echo(
        f"Done - "
        f"{counts['written']} written, "
        f"{counts['original']} rewritten unchanged, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['declined']} declined, "
        f"{counts['skipped']} skipped, "
        f"{counts['copied']} copied"
    )


def run_cmd(
    target: Annotated[Optional[str], typer.Option("--target", help="Path to write changed files to")] = None,
    root: Annotated[Optional[str], typer.Option("--root", help="Vault directory to walk (default: working dir)")] = None,
    force: Annotated[bool, typer.Option("--force", help="Execute all changes without asking")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Print per-file trace information")] = False,
    clean: Annotated[bool, typer.Option("--clean", help="Remove target before processing; target must differ from root")] = False,
    quartz: Annotated[bool, typer.Option("--quartz", help="Prepare frontmatter for Quartz publishing")] = False,
    reformat: Annotated[bool, typer.Option("--reformat", help="Rewrite frontmatter into the vault format and fix ending newlines")] = False,
    git_chtime: Annotated[bool, typer.Option("--git-chtime", help="Set file mtimes from git, useful right after a clone")] = False,
    ):
    """Walk the vault and reformat or publish its notes."""
    setup_logging(debug)
    mode = _mode(quartz, reformat, git_chtime)
    root_dir = Path(root or os.getcwd()).resolve()
    settings = _settings(root_dir, overrides={"target": target})
    target_dir = _target_dir(target, settings, root_dir)
    history = GitHistory(root_dir, settings.staged_as_modified, settings.git_executable)

    if clean:
        if target_dir == root_dir:
            _fail("--clean requires a --target different from the vault root")
        if target_dir.exists():
            try:
                shutil.rmtree(target_dir)
            except OSError as e:
                _fail(f"Could not clean {target_dir}", e)
        typer.echo(f"Cleaned {target_dir}")

    if mode is Mode.chtime:
        try:
            changed = run_chtime_fix(root_dir, history, settings)
        except Exception as e:
            _fail("Fixing chtimes failed", e)
        typer.echo(f"Done - {changed} file time(s) changed")
        return

    gate = ConfirmationGate(force=force)
    try:
        counts = run_pipeline(root_dir, target_dir, mode, gate, history, settings)
    except Exception as e:
        _fail("Processing failed", e)
    _echo_summary(counts)
