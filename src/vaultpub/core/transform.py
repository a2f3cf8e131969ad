"""Header transformations for reformat and publish modes"""

from vaultpub.config import Settings
from vaultpub.core.history import GitHistory
from vaultpub.core.logging import get_logger
from vaultpub.core.models import Document, MatterIn, MatterOut, Mode, Transform


logger = get_logger(__name__)

PROMPTS = {
    Mode.reformat: "Do you want to reformat file: {} (y/n)? ",
    Mode.publish:  "Do you want to publish file: {} (y/n)? ",
}


def normalize_tags(tags: list[str], settings: Settings) -> list[str]:
    """Rename deprecated draft markers, collapse duplicates, and mark untagged docs as drafts."""
    renamed = [settings.draft_tag if t in settings.deprecated_draft_tags else t for t in tags]
    renamed = list(dict.fromkeys(renamed))
    return renamed or [settings.draft_tag]


def reformat(document: Document, history: GitHistory, settings: Settings) -> MatterIn:
    """Canonical vault header: normalized tags and creation time from git."""
    return document.header.model_copy(update={
        "tags": normalize_tags(document.header.tags, settings),
        "created": history.created(document.path),
    })


def publish(document: Document, history: GitHistory, settings: Settings) -> MatterOut | None:
    """Quartz header for a publishable document, or None when it is filtered out."""
    header = document.header
    if not header.publish:
        logger.info("Not publishing: %s", document.rel_path)
        return None
    if settings.draft_tag in header.tags:
        logger.info("Not publishing (due to draft tag): %s", document.rel_path)
        return None

    title = document.rel_path.stem
    if str(document.rel_path) == settings.index_path:
        title = settings.index_title
    return MatterOut(
        title=title,
        tags=list(header.tags),
        aliases=list(header.aliases),
        created=history.created(document.path),
        lastmod=history.last_modified(document.path),
    )


def transform(document: Document, mode: Mode, history: GitHistory, settings: Settings) -> Transform:
    """Derive the new header for mode; header is None when nothing should be written."""
    if mode is Mode.reformat:
        return Transform(reformat(document, history, settings), True, False)
    if mode is Mode.publish:
        header = publish(document, history, settings)
        return Transform(header, header is not None, header is not None)
    return Transform(None, False, False)
