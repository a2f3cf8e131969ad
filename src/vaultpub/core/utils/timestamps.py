"""Header timestamp layouts: the vault's human-readable form and git's %ci form"""

from datetime import date, datetime
from typing import Any, Optional

from vaultpub.core.logging import get_logger


logger = get_logger(__name__)

HEADER_FORMAT = "%A, %d %B %Y %H:%M:%S"   # e.g. "Monday, 2 January 2006 15:04:05"
GIT_FORMAT = "%Y-%m-%d %H:%M:%S %z"       # git log --format=%ci
ZERO = datetime(1, 1, 1)


def format_header_time(value: datetime) -> str:
    """Render value in the header layout (unpadded day, no zone)."""
    return f"{value:%A}, {value.day} {value:%B %Y %H:%M:%S}"


def parse_header_time(value: Any) -> Optional[datetime]:
    """Parse a header timestamp; anything unparseable becomes None (unset)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            parsed = datetime.strptime(value.strip(), HEADER_FORMAT)
        except ValueError:
            logger.warning("Unparseable created timestamp %r, treating as unset", value)
            return None
    else:
        logger.warning("Unparseable created timestamp %r, treating as unset", value)
        return None
    if parsed.replace(tzinfo=None) == ZERO:
        return None
    return parsed


def parse_git_time(value: str) -> datetime:
    """Parse one line of `git log --format=%ci` output into an aware datetime."""
    return datetime.strptime(value.strip(), GIT_FORMAT)
