"""Exception types raised while processing a vault"""


class VaultpubError(Exception):
    """Base class for vaultpub failures."""


class FrontMatterError(VaultpubError, ValueError):
    """A document header could not be parsed into the expected shape."""


class HistoryError(VaultpubError, RuntimeError):
    """Querying git history failed (missing binary, not a repository, bad output)."""
