"""
Load-time failures. Everything here aborts the current playlist load.

Per-batch enrichment failures are deliberately absent: they are absorbed
by the enricher and show up as sentinel values, not exceptions.
"""


class PlaylistError(Exception):
    """Base for anything that aborts a playlist load."""


class InvalidIdentifier(PlaylistError):
    """The input has no playlist id. Raised before any network call."""


class EmptyCollectionError(PlaylistError):
    """Pagination finished with zero items (private, empty, or bad id)."""


class UpstreamError(PlaylistError):
    """A listing or metadata call failed, or returned a body we can't read."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
