"""Exception hierarchy shared across the tersite build."""

from __future__ import annotations


class TersiteError(Exception):
    """Base class for errors raised by tersite."""


class ConfigError(TersiteError, ValueError):
    """Raised when the project configuration cannot be parsed or validated."""


class PageNotFoundError(TersiteError, LookupError):
    """Raised when a relationship query names a page missing from the store."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Page '{path}' is not part of the page store.")
        self.path = path


class FrontMatterError(TersiteError, ValueError):
    """Raised when a document cannot be read or its front matter is malformed."""


class DuplicatePageError(TersiteError, ValueError):
    """Raised when two loaded pages share the same source path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Duplicate page path '{path}'.")
        self.path = path


class ViewError(TersiteError, RuntimeError):
    """Raised when the views directory is missing required templates."""


class OutputWriteError(TersiteError, OSError):
    """Raised when an output file cannot be written or copied."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"Unable to write {path}: {reason}")
        self.path = path
        self.reason = reason
