"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class ThemeConverterError(Exception):
    """Base exception for the entire application."""

    #: Pipeline stage the conversion had reached when the error surfaced.
    stage: str | None = None


# ── Input validation ────────────────────────────────────────────────────────


class InvalidReferenceError(ThemeConverterError):
    """The repository owner or name is empty or not a URL-safe segment."""


# ── Content API errors ──────────────────────────────────────────────────────


class RateLimitedError(ThemeConverterError):
    """The content API answered 429, or 403 with the quota used up."""


class FetchExhaustedError(ThemeConverterError):
    """A network call kept failing until the retry budget ran out."""

    def __init__(self, message: str, last_error: BaseException | None = None) -> None:
        super().__init__(message)
        self.last_error = last_error


class RepositoryNotFoundError(FetchExhaustedError):
    """The repository or path does not exist (404); never retried."""


class RepositoryAccessDeniedError(FetchExhaustedError):
    """Access was refused (403 with quota left); never retried."""


# ── Pipeline control ────────────────────────────────────────────────────────


class ConversionCancelledError(ThemeConverterError):
    """The caller cancelled the conversion before it completed."""


class PartialContentLossError(ThemeConverterError):
    """A single selected file could not be retrieved.

    Soft failure: raised per file and absorbed by the theme builder.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not retrieve {path}: {reason}")
        self.path = path
