"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field

from theme_converter.domain.exceptions import (
    ConversionCancelledError,
    InvalidReferenceError,
)

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9\-_.]+$")

_GITHUB_URL_RE = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9\-_.]+)/(?P<name>[A-Za-z0-9\-_.]+?)(?:\.git)?/?$"
)
_SHORT_REF_RE = re.compile(r"^(?P<owner>[A-Za-z0-9\-_.]+)/(?P<name>[A-Za-z0-9\-_.]+)$")


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Owner / name pair identifying a remote repository.

    Both segments must be non-empty and URL-safe; anything else raises
    :class:`InvalidReferenceError` at construction time.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        for label, value in (("owner", self.owner), ("name", self.name)):
            if not value or not value.strip():
                raise InvalidReferenceError(f"Repository {label} must not be empty.")
            if not _SEGMENT_RE.match(value) or value in (".", ".."):
                raise InvalidReferenceError(
                    f"Repository {label} '{value}' is not a valid path segment."
                )

    @classmethod
    def from_string(cls, raw: str) -> RepositoryRef:
        """Parse ``https://github.com/<owner>/<name>`` or ``<owner>/<name>``."""
        text = raw.strip()
        match = _GITHUB_URL_RE.match(text) or _SHORT_REF_RE.match(text)
        if not match:
            raise InvalidReferenceError(
                f"Invalid repository reference: '{text}'. "
                "Expected https://github.com/<owner>/<repo> or <owner>/<repo>"
            )
        return cls(owner=match["owner"], name=match["name"])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(slots=True)
class CancellationToken:
    """Caller-owned cancellation signal shared by one conversion."""

    _event: asyncio.Event = field(default_factory=asyncio.Event)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ConversionCancelledError("Conversion was cancelled.")

    async def sleep(self, seconds: float) -> None:
        """Sleep for *seconds*, waking early (and raising) on cancellation."""
        self.raise_if_cancelled()
        if seconds > 0:
            try:
                await asyncio.wait_for(self._event.wait(), timeout=seconds)
            except asyncio.TimeoutError:
                return
        self.raise_if_cancelled()
