"""Port: content source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from theme_converter.domain.entities import RemoteEntry, RepositoryMetadata
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef


class ContentSource(Protocol):
    """Abstract contract for reading a remote repository over its content API."""

    async def fetch_metadata(
        self, ref: RepositoryRef, token: CancellationToken | None = None
    ) -> RepositoryMetadata:
        """Return name, description and home URL of the repository."""
        ...

    async def list_directory(
        self, ref: RepositoryRef, path: str, token: CancellationToken | None = None
    ) -> list[RemoteEntry]:
        """Return the entries of one directory, in listing order."""
        ...

    async def fetch_content(
        self, locator: str, token: CancellationToken | None = None
    ) -> str:
        """Return the text content behind a file's content locator."""
        ...
