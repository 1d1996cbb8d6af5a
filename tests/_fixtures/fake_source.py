"""In-memory ContentSource used across the test-suite."""

from __future__ import annotations

import asyncio
from collections import Counter

from theme_converter.domain.entities import EntryKind, RemoteEntry, RepositoryMetadata
from theme_converter.domain.exceptions import FetchExhaustedError
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef


def file_entry(path: str, locator: str | None = "auto") -> RemoteEntry:
    name = path.rsplit("/", 1)[-1]
    if locator == "auto":
        locator = f"https://raw.example/{path}"
    return RemoteEntry(path=path, name=name, kind=EntryKind.FILE, content_locator=locator)


def dir_entry(path: str) -> RemoteEntry:
    return RemoteEntry(path=path, name=path.rsplit("/", 1)[-1], kind=EntryKind.DIRECTORY)


class FakeContentSource:
    """Serve a repository from dictionaries and record every call.

    ``files`` maps a repository path to its text content; directories are
    inferred from the paths and listed in insertion order.
    """

    def __init__(
        self,
        files: dict[str, str],
        metadata: RepositoryMetadata | None = None,
        failing_paths: set[str] | None = None,
        listing_delays: dict[str, float] | None = None,
    ) -> None:
        self.metadata = metadata or RepositoryMetadata(
            name="portfolio",
            description="A personal portfolio site",
            home_url="https://github.com/acme/portfolio",
        )
        self.failing_paths = failing_paths or set()
        self.listing_delays = listing_delays or {}
        self.listed: list[str] = []
        self.fetched: Counter[str] = Counter()
        self._contents: dict[str, str] = {}
        self._listings: dict[str, list[RemoteEntry]] = {"": []}

        for path, content in files.items():
            parts = path.split("/")
            for depth in range(1, len(parts)):
                parent = "/".join(parts[: depth - 1])
                current = "/".join(parts[:depth])
                if current not in self._listings:
                    self._listings[current] = []
                    self._listings[parent].append(dir_entry(current))
            entry = file_entry(path)
            self._listings["/".join(parts[:-1])].append(entry)
            self._contents[entry.content_locator] = content

    async def fetch_metadata(
        self, ref: RepositoryRef, token: CancellationToken | None = None
    ) -> RepositoryMetadata:
        return self.metadata

    async def list_directory(
        self, ref: RepositoryRef, path: str, token: CancellationToken | None = None
    ) -> list[RemoteEntry]:
        self.listed.append(path)
        delay = self.listing_delays.get(path)
        if delay:
            await asyncio.sleep(delay)
        return list(self._listings[path])

    async def fetch_content(
        self, locator: str, token: CancellationToken | None = None
    ) -> str:
        self.fetched[locator] += 1
        path = locator.removeprefix("https://raw.example/")
        if path in self.failing_paths:
            raise FetchExhaustedError(f"boom: {path}")
        return self._contents[locator]
