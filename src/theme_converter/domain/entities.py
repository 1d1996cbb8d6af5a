"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

#: Output filename → text content, in the order artifacts were decided.
ArtifactSet = dict[str, str]


class EntryKind(str, Enum):
    """Kind of node returned by a directory listing."""

    FILE = "file"
    DIRECTORY = "dir"


class ConversionStage(str, Enum):
    """Stages of a single conversion run."""

    IDLE = "idle"
    FETCHING_METADATA = "fetching_metadata"
    LISTING_TREE = "listing_tree"
    CLASSIFYING = "classifying"
    TRANSFORMING = "transforming"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """High-level metadata about a remote repository."""

    name: str
    home_url: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class RemoteEntry:
    """A single node from a contents listing (file or directory)."""

    path: str
    name: str
    kind: EntryKind
    content_locator: str | None = None  # only files carry one

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def extension(self) -> str:
        dot = self.name.rfind(".")
        if dot <= 0:
            return ""
        return self.name[dot:].lower()


@dataclass(frozen=True, slots=True)
class RetrievedFile:
    """A selected file together with its fetched text content."""

    path: str
    name: str
    extension: str
    content: str

    @classmethod
    def from_entry(cls, entry: RemoteEntry, content: str) -> RetrievedFile:
        return cls(
            path=entry.path,
            name=entry.name,
            extension=entry.extension,
            content=content,
        )


@dataclass(frozen=True, slots=True)
class ClassifiedFiles:
    """Traversal-ordered files grouped by the role they play in the theme."""

    styles: tuple[RemoteEntry, ...] = ()
    markup: tuple[RemoteEntry, ...] = ()
    scripts: tuple[RemoteEntry, ...] = ()
    images: tuple[RemoteEntry, ...] = ()

    @property
    def total(self) -> int:
        return len(self.styles) + len(self.markup) + len(self.scripts) + len(self.images)


@dataclass(frozen=True, slots=True)
class ConversionResult:
    """The final output handed to the caller (and on to the packager)."""

    theme_name: str
    description: str
    artifacts: ArtifactSet = field(default_factory=dict)
