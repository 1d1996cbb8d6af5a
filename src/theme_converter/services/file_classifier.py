"""File classification — decide which role each repository file plays."""

from __future__ import annotations

from theme_converter.domain.entities import ClassifiedFiles, RemoteEntry

HIDDEN_PREFIX = "."

DEPENDENCY_DIRS: frozenset[str] = frozenset(
    {
        "node_modules",
        "bower_components",
        "jspm_packages",
        "vendor",
    }
)

STYLE_EXTENSION = ".css"
MARKUP_EXTENSION = ".html"
SCRIPT_EXTENSION = ".js"
IMAGE_EXTENSIONS: frozenset[str] = frozenset(
    {".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp"}
)

SCRIPT_PATH_EXCLUDES: tuple[str, ...] = ("node_modules",)
MINIFIED_MARKER = ".min."


def should_descend(name: str) -> bool:
    """Return *True* if a directory with this name should be recursed into."""
    return not name.startswith(HIDDEN_PREFIX) and name not in DEPENDENCY_DIRS


def _is_script(entry: RemoteEntry) -> bool:
    if entry.extension != SCRIPT_EXTENSION:
        return False
    if any(marker in entry.path for marker in SCRIPT_PATH_EXCLUDES):
        return False
    return MINIFIED_MARKER not in entry.name


def classify(entries: list[RemoteEntry] | tuple[RemoteEntry, ...]) -> ClassifiedFiles:
    """Partition files into styles, markup, scripts and images.

    Order within each bucket follows *entries*.  Directories and files
    without a content locator are never classified.
    """
    styles: list[RemoteEntry] = []
    markup: list[RemoteEntry] = []
    scripts: list[RemoteEntry] = []
    images: list[RemoteEntry] = []

    for entry in entries:
        if not entry.is_file or not entry.content_locator:
            continue
        ext = entry.extension
        if ext == STYLE_EXTENSION:
            styles.append(entry)
        elif ext == MARKUP_EXTENSION:
            markup.append(entry)
        elif _is_script(entry):
            scripts.append(entry)
        elif ext in IMAGE_EXTENSIONS:
            images.append(entry)

    return ClassifiedFiles(
        styles=tuple(styles),
        markup=tuple(markup),
        scripts=tuple(scripts),
        images=tuple(images),
    )
