"""Theme builder — turn classified repository files into theme artifacts.

Content is fetched lazily: only the first few files of each category are
downloaded, and a file that cannot be downloaded is logged and skipped.
Missing mandatory templates are synthesized from fixed skeletons, so the
resulting :data:`ArtifactSet` always holds exactly one ``index.php``.
"""

from __future__ import annotations

import asyncio
import logging

from theme_converter.domain.entities import (
    ArtifactSet,
    ClassifiedFiles,
    RemoteEntry,
    RepositoryMetadata,
    RetrievedFile,
)
from theme_converter.domain.exceptions import (
    ConversionCancelledError,
    PartialContentLossError,
)
from theme_converter.domain.ports.content_source import ContentSource
from theme_converter.domain.value_objects import CancellationToken
from theme_converter.services import theme_templates
from theme_converter.services.markup_rewriter import convert_markup
from theme_converter.services.role_inference import (
    FOOTER_TEMPLATE,
    HEADER_TEMPLATE,
    PRIMARY_TEMPLATE,
    assign_template_names,
)
from theme_converter.services.style_aggregator import (
    aggregate_styles,
    function_prefix,
    style_header,
    text_domain,
)

logger = logging.getLogger(__name__)

STYLESHEET = "style.css"
FUNCTIONS = "functions.php"
README = "README.md"
SCRIPT_BUNDLE = "assets/js/main.js"

_GENERATED: frozenset[str] = frozenset({STYLESHEET, FUNCTIONS, README, SCRIPT_BUNDLE})


def theme_name_for(repo_name: str) -> str:
    """``"portfolio"`` → ``"Portfolio"``."""
    return repo_name[:1].upper() + repo_name[1:]


class ThemeBuilder:
    """Build the theme's artifact set from classified repository files.

    Parameters
    ----------
    source:
        Content source used to download the selected files.
    max_style_files, max_markup_files, max_script_files:
        Per-category caps; files past the cap (in traversal order) are
        never downloaded.
    fetch_concurrency:
        Maximum number of simultaneous downloads within one category.
    author:
        Value of the ``Author`` field in the stylesheet header.
    """

    def __init__(
        self,
        source: ContentSource,
        *,
        max_style_files: int = 5,
        max_markup_files: int = 3,
        max_script_files: int = 5,
        fetch_concurrency: int = 4,
        author: str = "Theme Converter",
    ) -> None:
        self._source = source
        self._max_styles = max_style_files
        self._max_markup = max_markup_files
        self._max_scripts = max_script_files
        self._fetch_concurrency = max(1, fetch_concurrency)
        self._author = author

    async def build_artifacts(
        self,
        metadata: RepositoryMetadata,
        classified: ClassifiedFiles,
        current_year: int,
        token: CancellationToken | None = None,
    ) -> ArtifactSet:
        """Return a fresh filename → content mapping for the theme."""
        theme_name = theme_name_for(metadata.name)
        artifacts: ArtifactSet = {}

        # 1. Stylesheet
        styles = await self._retrieve(classified.styles, self._max_styles, token)
        header = style_header(theme_name, metadata.description, metadata.name, self._author)
        artifacts[STYLESHEET] = aggregate_styles(header, styles)

        # 2. Markup → templates
        markup = await self._retrieve(classified.markup, self._max_markup, token)
        targets = assign_template_names([f.name for f in markup], reserved=_GENERATED)
        for f, target in zip(markup, targets):
            if target is not None:
                artifacts[target] = convert_markup(f.content, f.name)

        if PRIMARY_TEMPLATE not in artifacts:
            artifacts[PRIMARY_TEMPLATE] = theme_templates.default_index(theme_name)

        # 3. Settings / bootstrap
        artifacts[FUNCTIONS] = theme_templates.functions_php(
            theme_name,
            function_prefix(metadata.name),
            text_domain(metadata.name),
            has_styles=bool(classified.styles),
            has_scripts=bool(classified.scripts),
            script_path=SCRIPT_BUNDLE,
        )

        # 4. Defaults for header / footer
        if HEADER_TEMPLATE not in artifacts:
            artifacts[HEADER_TEMPLATE] = theme_templates.default_header()
        if FOOTER_TEMPLATE not in artifacts:
            artifacts[FOOTER_TEMPLATE] = theme_templates.default_footer(
                current_year, metadata.name, metadata.home_url
            )

        # 5. Script bundle (functions.php enqueues it whenever scripts exist)
        if classified.scripts:
            scripts = await self._retrieve(classified.scripts, self._max_scripts, token)
            artifacts[SCRIPT_BUNDLE] = "".join(
                f"/* From {f.name} */\n{f.content}\n" for f in scripts
            )

        # 6. Summary
        artifacts[README] = theme_templates.readme(
            theme_name,
            metadata.description,
            metadata.home_url,
            [img.path for img in classified.images],
        )

        logger.info("Built %d artifacts for theme %s", len(artifacts), theme_name)
        return artifacts

    # ── Lazy retrieval ──────────────────────────────────────────────────

    async def _retrieve(
        self,
        entries: tuple[RemoteEntry, ...],
        cap: int,
        token: CancellationToken | None,
    ) -> list[RetrievedFile]:
        """Download the first *cap* entries; failed downloads are skipped."""
        selected = entries[:cap]
        if len(entries) > cap:
            logger.debug(
                "Skipping %d files past the cap of %d: %s",
                len(entries) - cap,
                cap,
                ", ".join(e.path for e in entries[cap:]),
            )

        sem = asyncio.Semaphore(self._fetch_concurrency)

        async def _fetch_one(entry: RemoteEntry) -> RetrievedFile | None:
            async with sem:
                try:
                    return await self._fetch_file(entry, token)
                except PartialContentLossError as exc:
                    logger.warning("%s, skipping", exc)
                    return None

        results = await asyncio.gather(*(_fetch_one(e) for e in selected))
        return [r for r in results if r is not None]

    async def _fetch_file(
        self, entry: RemoteEntry, token: CancellationToken | None
    ) -> RetrievedFile:
        if token is not None:
            token.raise_if_cancelled()
        if not entry.content_locator:
            raise PartialContentLossError(entry.path, "no download location")
        try:
            content = await self._source.fetch_content(entry.content_locator, token)
        except ConversionCancelledError:
            raise
        except Exception as exc:
            raise PartialContentLossError(entry.path, str(exc)) from exc
        return RetrievedFile.from_entry(entry, content)
