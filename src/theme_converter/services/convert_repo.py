"""Convert-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`ContentSource` port and the pure service modules.  The interface
layer injects concrete adapters at runtime.

Stages run strictly one after another::

    idle → fetching_metadata → listing_tree → classifying → transforming → done

Only the two fetch stages can fail the conversion; classification and
transformation absorb per-file problems and always produce a theme.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from theme_converter.domain.entities import (
    ConversionResult,
    ConversionStage,
    RemoteEntry,
    RepositoryMetadata,
)
from theme_converter.domain.exceptions import (
    ConversionCancelledError,
    FetchExhaustedError,
    ThemeConverterError,
)
from theme_converter.domain.ports.content_source import ContentSource
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef
from theme_converter.services.file_classifier import classify
from theme_converter.services.theme_builder import ThemeBuilder, theme_name_for
from theme_converter.services.tree_walker import TreeWalker

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Converted WordPress theme"

StageListener = Callable[[ConversionStage], None]


def _current_utc_year() -> int:
    return datetime.now(timezone.utc).year


class _StageTracker:
    """Per-run stage bookkeeping; never shared between conversions."""

    def __init__(self, ref: RepositoryRef, listener: StageListener | None) -> None:
        self._ref = ref
        self._listener = listener
        self.stage = ConversionStage.IDLE

    def enter(self, stage: ConversionStage, token: CancellationToken | None) -> None:
        if token is not None:
            token.raise_if_cancelled()
        logger.debug("%s: %s → %s", self._ref.full_name, self.stage.value, stage.value)
        self.stage = stage
        if self._listener is not None:
            self._listener(stage)

    def fail(self, exc: ThemeConverterError) -> None:
        exc.stage = self.stage.value
        logger.warning(
            "Conversion of %s failed while %s: %s",
            self._ref.full_name,
            self.stage.value,
            exc,
        )
        self.stage = ConversionStage.FAILED
        if self._listener is not None:
            self._listener(ConversionStage.FAILED)


class ConvertRepoUseCase:
    """Orchestrates the full repository → theme pipeline.

    Parameters
    ----------
    source:
        Adapter that can read metadata, listings and file content.
    tree_walker:
        Recursive lister; defaults to a :class:`TreeWalker` over *source*.
    theme_builder:
        Artifact builder; defaults to a :class:`ThemeBuilder` over *source*.
    current_year:
        Clock used for the synthesized footer's copyright year.
    """

    def __init__(
        self,
        source: ContentSource,
        tree_walker: TreeWalker | None = None,
        theme_builder: ThemeBuilder | None = None,
        current_year: Callable[[], int] = _current_utc_year,
    ) -> None:
        self._source = source
        self._walker = tree_walker or TreeWalker(source)
        self._builder = theme_builder or ThemeBuilder(source)
        self._current_year = current_year

    # ── Public entry point ──────────────────────────────────────────────

    async def convert(
        self,
        ref: RepositoryRef,
        token: CancellationToken | None = None,
        on_stage: StageListener | None = None,
    ) -> ConversionResult:
        """Run the full pipeline and return the converted theme.

        Raises a single :class:`ThemeConverterError` subclass on failure;
        nothing partial is ever returned.
        """
        logger.info("Converting %s", ref.full_name)
        run = _StageTracker(ref, on_stage)

        try:
            metadata, entries = await self._fetch(ref, run, token)

            run.enter(ConversionStage.CLASSIFYING, token)
            classified = classify(entries)
            logger.info(
                "Classified %s: %d styles, %d markup, %d scripts, %d images",
                ref.full_name,
                len(classified.styles),
                len(classified.markup),
                len(classified.scripts),
                len(classified.images),
            )

            run.enter(ConversionStage.TRANSFORMING, token)
            artifacts = await self._builder.build_artifacts(
                metadata, classified, self._current_year(), token
            )
            if token is not None:
                token.raise_if_cancelled()
        except ConversionCancelledError as exc:
            exc.stage = run.stage.value
            logger.info("Conversion of %s cancelled while %s", ref.full_name, run.stage.value)
            raise

        run.enter(ConversionStage.DONE, None)
        return ConversionResult(
            theme_name=theme_name_for(metadata.name),
            description=metadata.description or DEFAULT_DESCRIPTION,
            artifacts=artifacts,
        )

    # ── Fetch stages ────────────────────────────────────────────────────

    async def _fetch(
        self,
        ref: RepositoryRef,
        run: _StageTracker,
        token: CancellationToken | None,
    ) -> tuple[RepositoryMetadata, list[RemoteEntry]]:
        """Metadata + tree listing; every failure here is fatal."""
        try:
            run.enter(ConversionStage.FETCHING_METADATA, token)
            metadata = await self._source.fetch_metadata(ref, token)

            run.enter(ConversionStage.LISTING_TREE, token)
            entries = await self._walker.list_all_files(ref, token)
        except ConversionCancelledError:
            raise
        except ThemeConverterError as exc:
            run.fail(exc)
            raise
        except Exception as exc:
            wrapped = FetchExhaustedError(
                f"Failed to read repository {ref.full_name}: {exc}", last_error=exc
            )
            run.fail(wrapped)
            raise wrapped from exc

        return metadata, entries
