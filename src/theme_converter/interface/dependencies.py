"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from theme_converter.infrastructure.config import Settings, get_settings
from theme_converter.infrastructure.github_contents_adapter import GitHubContentsAdapter
from theme_converter.services.convert_repo import ConvertRepoUseCase
from theme_converter.services.theme_builder import ThemeBuilder
from theme_converter.services.tree_walker import TreeWalker

_http_client: httpx.AsyncClient | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client  # noqa: PLW0603

    settings = _settings()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=True,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_use_case() -> ConvertRepoUseCase:
    """Build the use case with injected adapters (one per request)."""
    settings = _settings()

    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    adapter = GitHubContentsAdapter(
        client=_http_client,
        token=token,
        api_url=settings.github_api_url,
        max_attempts=settings.max_attempts,
        backoff_seconds=settings.backoff_seconds,
    )

    return ConvertRepoUseCase(
        source=adapter,
        tree_walker=TreeWalker(adapter, max_concurrency=settings.listing_concurrency),
        theme_builder=ThemeBuilder(
            adapter,
            max_style_files=settings.max_style_files,
            max_markup_files=settings.max_markup_files,
            max_script_files=settings.max_script_files,
            fetch_concurrency=settings.fetch_concurrency,
            author=settings.theme_author,
        ),
    )
