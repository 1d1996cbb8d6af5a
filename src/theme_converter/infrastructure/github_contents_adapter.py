"""GitHub contents API adapter — implements the ContentSource port."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from theme_converter.domain.entities import EntryKind, RemoteEntry, RepositoryMetadata
from theme_converter.domain.exceptions import (
    FetchExhaustedError,
    RateLimitedError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
)
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "theme-converter/1.0"
_PAGE_SIZE = "100"


class GitHubContentsAdapter:
    """Concrete ContentSource backed by the GitHub v3 contents API.

    Every outbound call goes through :meth:`_get_with_retry`: rate-limit,
    access-denied and 404 responses fail at once, everything else is retried
    with a linearly growing pause (``attempt × backoff_seconds``).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._max_attempts = max_attempts
        self._backoff_seconds = backoff_seconds
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(
        self, ref: RepositoryRef, token: CancellationToken | None = None
    ) -> RepositoryMetadata:
        """GET /repos/{owner}/{name} → RepositoryMetadata."""
        resp = await self._get_with_retry(
            f"{self._api_url}/repos/{ref.owner}/{ref.name}",
            headers=self._api_headers,
            token=token,
        )
        data = resp.json()
        return RepositoryMetadata(
            name=data.get("name") or ref.name,
            description=data.get("description") or None,
            home_url=data.get("html_url") or f"https://github.com/{ref.full_name}",
        )

    async def list_directory(
        self, ref: RepositoryRef, path: str, token: CancellationToken | None = None
    ) -> list[RemoteEntry]:
        """GET /repos/{owner}/{name}/contents/{path}, following ``next`` links."""
        url: str | None = (
            f"{self._api_url}/repos/{ref.owner}/{ref.name}/contents/{quote(path, safe='/')}"
        )
        params: dict[str, str] | None = {"per_page": _PAGE_SIZE}
        entries: list[RemoteEntry] = []

        while url:
            resp = await self._get_with_retry(
                url, headers=self._api_headers, params=params, token=token
            )
            data = resp.json()
            if isinstance(data, dict):
                # Listing a file path returns the file object itself.
                data = [data]
            for item in data:
                entry = _to_entry(item)
                if entry is not None:
                    entries.append(entry)
            # The ``next`` link already carries the query string.
            url = resp.links.get("next", {}).get("url")
            params = None

        return entries

    async def fetch_content(
        self, locator: str, token: CancellationToken | None = None
    ) -> str:
        """Fetch raw file content from its download URL."""
        resp = await self._get_with_retry(
            locator, headers={"User-Agent": _USER_AGENT}, token=token
        )
        return resp.text

    # ── Transport ───────────────────────────────────────────────────────

    async def _get_with_retry(
        self,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str] | None = None,
        token: CancellationToken | None = None,
    ) -> httpx.Response:
        """GET *url* with the retry / rate-limit policy applied."""
        last_error: httpx.HTTPError | None = None

        for attempt in range(1, self._max_attempts + 1):
            if token is not None:
                token.raise_if_cancelled()
            try:
                return await self._get_once(url, headers=headers, params=params)
            except httpx.HTTPError as exc:
                last_error = exc
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt,
                    self._max_attempts,
                    url,
                    exc,
                )

            if attempt < self._max_attempts:
                delay = attempt * self._backoff_seconds
                if token is not None:
                    await token.sleep(delay)
                else:
                    await asyncio.sleep(delay)

        raise FetchExhaustedError(
            f"Failed to fetch {url} after {self._max_attempts} attempts: {last_error}",
            last_error=last_error,
        ) from last_error

    async def _get_once(
        self,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, str] | None,
    ) -> httpx.Response:
        """One GET; raises ``httpx.HTTPError`` for anything worth retrying."""
        resp = await self._client.get(
            url, headers=headers, params=params, follow_redirects=True
        )

        if resp.status_code == 404:
            raise RepositoryNotFoundError(
                "Repository or path not found. Make sure the repository is public: "
                f"{url}"
            )

        if resp.status_code == 429:
            raise RateLimitedError(_rate_limit_message(resp))

        if resp.status_code == 403:
            # Secondary rate limits answer 403 with a retry-after header.
            if (
                resp.headers.get("x-ratelimit-remaining") == "0"
                or "retry-after" in resp.headers
            ):
                raise RateLimitedError(_rate_limit_message(resp))
            raise RepositoryAccessDeniedError(
                f"Access denied. The repository may be private or blocked: {url}"
            )

        resp.raise_for_status()
        return resp


# ── Helpers ─────────────────────────────────────────────────────────────────


def _to_entry(item: dict[str, Any]) -> RemoteEntry | None:
    kind = item.get("type")
    if kind == "file":
        return RemoteEntry(
            path=item["path"],
            name=item["name"],
            kind=EntryKind.FILE,
            content_locator=item.get("download_url") or None,
        )
    if kind == "dir":
        return RemoteEntry(path=item["path"], name=item["name"], kind=EntryKind.DIRECTORY)
    logger.debug("Ignoring %s entry %s", kind, item.get("path"))
    return None


def _rate_limit_message(resp: httpx.Response) -> str:
    reset_raw = resp.headers.get("x-ratelimit-reset", "")
    message = "GitHub API rate limit exceeded. Please try again later"
    if reset_raw:
        try:
            reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                "%Y-%m-%d %H:%M:%S UTC"
            )
        except (ValueError, OSError):
            reset_str = reset_raw
        message += f" (limit resets at {reset_str})"
    return message + "."
