"""Tests for recursive listing: ordering, exclusions and concurrency."""

from __future__ import annotations

import asyncio

import pytest

from tests._fixtures.fake_source import FakeContentSource
from theme_converter.domain.exceptions import ConversionCancelledError, FetchExhaustedError
from theme_converter.domain.value_objects import CancellationToken, RepositoryRef
from theme_converter.services.tree_walker import TreeWalker

FILES = {
    "index.html": "<html></html>",
    "css/a.css": "a{}",
    "css/deep/b.css": "b{}",
    "js/app.js": "app()",
    "about.html": "<html></html>",
}


def test_returns_files_in_traversal_order(ref: RepositoryRef) -> None:
    source = FakeContentSource(FILES)

    files = asyncio.run(TreeWalker(source).list_all_files(ref))

    assert [f.path for f in files] == [
        "index.html",
        "css/a.css",
        "css/deep/b.css",
        "js/app.js",
        "about.html",
    ]
    assert all(f.is_file for f in files)


def test_order_is_stable_when_siblings_finish_out_of_order(ref: RepositoryRef) -> None:
    # The first sibling is the slowest one to answer.
    source = FakeContentSource(FILES, listing_delays={"css": 0.05, "css/deep": 0.02})

    files = asyncio.run(TreeWalker(source, max_concurrency=4).list_all_files(ref))

    assert [f.path for f in files] == [
        "index.html",
        "css/a.css",
        "css/deep/b.css",
        "js/app.js",
        "about.html",
    ]


def test_skips_hidden_and_dependency_directories(ref: RepositoryRef) -> None:
    source = FakeContentSource(
        {
            ".github/workflows/ci.yml": "on: push",
            "node_modules/lib/index.js": "x",
            "src/node_modules/lib/index.js": "x",
            "vendor/bootstrap.css": "x",
            ".hidden/page.html": "x",
            "src/main.js": "main()",
            ".eslintrc": "{}",
        }
    )

    files = asyncio.run(TreeWalker(source).list_all_files(ref))

    assert [f.path for f in files] == ["src/main.js", ".eslintrc"]
    assert source.listed == ["", "src"]


def test_concurrency_is_bounded(ref: RepositoryRef) -> None:
    files = {f"dir{i}/file{i}.css": "x" for i in range(10)}
    source = FakeContentSource(files, listing_delays={f"dir{i}": 0.01 for i in range(10)})
    in_flight = 0
    peak = 0
    original = source.list_directory

    async def tracking(ref, path, token=None):  # type: ignore[no-untyped-def]
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        try:
            return await original(ref, path, token)
        finally:
            in_flight -= 1

    source.list_directory = tracking  # type: ignore[method-assign]

    result = asyncio.run(TreeWalker(source, max_concurrency=2).list_all_files(ref))

    assert len(result) == 10
    assert peak == 2


def test_listing_failure_propagates(ref: RepositoryRef) -> None:
    source = FakeContentSource(FILES)
    original = source.list_directory

    async def failing(ref, path, token=None):  # type: ignore[no-untyped-def]
        if path == "js":
            raise FetchExhaustedError("listing js failed")
        return await original(ref, path, token)

    source.list_directory = failing  # type: ignore[method-assign]

    with pytest.raises(FetchExhaustedError, match="listing js failed"):
        asyncio.run(TreeWalker(source).list_all_files(ref))


def test_cancelled_token_stops_before_any_listing(ref: RepositoryRef) -> None:
    source = FakeContentSource(FILES)
    token = CancellationToken()
    token.cancel()

    with pytest.raises(ConversionCancelledError):
        asyncio.run(TreeWalker(source).list_all_files(ref, token))

    assert source.listed == []


def test_rejects_non_positive_concurrency() -> None:
    with pytest.raises(ValueError):
        TreeWalker(FakeContentSource({}), max_concurrency=0)
