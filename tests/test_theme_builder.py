"""Tests for artifact synthesis in the theme builder."""

from __future__ import annotations

import asyncio

from tests._fixtures.fake_source import FakeContentSource
from theme_converter.domain.entities import ArtifactSet, RepositoryMetadata
from theme_converter.domain.value_objects import RepositoryRef
from theme_converter.services import theme_templates
from theme_converter.services.file_classifier import classify
from theme_converter.services.theme_builder import ThemeBuilder
from theme_converter.services.tree_walker import TreeWalker

YEAR = 2031


def _build(
    files: dict[str, str],
    metadata: RepositoryMetadata,
    failing: set[str] | None = None,
    **builder_kwargs,
) -> tuple[ArtifactSet, FakeContentSource]:
    source = FakeContentSource(files, metadata=metadata, failing_paths=failing)

    async def scenario() -> ArtifactSet:
        entries = await TreeWalker(source).list_all_files(RepositoryRef("acme", "portfolio"))
        builder = ThemeBuilder(source, **builder_kwargs)
        return await builder.build_artifacts(metadata, classify(entries), YEAR)

    return asyncio.run(scenario()), source


def test_output_is_deterministic(metadata: RepositoryMetadata) -> None:
    files = {
        "index.html": "<html><head><title>x</title></head><body><main>m</main></body></html>",
        "about.html": "<p>about</p>",
        "css/a.css": "@import 'x.css';\n.a{}",
        "js/app.js": "run()",
        "img/logo.png": "",
    }

    first, _ = _build(files, metadata)
    second, _ = _build(files, metadata)

    assert first == second
    assert list(first) == list(second)


def test_artifact_order(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({"about.html": "<p>about</p>", "js/app.js": "run()"}, metadata)

    assert list(artifacts) == [
        "style.css",
        "about.php",
        "index.php",
        "functions.php",
        "header.php",
        "footer.php",
        "assets/js/main.js",
        "README.md",
    ]


def test_exactly_one_primary_entry(metadata: RepositoryMetadata) -> None:
    files = {
        "index.html": "<p>first</p>",
        "docs/index.html": "<p>second</p>",
        "legacy/index-page.html": "<p>third</p>",
    }

    artifacts, _ = _build(files, metadata)

    assert artifacts["index.php"] == "<p>first</p>"
    assert artifacts["page.php"] == "<p>third</p>"
    assert sum("<p>second</p>" in text for text in artifacts.values()) == 0


def test_primary_entry_synthesized_when_missing(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({"about.html": "<p>about</p>"}, metadata)

    assert artifacts["index.php"] == theme_templates.default_index("Portfolio")
    assert "get_header();" in artifacts["index.php"]
    assert "Sorry, no posts matched your criteria." in artifacts["index.php"]


def test_no_enqueue_calls_without_assets(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({"index.html": "<p>x</p>"}, metadata)

    functions = artifacts["functions.php"]
    assert "wp_enqueue_style(" not in functions
    assert "wp_enqueue_script(" not in functions
    assert "register_sidebar" in functions
    assert "assets/js/main.js" not in artifacts


def test_enqueues_follow_classified_assets(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({"a.css": ".a{}", "app.js": "run()"}, metadata)

    functions = artifacts["functions.php"]
    assert "wp_enqueue_style('portfolio-style', get_stylesheet_uri()" in functions
    assert "wp_enqueue_script('portfolio-script'" in functions
    assert "'/assets/js/main.js'" in functions
    assert "function portfolio_setup()" in functions
    assert "esc_html__('Sidebar', 'portfolio')" in functions
    assert "'id'            => 'footer-1'" in functions
    assert "return 30;" in functions
    assert artifacts["assets/js/main.js"] == "/* From app.js */\nrun()\n"


def test_defaults_synthesized_for_header_and_footer(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({}, metadata)

    assert artifacts["header.php"] == theme_templates.default_header()
    assert "wp_nav_menu" in artifacts["header.php"]
    footer = artifacts["footer.php"]
    assert f"&copy; {YEAR} <?php bloginfo('name'); ?>" in footer
    assert '<a href="https://github.com/acme/portfolio" target="_blank">portfolio</a>' in footer
    assert "dynamic_sidebar('footer-1')" in footer


def test_converted_header_and_footer_win_over_defaults(metadata: RepositoryMetadata) -> None:
    files = {
        "partials/header.html": "<header>custom</header>",
        "partials/footer.html": "<body><footer>custom</footer></body>",
    }

    artifacts, _ = _build(files, metadata)

    assert artifacts["header.php"] == "<header>custom</header>"
    assert artifacts["footer.php"] == (
        "<body>\n<?php wp_body_open(); ?><footer>custom</footer>    <?php wp_footer(); ?>\n</body>"
    )


def test_failed_style_file_is_skipped(metadata: RepositoryMetadata) -> None:
    files = {"a.css": ".a{}", "b.css": ".b{}", "c.css": ".c{}"}

    artifacts, _ = _build(files, metadata, failing={"b.css"})

    style = artifacts["style.css"]
    assert style.startswith("/*\nTheme Name: Portfolio\n")
    assert "/* From a.css */" in style
    assert "/* From b.css */" not in style
    assert "/* From c.css */" in style


def test_failed_markup_file_lets_next_file_claim_index(metadata: RepositoryMetadata) -> None:
    files = {"index.html": "<p>one</p>", "site/index.html": "<p>two</p>"}

    artifacts, _ = _build(files, metadata, failing={"index.html"})

    assert artifacts["index.php"] == "<p>two</p>"


def test_per_category_caps_bound_downloads(metadata: RepositoryMetadata) -> None:
    files = {f"css/s{i}.css": f".s{i}{{}}" for i in range(7)}
    files.update({f"p{i}.html": "<p></p>" for i in range(5)})

    artifacts, source = _build(files, metadata)

    assert sum(1 for loc in source.fetched if loc.endswith(".css")) == 5
    assert sum(1 for loc in source.fetched if loc.endswith(".html")) == 3
    assert "/* From s4.css */" in artifacts["style.css"]
    assert "/* From s5.css */" not in artifacts["style.css"]
    assert [name for name in artifacts if name.startswith("p")] == ["p0.php", "p1.php", "p2.php"]


def test_configurable_caps(metadata: RepositoryMetadata) -> None:
    files = {"a.css": ".a{}", "b.css": ".b{}"}

    artifacts, source = _build(files, metadata, max_style_files=1, author="Acme Studio")

    assert len(source.fetched) == 1
    assert "Author: Acme Studio" in artifacts["style.css"]


def test_generated_names_are_not_overwritten(metadata: RepositoryMetadata) -> None:
    artifacts, _ = _build({"functions.html": "<p>not php</p>"}, metadata)

    assert "<p>not php</p>" not in artifacts["functions.php"]
    assert artifacts["functions.php"].startswith("<?php\n")


def test_readme_summary(metadata: RepositoryMetadata) -> None:
    files = {f"img/pic{i}.jpg": "" for i in range(12)}

    artifacts, _ = _build(files, metadata)

    readme = artifacts["README.md"]
    assert readme.startswith("# Portfolio WordPress Theme\n")
    assert "https://github.com/acme/portfolio" in readme
    assert "A personal portfolio site" in readme
    assert "- Widget areas" in readme
    assert "1. Download the theme zip file" in readme
    assert "- `img/pic0.jpg`" in readme
    assert "- `img/pic10.jpg`" not in readme
    assert "… and 2 more" in readme
    # Images are only listed, never downloaded.
    assert not any(loc.endswith(".jpg") for loc in _build(files, metadata)[1].fetched)
