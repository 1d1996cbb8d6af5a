"""Stylesheet aggregation — merge source CSS files into ``style.css``."""

from __future__ import annotations

import re

from theme_converter.domain.entities import RetrievedFile

THEME_VERSION = "1.0.0"
DEFAULT_DESCRIPTION = "WordPress theme converted from GitHub repository"

_IMPORT_RE = re.compile(r"@import\s+[^;]+;")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

BASELINE_RULES = """

/* WordPress-specific styles */
.wp-block-image {
  margin: 1rem 0;
}

.wp-block-group {
  margin: 1rem 0;
}

.entry-content {
  line-height: 1.6;
}

.site-header, .site-footer {
  padding: 1rem 0;
}

/* Responsive WordPress styles */
@media (max-width: 768px) {
  .site-header, .site-footer {
    padding: 0.5rem 0;
  }
}
"""


def text_domain(repo_name: str) -> str:
    """``"My Cool_Site!"`` → ``"my-cool-site"``."""
    return _NON_ALNUM_RE.sub("-", repo_name.lower()).strip("-") or "theme"


def function_prefix(repo_name: str) -> str:
    """Identifier-safe variant of :func:`text_domain` for PHP function names."""
    prefix = _NON_ALNUM_RE.sub("_", repo_name.lower()).strip("_") or "theme"
    if prefix[0].isdigit():
        prefix = "theme_" + prefix
    return prefix


def _comment_safe(text: str) -> str:
    # The header lives inside a CSS comment; keep it on one line and unbroken.
    return " ".join(text.replace("*/", "* /").split())


def style_header(
    theme_name: str,
    description: str | None,
    repo_name: str,
    author: str,
) -> str:
    return (
        "/*\n"
        f"Theme Name: {_comment_safe(theme_name)}\n"
        f"Description: {_comment_safe(description or DEFAULT_DESCRIPTION)}\n"
        f"Version: {THEME_VERSION}\n"
        f"Author: {_comment_safe(author)}\n"
        f"Text Domain: {text_domain(repo_name)}\n"
        "*/\n\n"
    )


def process_stylesheet(css: str) -> str:
    """Drop ``@import`` directives and append the baseline WordPress rules."""
    return _IMPORT_RE.sub("", css) + BASELINE_RULES


def aggregate_styles(header: str, files: list[RetrievedFile]) -> str:
    parts = [header]
    for f in files:
        parts.append(f"\n/* From {f.name} */\n{process_stylesheet(f.content)}\n")
    return "".join(parts)
