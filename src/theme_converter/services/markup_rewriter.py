"""Markup → PHP template rewriting.

A template is produced by running an ordered list of independent text
substitutions over the HTML source.  Each step is a no-op when its pattern
is absent, so the steps never fail.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

POSTS_LOOP = """\
<main id="main" class="site-main">
    <?php if (have_posts()) : ?>
        <?php while (have_posts()) : the_post(); ?>
            <article id="post-<?php the_ID(); ?>" <?php post_class(); ?>>
                <h1><a href="<?php the_permalink(); ?>"><?php the_title(); ?></a></h1>
                <div class="entry-content">
                    <?php the_excerpt(); ?>
                </div>
                <div class="entry-meta">
                    <span class="posted-on"><?php echo get_the_date(); ?></span>
                    <span class="byline">by <?php the_author(); ?></span>
                </div>
            </article>
        <?php endwhile; ?>
        <?php the_posts_navigation(); ?>
    <?php else : ?>
        <p>No posts found.</p>
    <?php endif; ?>
</main>"""

#: Name fragments that mark a page as the site's entry point.
ENTRY_NAME_HINTS: tuple[str, ...] = ("index", "home")


class RewriteStep(Protocol):
    name: str

    def apply(self, content: str, file_name: str) -> str: ...


@dataclass(frozen=True, slots=True)
class RegexStep:
    """Replace every match of *pattern* with *replacement*."""

    name: str
    pattern: re.Pattern[str]
    replacement: str
    count: int = 0

    def apply(self, content: str, file_name: str) -> str:
        # A callable replacement keeps backslashes in PHP code literal.
        return self.pattern.sub(lambda _m: self.replacement, content, count=self.count)


@dataclass(frozen=True, slots=True)
class InsertStep:
    """Insert *snippet* before or after the first match of *pattern*."""

    name: str
    pattern: re.Pattern[str]
    snippet: str
    before: bool

    def apply(self, content: str, file_name: str) -> str:
        match = self.pattern.search(content)
        if match is None:
            return content
        if self.before:
            return content[: match.start()] + self.snippet + content[match.start() :]
        return content[: match.end()] + self.snippet + content[match.end() :]


@dataclass(frozen=True, slots=True)
class InjectPostsLoop:
    """Swap the ``<main>`` region of an entry page for a posts loop."""

    name: str = "InjectPostsLoop"

    _pattern = re.compile(r"<main[^>]*>[\s\S]*?</main>", re.IGNORECASE)

    def apply(self, content: str, file_name: str) -> str:
        lowered = file_name.lower()
        if not any(hint in lowered for hint in ENTRY_NAME_HINTS):
            return content
        return self._pattern.sub(lambda _m: POSTS_LOOP, content)


REWRITE_STEPS: tuple[RewriteStep, ...] = (
    RegexStep(
        name="ReplaceTitle",
        pattern=re.compile(r"<title>[^<]*</title>", re.IGNORECASE),
        replacement="<?php wp_title(); ?>",
    ),
    RegexStep(
        name="ReplaceCharset",
        pattern=re.compile(r"""<meta\s+charset=["']?[^"'>\s]*["']?\s*/?>""", re.IGNORECASE),
        replacement="<meta charset=\"<?php bloginfo('charset'); ?>\">",
    ),
    InjectPostsLoop(),
    InsertStep(
        name="InjectHeadHook",
        pattern=re.compile(r"</head>", re.IGNORECASE),
        snippet="    <?php wp_head(); ?>\n",
        before=True,
    ),
    InsertStep(
        name="InjectBodyOpenHook",
        pattern=re.compile(r"<body(?:\s[^>]*)?>", re.IGNORECASE),
        snippet="\n<?php wp_body_open(); ?>",
        before=False,
    ),
    InsertStep(
        name="InjectFooterHook",
        pattern=re.compile(r"</body>", re.IGNORECASE),
        snippet="    <?php wp_footer(); ?>\n",
        before=True,
    ),
)


def convert_markup(
    content: str,
    file_name: str,
    steps: tuple[RewriteStep, ...] = REWRITE_STEPS,
) -> str:
    """Apply *steps* in order to an HTML document and return the PHP template."""
    for step in steps:
        content = step.apply(content, file_name)
    return content
