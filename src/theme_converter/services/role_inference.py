"""Map converted markup files to WordPress template filenames."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

PRIMARY_TEMPLATE = "index.php"
HEADER_TEMPLATE = "header.php"
FOOTER_TEMPLATE = "footer.php"

TEMPLATE_EXTENSION = ".php"


@dataclass(frozen=True, slots=True)
class RoleRule:
    """A name fragment and the template it maps to."""

    fragment: str
    template: str
    exclusive: bool = False


# Evaluated top to bottom; the first rule that matches and is still
# available decides the file's template.
ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule("index", PRIMARY_TEMPLATE, exclusive=True),
    RoleRule("header", HEADER_TEMPLATE),
    RoleRule("footer", FOOTER_TEMPLATE),
    RoleRule("single", "single.php"),
    RoleRule("page", "page.php"),
)


def _fallback_name(file_name: str) -> str:
    stem, dot, ext = file_name.rpartition(".")
    if not dot or ext.lower() != "html":
        return file_name + TEMPLATE_EXTENSION
    return stem + TEMPLATE_EXTENSION


def assign_template_names(
    file_names: list[str], reserved: frozenset[str] = frozenset()
) -> list[str | None]:
    """Return the output name for each markup file, ``None`` when dropped.

    *file_names* must be in traversal order: the first ``index`` file claims
    the primary template, later ones fall through to the next matching rule.
    A file whose template name is already taken by an earlier file (or is
    in *reserved*) is dropped rather than overwriting it.
    """
    claimed: set[str] = set(reserved)
    result: list[str | None] = []

    for file_name in file_names:
        lowered = file_name.lower()
        matching = [rule for rule in ROLE_RULES if rule.fragment in lowered]
        available = [
            rule for rule in matching if not (rule.exclusive and rule.template in claimed)
        ]

        if available:
            target = available[0].template
        elif matching:
            logger.warning(
                "Dropping %s: the %s role is already taken", file_name, matching[0].template
            )
            result.append(None)
            continue
        else:
            target = _fallback_name(file_name)

        if target in claimed:
            logger.warning("Dropping %s: %s was already produced", file_name, target)
            result.append(None)
            continue

        claimed.add(target)
        result.append(target)

    return result
