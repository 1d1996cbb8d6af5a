from __future__ import annotations

import pytest

from theme_converter.domain.entities import RepositoryMetadata
from theme_converter.domain.value_objects import RepositoryRef


@pytest.fixture
def ref() -> RepositoryRef:
    return RepositoryRef(owner="acme", name="portfolio")


@pytest.fixture
def metadata() -> RepositoryMetadata:
    return RepositoryMetadata(
        name="portfolio",
        description="A personal portfolio site",
        home_url="https://github.com/acme/portfolio",
    )
