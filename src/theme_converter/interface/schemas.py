"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class ConvertRequest(BaseModel):
    """Request body for ``POST /convert``."""

    repository: str

    @field_validator("repository")
    @classmethod
    def _must_not_be_empty(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "repository must not be empty."
            raise ValueError(msg)
        return stripped


class ConvertResponse(BaseModel):
    """Successful response from ``POST /convert``.

    ``files`` maps each theme filename to its exact text content; the
    packager zips it as-is.
    """

    theme_name: str
    description: str
    files: dict[str, str]


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
