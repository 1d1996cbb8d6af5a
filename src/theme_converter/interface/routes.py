"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from theme_converter.domain.value_objects import RepositoryRef
from theme_converter.interface.dependencies import get_use_case
from theme_converter.interface.schemas import ConvertRequest, ConvertResponse
from theme_converter.services.convert_repo import ConvertRepoUseCase

router = APIRouter()


@router.post("/convert", response_model=ConvertResponse)
async def convert(
    body: ConvertRequest,
    use_case: ConvertRepoUseCase = Depends(get_use_case),
) -> ConvertResponse:
    """Convert a public GitHub repository into a WordPress theme."""
    ref = RepositoryRef.from_string(body.repository)
    result = await use_case.convert(ref)
    return ConvertResponse(
        theme_name=result.theme_name,
        description=result.description,
        files=result.artifacts,
    )
