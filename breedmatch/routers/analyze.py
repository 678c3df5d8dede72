"""
Photo analysis endpoint.

Matches the uploaded photo to a breed, then looks up a real photo of that
breed. The photo is a nice-to-have: when it can't be found the response
still succeeds with ``imageUrl: null``.
"""
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_http_client
from ..models import AnalyzeRequest, AnalyzeResponse, ErrorResponse
from ..services.data_url import InvalidDataURL, parse_data_url
from ..services.images import resolve_image
from ..services.llm import BreedMatchError, match_breed
from ..utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["analyze"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def analyze(
    request: AnalyzeRequest,
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> AnalyzeResponse:
    """Find the breed the person in the photo most resembles."""
    try:
        image = parse_data_url(request.image)
    except InvalidDataURL as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "VALIDATION", "message": str(e)},
        )

    try:
        match = await match_breed(image, request.mode)
    except BreedMatchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "UPSTREAM", "message": str(e)},
        )

    image_url = await resolve_image(request.mode, match.breed, client)
    logger.info(
        f"Matched {request.mode.value} breed {match.breed!r} "
        f"({'with' if image_url else 'without'} photo)"
    )

    return AnalyzeResponse(**match.model_dump(by_alias=False), image_url=image_url)
