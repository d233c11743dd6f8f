"""AI endpoints: pantry photo extraction and recipe suggestions."""

import typing as t

from fastapi import APIRouter, Depends, HTTPException, status

from shelfwise.core.auth import get_current_uid
from shelfwise.schemas.pantry import ExtractionResult, ExtractItemsRequest
from shelfwise.schemas.recipe import RecipeRequest, RecipeResponse
from shelfwise.services import (
    EmptyPantryError,
    GeminiClient,
    GeminiNotConfiguredError,
    GeminiResponseError,
    ImageTooLargeError,
    InvalidImageError,
    extract_pantry_items,
    generate_recipes,
)

ROUTER = APIRouter(prefix="/ai", tags=["AI"])


def get_gemini_client() -> GeminiClient:
    """Dependency providing a Gemini client built from the settings.

    Returns:
        GeminiClient: The client.
    """
    return GeminiClient()


def _gemini_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, GeminiNotConfiguredError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="AI features are not configured.",
        )
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


@ROUTER.post("/extract-items", response_model=ExtractionResult)
async def extract_items_from_image(
    request: ExtractItemsRequest,
    _uid: t.Annotated[str, Depends(get_current_uid)],
    client: t.Annotated[GeminiClient, Depends(get_gemini_client)],
) -> ExtractionResult:
    """Recognize pantry items in a photo.

    Args:
        request (ExtractItemsRequest): The photo and its MIME type.
        _uid (str): The authenticated caller.
        client (GeminiClient): The Gemini client.

    Returns:
        ExtractionResult: Recognized items and model warnings.
    """
    try:
        return await extract_pantry_items(
            client, request.image_base64, request.mime_type
        )
    except InvalidImageError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except ImageTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(e),
        ) from e
    except (GeminiNotConfiguredError, GeminiResponseError) as e:
        raise _gemini_http_error(e) from e


@ROUTER.post("/recipes", response_model=RecipeResponse)
async def suggest_recipes(
    request: RecipeRequest,
    _uid: t.Annotated[str, Depends(get_current_uid)],
    client: t.Annotated[GeminiClient, Depends(get_gemini_client)],
) -> RecipeResponse:
    """Suggest recipes that use up the pantry.

    Args:
        request (RecipeRequest): The pantry inventory.
        _uid (str): The authenticated caller.
        client (GeminiClient): The Gemini client.

    Returns:
        RecipeResponse: Up to three suggested recipes.
    """
    try:
        return RecipeResponse(
            recipes=await generate_recipes(client, request.pantry_items)
        )
    except EmptyPantryError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except (GeminiNotConfiguredError, GeminiResponseError) as e:
        raise _gemini_http_error(e) from e
