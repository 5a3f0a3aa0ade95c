"""FastAPI router for catalog search."""

import logging

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from posthog import Posthog

from catalog.models import SearchResponse
from catalog.service import CatalogService
from core.dependencies import get_catalog_service, get_posthog_client
from core.exceptions import RequestServiceError
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog"])

SEARCH_HEADERS = {
    "cache-control": "public, max-age=60",
    "access-control-allow-origin": "*",
}


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_unset=True,
    summary="Search the music catalog for songs",
    responses={
        200: {"description": "Tracks returned (possibly empty, with a message)"},
        400: {"description": "Missing search term"},
        502: {"description": "Catalog unreachable or returned an error status"},
        503: {"description": "Catalog rate limit reached"},
    },
)
async def search_tracks(
    response: Response,
    term: str | None = Query(None, description="Free-text search term"),
    service: CatalogService = Depends(get_catalog_service),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Search for songs and return normalized tracks."""
    telemetry = RequestTelemetry(operation="search")
    status_code = 200

    try:
        with telemetry.track_step("catalog_search"):
            result = await service.search(term or "")
    except RequestServiceError as e:
        status_code = e.status_code
        logger.warning(f"Search failed ({status_code}): {e.message}")
        return JSONResponse(
            status_code=status_code,
            content={"tracks": [], "error": e.message},
            headers=SEARCH_HEADERS,
        )
    except Exception as e:
        status_code = 500
        logger.error(f"Search failed unexpectedly: {e}")
        capture_exception(e, "search", {"term": term})
        return JSONResponse(
            status_code=status_code,
            content={"tracks": [], "error": "Internal server error"},
            headers=SEARCH_HEADERS,
        )
    finally:
        if posthog_client:
            telemetry.send_to_posthog(posthog_client, {"status_code": status_code})

    response.headers.update(SEARCH_HEADERS)
    return result
