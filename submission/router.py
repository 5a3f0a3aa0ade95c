"""Song request API router."""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from posthog import Posthog
from pydantic import ValidationError as PayloadValidationError

from core.dependencies import get_form_service, get_posthog_client
from core.exceptions import RequestServiceError
from core.sentry import capture_exception
from core.telemetry import RequestTelemetry
from submission.models import SongRequestAccepted, SongRequestBody
from submission.service import FormSubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["request"])

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST,OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def _json_response(status_code: int, payload: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=CORS_HEADERS)


@router.options("/request", status_code=204, summary="CORS preflight for song requests")
async def request_preflight() -> Response:
    """Answer a cross-origin preflight."""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.api_route(
    "/request",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def request_method_not_allowed() -> JSONResponse:
    """Only POST submits a request."""
    response = _json_response(405, {"error": "Method not allowed"})
    response.headers["allow"] = "POST, OPTIONS"
    return response


@router.post(
    "/request",
    response_model=SongRequestAccepted,
    summary="Submit a song request to the DJ's form",
    description="""
    Forwards a song request to the configured Google Form.

    The body is `{song: {id, title, artist, album?, artworkUrl?, previewUrl?},
    requester?: {name?, dedication?, contact?}}`. Exactly one submission is
    attempted; failures are reported, never retried.
    """,
    responses={
        200: {"description": "Request submitted"},
        400: {"description": "Missing body, invalid JSON, or missing song information"},
        500: {"description": "Google Form URL missing or invalid"},
        502: {"description": "Google Form unreachable or returned an error status"},
    },
)
async def submit_request(
    request: Request,
    service: FormSubmissionService = Depends(get_form_service),
    posthog_client: Posthog | None = Depends(get_posthog_client),
) -> JSONResponse:
    """Validate the request body and submit it to the form."""
    raw_body = await request.body()
    if not raw_body:
        return _json_response(400, {"error": "Missing request body"})

    try:
        payload = SongRequestBody.model_validate(json.loads(raw_body))
    except (ValueError, PayloadValidationError):
        return _json_response(400, {"error": "Invalid JSON payload"})

    telemetry = RequestTelemetry(operation="request")
    status_code = 200

    try:
        with telemetry.track_step("form_submit"):
            message = await service.submit(payload.song, payload.requester)
    except RequestServiceError as e:
        status_code = e.status_code
        logger.warning(f"Song request failed ({status_code}): {e.message}")
        return _json_response(status_code, {"error": e.message})
    except Exception as e:
        status_code = 500
        logger.error(f"Song request failed unexpectedly: {e}")
        track_id = payload.song.id if payload.song else None
        capture_exception(e, "request", {"track_id": track_id})
        return _json_response(status_code, {"error": "Internal server error"})
    finally:
        if posthog_client:
            telemetry.send_to_posthog(
                posthog_client,
                {
                    "status_code": status_code,
                    "had_requester_name": bool(payload.requester and payload.requester.name),
                    "had_dedication": bool(payload.requester and payload.requester.dedication),
                },
            )

    return _json_response(200, SongRequestAccepted(message=message).model_dump())
