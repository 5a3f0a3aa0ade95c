"""Health check router with real dependency checks."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog.service import CatalogService
from config.settings import Settings, get_settings
from core.dependencies import get_catalog_service, get_form_service
from submission.service import FormSubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 3.0
CORE_SERVICES = {"form"}


async def _check_form(form_service: FormSubmissionService) -> str:
    """Check the Google Form link can be turned into a submission endpoint."""
    return "ok" if form_service.check_config() else "misconfigured"


async def _check_catalog(catalog_service: CatalogService) -> str:
    """Ping the iTunes Search API via the service's own client."""
    return "ok" if await catalog_service.check_api() else "error"


async def _run_check(coro) -> str:
    """Run a single health check with a timeout."""
    try:
        return await asyncio.wait_for(coro, timeout=CHECK_TIMEOUT)
    except TimeoutError:
        return "timeout"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Service is healthy or degraded"},
        503: {"description": "Service is unhealthy (form not configured)"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    form_service: FormSubmissionService = Depends(get_form_service),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    """Health check: form configuration plus catalog connectivity."""
    results = await asyncio.gather(
        _run_check(_check_form(form_service)),
        _run_check(_check_catalog(catalog_service)),
    )

    services = {
        "form": results[0],
        "catalog": results[1],
    }

    core_ok = all(services[s] == "ok" for s in CORE_SERVICES)
    all_ok = all(v == "ok" for v in services.values())

    if all_ok:
        status = "healthy"
    elif core_ok:
        status = "degraded"
    else:
        status = "unhealthy"
        logger.warning(f"Health check unhealthy: {services}")

    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
    }

    status_code = 200 if status in ("healthy", "degraded") else 503
    return JSONResponse(content=body, status_code=status_code)
