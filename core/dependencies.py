"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends
from posthog import Posthog

from catalog.service import CatalogService
from config.settings import Settings, get_settings
from submission.service import FormSubmissionService

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_catalog_service: CatalogService | None = None
_form_service: FormSubmissionService | None = None
_posthog_client: Posthog | None = None


async def get_catalog_service(settings: Settings = Depends(get_settings)) -> CatalogService:
    """Get the iTunes catalog service.

    Args:
        settings: Application settings

    Returns:
        CatalogService: Shared catalog service instance
    """
    global _catalog_service

    if _catalog_service is None:
        _catalog_service = CatalogService(
            search_url=settings.itunes_search_url,
            user_agent=settings.user_agent,
            limit=settings.search_limit,
        )
        logger.info(f"Catalog service initialized (limit: {settings.search_limit})")

    return _catalog_service


async def close_catalog_service() -> None:
    """Close the catalog service and its HTTP client."""
    global _catalog_service
    if _catalog_service:
        await _catalog_service.close()
        _catalog_service = None


async def get_form_service(settings: Settings = Depends(get_settings)) -> FormSubmissionService:
    """Get the Google Form submission service.

    The service is created even when no form URL is configured; the
    misconfiguration is reported per request so the rest of the API keeps
    working.

    Args:
        settings: Application settings

    Returns:
        FormSubmissionService: Shared submission service instance
    """
    global _form_service

    if _form_service is None:
        _form_service = FormSubmissionService(settings.resolved_google_form_url)
        if _form_service.check_config():
            logger.info("Form submission service initialized")
        else:
            logger.warning(
                "Google Form URL missing or invalid - song requests will fail "
                "until GOOGLE_FORM_URL is set"
            )

    return _form_service


async def close_form_service() -> None:
    """Close the form submission service and its HTTP client."""
    global _form_service
    if _form_service:
        await _form_service.close()
        _form_service = None


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            project_api_key=settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
