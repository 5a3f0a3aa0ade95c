"""Sentry error tracking for the request service.

Requests carry personal details (requester name, dedication, contact), so
every event is scrubbed of them before it leaves the process.
"""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)

FILTERED = "[Filtered]"
REQUESTER_KEYS = ("requester", "requesterName", "dedication", "contact")


def _scrub_requester_details(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any]:
    """Replace requester details in captured request bodies and contexts."""
    request_data = event.get("request", {}).get("data")
    if isinstance(request_data, dict):
        for key in REQUESTER_KEYS:
            if key in request_data:
                request_data[key] = FILTERED

    for context in event.get("contexts", {}).values():
        if isinstance(context, dict):
            for key in REQUESTER_KEYS:
                if key in context:
                    context[key] = FILTERED

    return event


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    release: str | None = None,
) -> None:
    """Initialize Sentry with the FastAPI integration.

    Args:
        dsn: Sentry DSN. Nothing is initialized when empty.
        environment: Deployment environment name
        release: Optional release version string
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[FastApiIntegration()],
        traces_sample_rate=1.0,
        send_default_pii=False,
        before_send=_scrub_requester_details,
    )

    logger.info(f"Sentry initialized (environment: {environment})")


def add_upstream_breadcrumb(
    upstream: str,
    operation: str,
    data: dict[str, Any] | None = None,
    level: str = "info",
) -> None:
    """Record a call to (or failure of) the iTunes API or the Google Form.

    Args:
        upstream: "itunes" or "google_form"; used as the breadcrumb category
        operation: What was attempted, e.g. "search" or "submit"
        data: Non-personal context such as the search term or track id
        level: "info" for attempts, "error" for transport or status failures
    """
    sentry_sdk.add_breadcrumb(
        category=upstream,
        message=operation,
        data=data or {},
        level=level,
    )


def capture_exception(
    error: Exception,
    operation: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Report an unexpected failure of an API operation.

    The operation tag and context are set on a fresh scope so they do not
    leak into later events.

    Args:
        error: The exception to report
        operation: API operation that failed ("search", "request")
        context: Optional extra data attached as the "request" context
    """
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("operation", operation)
        if context:
            scope.set_context("request", context)
        sentry_sdk.capture_exception(error)
