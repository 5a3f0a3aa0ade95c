"""Telemetry module for tracking request performance with PostHog."""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "dj-requests-service"


@dataclass
class StepResult:
    """Result of a tracked step."""

    duration_ms: float
    success: bool = True
    error_type: str | None = None


@dataclass
class RequestTelemetry:
    """Tracks performance metrics for a single search or song request."""

    operation: str
    steps: dict[str, StepResult] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)

    @contextmanager
    def track_step(self, step_name: str):
        """Context manager to time a step.

        Failures are recorded with their exception type and re-raised.

        Args:
            step_name: Name of the step being tracked
        """
        step_start = time.perf_counter()
        error_type = None

        try:
            yield
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            self.steps[step_name] = StepResult(
                duration_ms=(time.perf_counter() - step_start) * 1000,
                success=error_type is None,
                error_type=error_type,
            )

    def get_total_duration_ms(self) -> float:
        """Get total elapsed time since telemetry was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def get_step_timings(self) -> dict[str, float]:
        """Get timing for each step in milliseconds."""
        return {f"{name}_ms": step.duration_ms for name, step in self.steps.items()}

    def send_to_posthog(
        self,
        posthog_client: Posthog,
        extra_properties: dict[str, Any] | None = None,
    ) -> None:
        """Send step events and a summary event to PostHog.

        Args:
            posthog_client: PostHog client instance
            extra_properties: Additional properties to include in the completed event
        """
        extra_properties = extra_properties or {}

        for step_name, step_result in self.steps.items():
            posthog_client.capture(
                distinct_id=DISTINCT_ID,
                event=step_name,
                properties={
                    "operation": self.operation,
                    "duration_ms": round(step_result.duration_ms, 2),
                    "success": step_result.success,
                    "error_type": step_result.error_type,
                },
            )

        posthog_client.capture(
            distinct_id=DISTINCT_ID,
            event=f"{self.operation}_completed",
            properties={
                "total_duration_ms": round(self.get_total_duration_ms(), 2),
                "steps": self.get_step_timings(),
                **extra_properties,
            },
        )

        logger.debug(
            f"Sent telemetry: {self.operation}, {len(self.steps)} steps, "
            f"total {self.get_total_duration_ms():.1f}ms"
        )
