"""
Health Check Utilities.

Probes for the health endpoints and the system-health report. Every probe
is time-boxed and returns a HealthCheckResult instead of raising.

Usage:
    from shared.utils.health import health_check_with_timeout, aggregate_health_checks

    @health_check_with_timeout(timeout=3.0, component="database")
    async def check_database_health():
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"dialect": "sqlite"}

    report = await aggregate_health_checks([check_database_health()])
    # {"status": "healthy", "components": {"database": {...}}}
"""

from __future__ import annotations

import asyncio
import functools
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Coroutine

from shared.config.logging import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class HealthCheckResult:
    """Outcome of one dependency probe."""
    status: HealthStatus
    component: str
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {"status": self.status.value}
        if self.latency_ms is not None:
            result["latencyMs"] = round(self.latency_ms, 2)
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = self.details
        return result


def health_check_with_timeout(
    timeout: float = 5.0,
    component: str | None = None,
):
    """
    Decorator for async probes with timeout protection.

    The wrapped coroutine may return a dict of details. Timeouts and
    exceptions are logged and reported as UNHEALTHY.

    Args:
        timeout: Maximum time to wait for the probe (seconds).
        component: Component name (defaults to the function name without
            the ``check_`` prefix and ``_health`` suffix).
    """
    def decorator(
        func: Callable[..., Coroutine[Any, Any, dict[str, Any] | None]]
    ) -> Callable[..., Coroutine[Any, Any, HealthCheckResult]]:
        comp_name = component or func.__name__.replace("check_", "").replace("_health", "")

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> HealthCheckResult:
            start_time = time.perf_counter()
            try:
                result = await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)
            except asyncio.TimeoutError:
                latency_ms = (time.perf_counter() - start_time) * 1000
                logger.warning("Health check timeout", component=comp_name, timeout=timeout)
                return HealthCheckResult(
                    status=HealthStatus.UNHEALTHY,
                    component=comp_name,
                    latency_ms=latency_ms,
                    error=f"timeout after {timeout}s",
                )
            except Exception as e:
                latency_ms = (time.perf_counter() - start_time) * 1000
                logger.warning("Health check failed", component=comp_name, error=str(e))
                return HealthCheckResult(
                    status=HealthStatus.UNHEALTHY,
                    component=comp_name,
                    latency_ms=latency_ms,
                    error=str(e),
                )

            return HealthCheckResult(
                status=HealthStatus.HEALTHY,
                component=comp_name,
                latency_ms=(time.perf_counter() - start_time) * 1000,
                details=result if isinstance(result, dict) else {},
            )

        return wrapper
    return decorator


async def aggregate_health_checks(
    checks: list[Coroutine[Any, Any, HealthCheckResult]],
) -> dict[str, Any]:
    """
    Run probes concurrently and fold them into one report.

    Overall status is ``healthy`` only when every component is healthy,
    otherwise ``degraded``.
    """
    results = await asyncio.gather(*checks)

    components = {result.component: result.to_dict() for result in results}
    all_healthy = all(result.healthy for result in results)

    return {
        "status": HealthStatus.HEALTHY.value if all_healthy else HealthStatus.DEGRADED.value,
        "components": components,
    }
