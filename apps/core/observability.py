"""
Observability utilities for the LCDB content backend.

In-process metrics and health checks.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from typing import Any, Callable, Dict, List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Metrics Collection
# =============================================================================

class MetricsCollector:
    """
    Collect and aggregate counters and histograms.

    Thread-safe singleton for application-wide metrics.
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._counters: Dict[str, float] = {}
                cls._instance._histograms: Dict[str, List[float]] = {}
        return cls._instance

    def _make_key(self, name: str, tags: Optional[Dict[str, str]] = None) -> str:
        if not tags:
            return name
        tag_str = ",".join(f"{k}={v}" for k, v in sorted(tags.items()))
        return f"{name}[{tag_str}]"

    def increment(self, name: str, value: float = 1.0, tags: Optional[Dict[str, str]] = None) -> None:
        key = self._make_key(name, tags)
        with self._lock:
            self._counters[key] = self._counters.get(key, 0) + value

    def histogram(self, name: str, value: float, tags: Optional[Dict[str, str]] = None) -> None:
        key = self._make_key(name, tags)
        with self._lock:
            values = self._histograms.setdefault(key, [])
            values.append(value)
            # Keep only recent values
            del values[:-1000]

    @contextmanager
    def timer(self, name: str, tags: Optional[Dict[str, str]] = None):
        """Record the duration of the enclosed block as ``<name>_duration_ms``."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            self.histogram(f"{name}_duration_ms", duration_ms, tags)

    def get_counter(self, name: str, tags: Optional[Dict[str, str]] = None) -> float:
        return self._counters.get(self._make_key(name, tags), 0)

    def _histogram_stats(self, values: List[float]) -> Dict[str, float]:
        if not values:
            return {"count": 0, "min": 0, "max": 0, "avg": 0, "p95": 0}
        sorted_values = sorted(values)
        count = len(sorted_values)
        return {
            "count": count,
            "min": sorted_values[0],
            "max": sorted_values[-1],
            "avg": sum(sorted_values) / count,
            "p95": sorted_values[int(count * 0.95)] if count > 1 else sorted_values[0],
        }

    def get_all_metrics(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "histograms": {
                    key: self._histogram_stats(values)
                    for key, values in self._histograms.items()
                },
                "timestamp": _utcnow().isoformat(),
            }

    def clear(self) -> None:
        """Clear all metrics (useful for testing)."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()


# Global metrics instance
metrics = MetricsCollector()


# =============================================================================
# Health Checks
# =============================================================================

class HealthStatus(Enum):
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthCheckResult:
    """Result of a health check."""
    name: str
    status: HealthStatus
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0


class HealthChecker:
    """
    Health check registry and executor.
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._checks: Dict[str, Callable[[], HealthCheckResult]] = {}
        return cls._instance

    def register(self, name: str, check_fn: Callable[[], HealthCheckResult]) -> None:
        self._checks[name] = check_fn

    def check(self, name: str) -> HealthCheckResult:
        """Run a specific health check."""
        if name not in self._checks:
            return HealthCheckResult(
                name=name,
                status=HealthStatus.UNHEALTHY,
                message=f"Unknown check: {name}",
            )

        start = time.perf_counter()
        try:
            result = self._checks[name]()
        except Exception as e:
            result = HealthCheckResult(
                name=name,
                status=HealthStatus.UNHEALTHY,
                message=str(e),
            )
        result.duration_ms = (time.perf_counter() - start) * 1000
        return result

    def check_all(self) -> Dict[str, Any]:
        """Run all health checks and fold them into an overall status."""
        results = {}
        overall_status = HealthStatus.HEALTHY

        for name in self._checks:
            result = self.check(name)
            results[name] = {
                "status": result.status.value,
                "message": result.message,
                "details": result.details,
                "duration_ms": result.duration_ms,
            }

            if result.status == HealthStatus.UNHEALTHY:
                overall_status = HealthStatus.UNHEALTHY
            elif result.status == HealthStatus.DEGRADED and overall_status != HealthStatus.UNHEALTHY:
                overall_status = HealthStatus.DEGRADED

        return {
            "status": overall_status.value,
            "checks": results,
            "timestamp": _utcnow().isoformat(),
        }


# Global health checker instance
health_checker = HealthChecker()


def check_database() -> HealthCheckResult:
    """Check database connectivity."""
    from django.db import connection

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
        return HealthCheckResult(
            name="database",
            status=HealthStatus.HEALTHY,
            message="Database connection successful",
        )
    except Exception as e:
        return HealthCheckResult(
            name="database",
            status=HealthStatus.UNHEALTHY,
            message=f"Database error: {e}",
        )


def check_cache() -> HealthCheckResult:
    """Check the cache backend (Redis in deployed environments)."""
    from django.core.cache import cache

    try:
        cache.set("health_check", "ok", 10)
        if cache.get("health_check") == "ok":
            return HealthCheckResult(
                name="cache",
                status=HealthStatus.HEALTHY,
                message="Cache connection successful",
            )
        return HealthCheckResult(
            name="cache",
            status=HealthStatus.DEGRADED,
            message="Cache get/set mismatch",
        )
    except Exception as e:
        return HealthCheckResult(
            name="cache",
            status=HealthStatus.UNHEALTHY,
            message=f"Cache error: {e}",
        )


def register_default_checks():
    """Register default health checks."""
    health_checker.register("database", check_database)
    health_checker.register("cache", check_cache)
