"""
Health and readiness endpoints.

``/health`` and ``/health/live`` never touch a dependency. ``/health/ready``
runs every registered probe (database, Redis when ``REDIS_URL`` is set, disk,
memory); any ``fail`` turns the answer into a 503. ``/health/startup``
reports whether the schema the API needs has been created.
"""

import logging
import os
import time
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import psutil
import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("users", "tables", "menu", "ingredients", "inventory", "recipes", "reservations", "orders")


class HealthStatus(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _component(state: HealthStatus, kind: str, **details: Any) -> Dict[str, Any]:
    return {"status": state.value, "componentType": kind, **details, "time": _timestamp()}


def _timed(kind: str, probe: Callable[[], Any], on_error: HealthStatus) -> Dict[str, Any]:
    started = time.perf_counter()
    try:
        probe()
    except Exception as exc:
        return _component(on_error, kind, output=str(exc))
    elapsed = (time.perf_counter() - started) * 1000
    return _component(HealthStatus.PASS, kind, observedValue=f"{elapsed:.2f}", observedUnit="ms")


def _graded(value: float, fail_below: float, warn_below: float) -> HealthStatus:
    if value < fail_below:
        return HealthStatus.FAIL
    if value < warn_below:
        return HealthStatus.WARN
    return HealthStatus.PASS


def worst(checks: Dict[str, Dict[str, Any]]) -> HealthStatus:
    seen = {check["status"] for check in checks.values()}
    for candidate in (HealthStatus.FAIL, HealthStatus.WARN):
        if candidate.value in seen:
            return candidate
    return HealthStatus.PASS


class ServiceHealth:
    """Health router bound to the engine the API itself uses."""

    DISK_GB = (1, 5)
    MEMORY_MB = (100, 500)

    def __init__(self, service_name: str, version: str, engine_provider: Callable[[], Engine]):
        self.service_name = service_name
        self.version = version
        self.engine_provider = engine_provider
        self.started_at = time.time()
        self.readiness_runs = 0
        self.last_readiness: Optional[float] = None

    def probes(self) -> List[Tuple[str, Callable[[], Dict[str, Any]]]]:
        registered = [("database:connectivity", self.database)]
        redis_url = os.getenv("REDIS_URL")
        if redis_url:
            registered.append(("cache:connectivity", lambda: self.cache(redis_url)))
        registered += [("storage:disk_space", self.disk), ("system:memory", self.memory)]
        return registered

    def run_probes(self) -> Dict[str, Dict[str, Any]]:
        self.readiness_runs += 1
        self.last_readiness = time.time()
        return {name: probe() for name, probe in self.probes()}

    def database(self) -> Dict[str, Any]:
        def ping():
            with self.engine_provider().connect() as conn:
                conn.execute(text("SELECT 1")).scalar()

        result = _timed("datastore", ping, on_error=HealthStatus.FAIL)
        if result["status"] == HealthStatus.FAIL.value:
            logger.error(f"Database probe failed: {result['output']}")
        return result

    def cache(self, redis_url: str) -> Dict[str, Any]:
        # Nothing in the request path depends on Redis
        return _timed(
            "cache",
            lambda: redis.from_url(redis_url, socket_connect_timeout=1).ping(),
            on_error=HealthStatus.WARN,
        )

    def disk(self) -> Dict[str, Any]:
        free_gb = psutil.disk_usage('/').free / (1024 ** 3)
        return _component(_graded(free_gb, *self.DISK_GB), "system", observedValue=f"{free_gb:.2f}", observedUnit="GB")

    def memory(self) -> Dict[str, Any]:
        free_mb = psutil.virtual_memory().available / (1024 ** 2)
        return _component(_graded(free_mb, *self.MEMORY_MB), "system", observedValue=f"{free_mb:.2f}", observedUnit="MB")

    def schema(self) -> Dict[str, Any]:
        try:
            present = set(inspect(self.engine_provider()).get_table_names())
        except Exception as exc:
            return _component(HealthStatus.FAIL, "datastore", output=str(exc))
        missing = [name for name in REQUIRED_TABLES if name not in present]
        if missing:
            return _component(HealthStatus.FAIL, "datastore", output=f"Missing tables: {', '.join(missing)}")
        migrated = "alembic_version" in present
        return _component(
            HealthStatus.PASS if migrated else HealthStatus.WARN,
            "datastore",
            output=None if migrated else "Schema created without alembic",
        )

    def create_health_router(self) -> APIRouter:
        router = APIRouter(tags=["health"])

        @router.get("/health")
        def health() -> Dict[str, Any]:
            return {
                "status": HealthStatus.PASS.value,
                "service": self.service_name,
                "version": self.version,
                "releaseId": os.getenv("RELEASE_ID", "unknown"),
                "timestamp": _timestamp(),
            }

        @router.get("/health/live")
        def live() -> Dict[str, Any]:
            return {"status": "alive"}

        @router.get("/health/ready")
        def ready() -> JSONResponse:
            checks = self.run_probes()
            overall = worst(checks)
            code = status.HTTP_503_SERVICE_UNAVAILABLE if overall is HealthStatus.FAIL else status.HTTP_200_OK
            return JSONResponse(status_code=code, content={
                "status": overall.value,
                "serviceId": self.service_name,
                "version": self.version,
                "checks": checks,
                "timestamp": _timestamp(),
            })

        @router.get("/health/startup")
        def startup() -> JSONResponse:
            checks = {"database:schema": self.schema()}
            if worst(checks) is HealthStatus.FAIL:
                return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                                    content={"status": "starting", "checks": checks})
            return JSONResponse(content={"status": "started", "checks": checks})

        @router.get("/metrics")
        def metrics() -> Dict[str, Any]:
            process = psutil.Process()
            with process.oneshot():
                memory = process.memory_info()
                system = {
                    "memory_rss_bytes": memory.rss,
                    "memory_vms_bytes": memory.vms,
                    "cpu_percent": process.cpu_percent(),
                    "num_threads": process.num_threads(),
                }
            return {
                "service": self.service_name,
                "version": self.version,
                "uptime_seconds": round(time.time() - self.started_at, 3),
                "readiness_runs": self.readiness_runs,
                "last_readiness": self.last_readiness,
                "system": system,
                "timestamp": _timestamp(),
            }

        return router
