"""
AI Monitor - Unified logging and metrics tracking.

One call tracks everything for a backend request:
- Structured JSON log line
- In-memory metrics aggregation

Usage:
    from app.ai.monitoring import ai_monitor

    ai_monitor.track_request(
        request_id="abc123",
        prompt="Generate a blog post about...",
        provider="gemini",
        model="gemini-2.5-flash",
        kind="text",
    )

    ai_monitor.track_response(request_id="abc123", response=ai_response)

    stats = ai_monitor.get_stats()
"""

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Any

from app.ai.providers.base import AIResponse, ImageResponse
from app.core.config import settings


# ---------------------------------------------------------------------------
# LOGGING SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger("writer.ai")
logger.setLevel(settings.LOG_LEVEL)

if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


# ---------------------------------------------------------------------------
# METRICS DATA CLASSES
# ---------------------------------------------------------------------------
@dataclass
class RequestMetrics:
    """Metrics for a single backend request."""
    request_id: str
    kind: str
    model: str
    prompt_tokens: int
    completion_tokens: int
    latency_ms: float
    success: bool
    failure_kind: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class AggregatedMetrics:
    """Aggregated metrics since startup (or the last reset)."""
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    total_tokens: int = 0
    total_latency_ms: float = 0.0
    requests_by_kind: Dict[str, int] = field(default_factory=dict)
    failures_by_kind: Dict[str, int] = field(default_factory=dict)

    @property
    def avg_latency_ms(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.total_latency_ms / self.total_requests

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100

    def to_dict(self) -> Dict:
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": f"{self.success_rate:.1f}%",
            "total_tokens": self.total_tokens,
            "avg_latency_ms": round(self.avg_latency_ms, 2),
            "requests_by_kind": dict(self.requests_by_kind),
            "failures_by_kind": dict(self.failures_by_kind),
        }


# ---------------------------------------------------------------------------
# UNIFIED AI MONITOR
# ---------------------------------------------------------------------------
class AIMonitor:
    """
    Unified AI monitoring: logging + metrics in one call.

    Each track_* method:
    1. Writes a structured JSON log line
    2. Updates in-memory metrics (response tracking only)
    """

    def __init__(self, max_history: int = 1000):
        self._logger = logger
        self._history: List[RequestMetrics] = []
        self._max_history = max_history
        self._lock = Lock()
        self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # MAIN TRACKING METHODS
    # -----------------------------------------------------------------------

    def track_request(
        self,
        request_id: str,
        prompt: str,
        provider: str,
        model: str,
        kind: str,
        username: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Track the start of a backend request."""
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "kind": kind,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": prompt[:100] + "..." if len(prompt) > 100 else prompt,
            "username": username,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"AI Request: {json.dumps(log_data)}")

    def track_response(
        self,
        request_id: str,
        response: AIResponse,
        kind: str = "text",
        failure_kind: Optional[str] = None,
    ) -> None:
        """Track a text response (logs + metrics in one call)."""
        self._record(
            RequestMetrics(
                request_id=request_id,
                kind=kind,
                model=response.model,
                prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
                completion_tokens=response.usage.completion_tokens if response.usage else 0,
                latency_ms=response.latency_ms,
                success=response.success and failure_kind is None,
                failure_kind=failure_kind,
            ),
            response_length=len(response.content or ""),
            error=response.error,
        )

    def track_image_response(
        self,
        request_id: str,
        response: ImageResponse,
        failure_kind: Optional[str] = None,
    ) -> None:
        """Track an image response (logs + metrics in one call)."""
        self._record(
            RequestMetrics(
                request_id=request_id,
                kind="image",
                model=response.model,
                prompt_tokens=0,
                completion_tokens=0,
                latency_ms=response.latency_ms,
                success=response.success and failure_kind is None,
                failure_kind=failure_kind,
            ),
            response_length=len(response.image_b64 or ""),
            error=response.error,
        )

    def track_error(
        self,
        request_id: str,
        error: str,
        stage: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Track an error outside a provider call."""
        log_data = {
            "event": "ai_error",
            "request_id": request_id,
            "error": error,
            "stage": stage,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.error(f"AI Error: {json.dumps(log_data)}")

    # -----------------------------------------------------------------------
    # METRICS METHODS
    # -----------------------------------------------------------------------

    def get_stats(self) -> AggregatedMetrics:
        """Get current aggregated statistics."""
        with self._lock:
            return self._aggregated

    def get_recent_requests(self, limit: int = 10) -> List[RequestMetrics]:
        """Get recent requests, newest first."""
        with self._lock:
            return list(reversed(self._history[-limit:]))

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._history = []
            self._aggregated = AggregatedMetrics()

    # -----------------------------------------------------------------------
    # PRIVATE METHODS
    # -----------------------------------------------------------------------

    def _record(self, metrics: RequestMetrics, response_length: int, error: Optional[str]) -> None:
        with self._lock:
            self._history.append(metrics)
            if len(self._history) > self._max_history:
                self._history = self._history[-self._max_history:]
            self._update_aggregated(metrics)

        log_data = {
            "event": "ai_response",
            "request_id": metrics.request_id,
            "kind": metrics.kind,
            "model": metrics.model,
            "success": metrics.success,
            "latency_ms": round(metrics.latency_ms, 2),
            "tokens": {
                "prompt": metrics.prompt_tokens,
                "completion": metrics.completion_tokens,
                "total": metrics.total_tokens,
            },
            "response_length": response_length,
            "timestamp": metrics.timestamp.isoformat(),
        }

        if metrics.failure_kind:
            log_data["failure_kind"] = metrics.failure_kind
        if error:
            log_data["error"] = error

        level = logging.INFO if metrics.success else logging.WARNING
        self._logger.log(level, f"AI Response: {json.dumps(log_data)}")

    def _update_aggregated(self, metrics: RequestMetrics) -> None:
        agg = self._aggregated
        agg.total_requests += 1

        if metrics.success:
            agg.successful_requests += 1
        else:
            agg.failed_requests += 1
            if metrics.failure_kind:
                agg.failures_by_kind[metrics.failure_kind] = \
                    agg.failures_by_kind.get(metrics.failure_kind, 0) + 1

        agg.total_tokens += metrics.total_tokens
        agg.total_latency_ms += metrics.latency_ms
        agg.requests_by_kind[metrics.kind] = agg.requests_by_kind.get(metrics.kind, 0) + 1


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_monitor = AIMonitor()
