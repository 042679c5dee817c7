"""
Monitoring Module - Logging and metrics tracking for AI operations.

Usage:
    from app.ai.monitoring import ai_monitor

    ai_monitor.track_request(request_id, prompt, provider, model, kind="text")
    ai_monitor.track_response(request_id, response)

    stats = ai_monitor.get_stats()
"""

from app.ai.monitoring.monitor import AIMonitor, AggregatedMetrics, RequestMetrics, ai_monitor

__all__ = [
    "AIMonitor",
    "AggregatedMetrics",
    "RequestMetrics",
    "ai_monitor",
]
