"""Prometheus metrics instrumentation for the translation pipeline.

Exposes metrics for monitoring latency, throughput, and error rates
of live translation and speech playback. Metrics are exposed via HTTP
on the port configured by METRICS_PORT when METRICS_ENABLED is set.

Metrics exported:
- translation_latency_seconds: Histogram of streaming translation time
- translations_total: Counter of translation requests by outcome
- speech_requests_total: Counter of speech playback requests by outcome
- live_sessions: Gauge of currently connected live translation sessions

Usage:
    from lingosync.services.metrics import start_metrics_server, translations_total

    start_metrics_server(port=8001)
    translations_total.labels(status='success', language_pair='auto-es').inc()
"""

from prometheus_client import Histogram, Counter, Gauge, start_http_server
import logging

logger = logging.getLogger(__name__)

translation_latency = Histogram(
    'translation_latency_seconds',
    'Time from request start to end of stream',
    labelnames=['language_pair']
)

translations_total = Counter(
    'translations_total',
    'Total translation requests',
    labelnames=['status', 'language_pair']  # status: success, error, cancelled, superseded
)

speech_requests = Counter(
    'speech_requests_total',
    'Total speech playback requests',
    labelnames=['status']  # status: success, error
)

live_sessions_gauge = Gauge(
    'live_sessions',
    'Number of currently connected live translation sessions'
)


def start_metrics_server(port: int = 8001):
    """Start Prometheus metrics HTTP server."""
    try:
        start_http_server(port)
        logger.info(f"✅ Metrics server started on port {port}")
    except Exception as e:
        logger.error(f"❌ Failed to start metrics server: {e}")
