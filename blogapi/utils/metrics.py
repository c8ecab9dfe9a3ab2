"""
Prometheus Metrics Module

Provides application metrics using the prometheus_client library.
Metrics are exposed at /metrics endpoint for Prometheus scraping.
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, Info, generate_latest
from starlette.requests import Request
from starlette.responses import Response

METRICS_PATH = "/metrics"

# =============================================================================
# Application Info
# =============================================================================

APP_INFO = Info("blog_app", "Blog API application information")


def set_app_info(version: str, environment: str) -> None:
    """Set application info labels."""
    APP_INFO.info({"version": version, "environment": environment})


# =============================================================================
# Database Metrics
# =============================================================================

DB_QUERIES_TOTAL = Counter(
    "blog_db_queries_total",
    "Total database queries executed",
    ["operation"],
)

DB_QUERY_DURATION_SECONDS = Histogram(
    "blog_db_query_duration_seconds",
    "Database query duration in seconds",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

# =============================================================================
# GraphQL Metrics
# =============================================================================

GRAPHQL_OPERATIONS_TOTAL = Counter(
    "blog_graphql_operations_total",
    "Total GraphQL operations executed",
    ["operation", "status"],
)


async def metrics_endpoint(request: Request) -> Response:
    """Expose all registered metrics in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
