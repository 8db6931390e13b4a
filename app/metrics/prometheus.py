# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "reviewer_requests_total",
    "Total HTTP requests to the reviewer service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "reviewer_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "reviewer_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
PRS_CREATED = Counter(
    "reviewer_pull_requests_created_total",
    "Total pull requests created",
)
PRS_MERGED = Counter(
    "reviewer_pull_requests_merged_total",
    "Total pull requests merged",
)
OPEN_PRS = Gauge(
    "reviewer_pull_requests_open",
    "Pull requests currently open",
)
REVIEWERS_ASSIGNED = Histogram(
    "reviewer_reviewers_per_pull_request",
    "Reviewers assigned at pull request creation",
    buckets=[0, 1, 2],
)
REASSIGNMENTS = Counter(
    "reviewer_reassignments_total",
    "Reviewer or author reassignments performed",
    ["reason"],
)
USERS_DEACTIVATED = Counter(
    "reviewer_users_deactivated_total",
    "Users deactivated through team bulk deactivation",
)
