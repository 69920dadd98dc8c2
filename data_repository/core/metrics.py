"""
Custom Prometheus metrics for the repository layer.
"""
from prometheus_client import Counter, Histogram

# A histogram to track the latency of delegated client calls.
REPOSITORY_OPERATION_DURATION = Histogram(
    "data_repository_operation_duration_seconds",
    "Duration of data client calls made through the repository in seconds",
    ["item_type", "operation"]
)

# A counter of repository calls, labeled by outcome.
REPOSITORY_OPERATIONS_TOTAL = Counter(
    "data_repository_operations_total",
    "Total number of repository operations",
    ["item_type", "operation", "outcome"] # outcome can be "success", "transport_error", "format_error" or "error"
)

# A counter for change notifications handed to the broadcast channel.
ENTITY_UPDATES_PUBLISHED = Counter(
    "data_repository_entity_updates_published_total",
    "Total number of entity update notifications published",
    ["item_type"]
)
