from prometheus_client import Counter, Histogram

# Business Metrics
ecomm_checkout_total = Counter(
    "ecomm_checkout_total",
    "Total checkouts processed",
    ["status"] # Labels: 'success', 'failed'
)

ecomm_checkout_duration_seconds = Histogram(
    "ecomm_checkout_duration_seconds",
    "Checkout duration in seconds"
)

ecomm_order_status_transitions_total = Counter(
    "ecomm_order_status_transitions_total",
    "Order fulfillment status changes",
    ["from_status", "to_status"]
)

ecomm_notifications_total = Counter(
    "ecomm_notifications_total",
    "Customer e-mail notifications by outcome",
    ["kind", "outcome"] # outcome: 'sent', 'skipped', 'failed'
)
