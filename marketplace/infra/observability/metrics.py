from prometheus_client import Counter, Histogram


# Order Metrics
orders_placed_total = Counter("marketplace_orders_placed_total", "Total orders placed", ["status"])
order_value = Histogram(
    "marketplace_order_value",
    "Order value distribution",
    buckets=[10_000, 50_000, 100_000, 250_000, 500_000, 1_000_000, 5_000_000, float("inf")],
)
order_status_transitions_total = Counter(
    "marketplace_order_status_transitions_total", "Order status transitions", ["from_status", "to_status"]
)

# Stock Metrics
stock_conflicts_total = Counter("marketplace_stock_conflicts_total", "Orders rejected for insufficient stock")

# Review Metrics
reviews_submitted_total = Counter("marketplace_reviews_submitted_total", "Review submissions", ["status"])
