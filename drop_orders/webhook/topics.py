"""Event filter: which Shopify webhook topics trigger reconciliation."""

TOPIC_ORDERS_CREATE = "orders/create"
TOPIC_ORDERS_PAID = "orders/paid"

RELEVANT_TOPICS = frozenset({TOPIC_ORDERS_CREATE, TOPIC_ORDERS_PAID})


def is_relevant_topic(topic: str | None) -> bool:
    return (topic or "").strip().lower() in RELEVANT_TOPICS
