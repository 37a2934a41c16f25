"""Utility modules."""

from drop_orders.utils.logger import delivery_context, get_logger

__all__ = [
    "get_logger",
    "delivery_context",
]
