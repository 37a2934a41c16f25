"""Tests for per-delivery log context."""

import unittest

import support  # noqa: F401

import structlog

from drop_orders.utils.logger import delivery_context


class TestDeliveryContext(unittest.TestCase):
    def setUp(self):
        structlog.contextvars.clear_contextvars()

    def test_fields_bound_inside_block_only(self):
        with delivery_context(topic="orders/create", shop_domain=None):
            self.assertEqual(structlog.contextvars.get_contextvars(), {"topic": "orders/create"})
        self.assertEqual(structlog.contextvars.get_contextvars(), {})

    def test_nested_blocks_restore_outer_values(self):
        with delivery_context(order_id="1"):
            with delivery_context(order_id="2", topic="orders/paid"):
                self.assertEqual(structlog.contextvars.get_contextvars()["order_id"], "2")
            self.assertEqual(structlog.contextvars.get_contextvars(), {"order_id": "1"})

    def test_unwinds_on_error(self):
        with self.assertRaises(RuntimeError):
            with delivery_context(order_id="1"):
                raise RuntimeError("boom")
        self.assertEqual(structlog.contextvars.get_contextvars(), {})


if __name__ == "__main__":
    unittest.main()
