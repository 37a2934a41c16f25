"""Tests for the sign and process-order CLI commands."""

import json
import tempfile
import unittest
from pathlib import Path

from support import TEST_DB_URL, fresh_db, line_item, order_payload, seed_drop

from typer.testing import CliRunner

from drop_orders.cli import app
from drop_orders.db.repositories import drop_get_by_id
from drop_orders.webhook.signature import compute_signature

runner = CliRunner()


class TestSignCommand(unittest.TestCase):
    def test_prints_signature(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "order.json"
            path.write_bytes(b'{"id": 1}')
            result = runner.invoke(app, ["sign", str(path), "--secret", "s3cret"])
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertIn(compute_signature(b'{"id": 1}', "s3cret"), result.output)


class TestProcessOrderCommand(unittest.TestCase):
    def setUp(self):
        fresh_db()

    def _write(self, tmp: str, payload: dict) -> Path:
        path = Path(tmp) / "order.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_reconciles_order_file(self):
        drop_id = seed_drop("8001", quantity_sold=1)
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, order_payload([line_item(product_id=8001, quantity=2)]))
            result = runner.invoke(app, ["process-order", str(path), "--database-url", TEST_DB_URL])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(drop_get_by_id(drop_id).quantity_sold, 3)

    def test_exit_code_on_unmatched_items(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, order_payload([line_item(product_id=4242, quantity=1)]))
            result = runner.invoke(app, ["process-order", str(path), "--database-url", TEST_DB_URL])
        self.assertEqual(result.exit_code, 2, result.output)

    def test_invalid_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "order.json"
            path.write_text("not json", encoding="utf-8")
            result = runner.invoke(app, ["process-order", str(path), "--database-url", TEST_DB_URL])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
