"""Shared test helpers: in-memory DB seeding, payload builders, mailer doubles."""

import json
import os
import sys
import threading
from pathlib import Path
from typing import Any

# In-memory DB before any drop_orders import
os.environ.setdefault("DATABASE_URL", "sqlite://")
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from drop_orders.db import get_session, init_db, reset_db
from drop_orders.db.datastore import SqlDatastore
from drop_orders.db.models import Drop, Member, Profile
from drop_orders.errors import DatastoreError, MailerError
from drop_orders.mailer.models import OutboundEmail
from drop_orders.webhook.signature import compute_signature

TEST_DB_URL = "sqlite://"
TEST_SECRET = "shpss_test_secret"


def fresh_db() -> SqlDatastore:
    """Point the engine at the shared in-memory DB, wipe it, return a datastore."""
    init_db(TEST_DB_URL)
    reset_db()
    return SqlDatastore(TEST_DB_URL)


def seed_drop(
    shopify_product_id: str | None,
    quantity_available: int = 20,
    quantity_sold: int = 0,
    title: str = "Barolo Riserva 2016",
    drop_id: str | None = None,
) -> str:
    with get_session() as session:
        kwargs: dict[str, Any] = {}
        if drop_id:
            kwargs["id"] = drop_id
        drop = Drop(
            title_en=title,
            title_nl=title,
            price=100.0,
            quantity_available=quantity_available,
            quantity_sold=quantity_sold,
            shopify_product_id=shopify_product_id,
            **kwargs,
        )
        session.add(drop)
        session.flush()
        return drop.id


def seed_profile(email: str) -> str:
    with get_session() as session:
        profile = Profile(email=email)
        session.add(profile)
        session.flush()
        return profile.id


def seed_member(email: str) -> str:
    """Profile + membership; returns the member id."""
    profile_id = seed_profile(email)
    with get_session() as session:
        member = Member(user_id=profile_id)
        session.add(member)
        session.flush()
        return member.id


def line_item(product_id: Any = 111, variant_id: Any = 999, quantity: int = 1, title: str = "Item") -> dict:
    return {"product_id": product_id, "variant_id": variant_id, "quantity": quantity, "title": title}


def order_payload(
    line_items: list[dict],
    order_id: int = 5550001,
    order_number: int = 1001,
    email: str | None = "member@example.com",
) -> dict:
    return {
        "id": order_id,
        "order_number": order_number,
        "email": email,
        "created_at": "2026-03-01T12:00:00+01:00",
        "financial_status": "paid",
        "line_items": line_items,
    }


def encode(payload: dict) -> bytes:
    return json.dumps(payload).encode("utf-8")


def signed_headers(raw_body: bytes, topic: str = "orders/create", secret: str = TEST_SECRET) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "X-Shopify-Topic": topic,
        "X-Shopify-Hmac-Sha256": compute_signature(raw_body, secret),
        "X-Shopify-Shop-Domain": "rare-goods.myshopify.com",
    }


class RecordingMailer:
    """Keeps sent emails in memory."""

    def __init__(self):
        self.sent: list[OutboundEmail] = []

    async def send(self, email: OutboundEmail) -> str:
        self.sent.append(email)
        return f"rec_{len(self.sent)}"


class FailingMailer:
    """Every send fails like a provider outage."""

    def __init__(self):
        self.attempts = 0

    async def send(self, email: OutboundEmail) -> str:
        self.attempts += 1
        raise MailerError("provider unavailable", status_code=503)


class FailingUpdateDatastore(SqlDatastore):
    """SqlDatastore whose sold-quantity update fails for the given drop ids."""

    def __init__(self, failing_drop_ids: set[str]):
        super().__init__(TEST_DB_URL)
        self.failing_drop_ids = failing_drop_ids

    def increment_quantity_sold(self, drop_id: str, quantity: int):
        if drop_id in self.failing_drop_ids:
            raise DatastoreError("increment_quantity_sold: connection reset")
        return super().increment_quantity_sold(drop_id, quantity)


class BrokenLookupDatastore(SqlDatastore):
    """SqlDatastore whose profile lookup always errors."""

    def __init__(self):
        super().__init__(TEST_DB_URL)

    def find_profile_id_by_email(self, email: str) -> str | None:
        raise DatastoreError("find_profile_id_by_email: timeout")


class ThreadRecordingDatastore(SqlDatastore):
    """SqlDatastore that notes which thread each call ran on."""

    def __init__(self):
        super().__init__(TEST_DB_URL)
        self.calls: list[tuple[str, int]] = []

    def _note(self, name: str) -> None:
        self.calls.append((name, threading.get_ident()))

    def find_drop_by_reference(self, reference: str):
        self._note("find_drop_by_reference")
        return super().find_drop_by_reference(reference)

    def increment_quantity_sold(self, drop_id: str, quantity: int):
        self._note("increment_quantity_sold")
        return super().increment_quantity_sold(drop_id, quantity)

    def find_profile_id_by_email(self, email: str) -> str | None:
        self._note("find_profile_id_by_email")
        return super().find_profile_id_by_email(email)

    def insert_participation(self, member_id: str, drop_id: str, quantity: int, order_ref: str):
        self._note("insert_participation")
        return super().insert_participation(member_id, drop_id, quantity, order_ref)
