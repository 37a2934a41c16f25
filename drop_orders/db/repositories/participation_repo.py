"""Participation repository: existence check and insert keyed by (member, drop, order)."""

from sqlalchemy import select

from drop_orders.db import get_session
from drop_orders.db.models.membership import DropParticipation
from drop_orders.models.records import ParticipationRecord


def _to_record(row: DropParticipation) -> ParticipationRecord:
    return ParticipationRecord(
        id=row.id,
        member_id=row.member_id,
        drop_id=row.drop_id,
        purchased=row.purchased,
        quantity=row.quantity,
        shopify_order_id=row.shopify_order_id,
        created_at=row.created_at,
    )


def exists(member_id: str, drop_id: str, shopify_order_id: str) -> bool:
    with get_session() as session:
        q = (
            select(DropParticipation.id)
            .where(DropParticipation.member_id == member_id)
            .where(DropParticipation.drop_id == drop_id)
            .where(DropParticipation.shopify_order_id == shopify_order_id)
        )
        return session.scalars(q).first() is not None


def insert_purchase(
    member_id: str,
    drop_id: str,
    quantity: int,
    shopify_order_id: str,
) -> ParticipationRecord:
    """Insert a purchased=True row. Raises IntegrityError on a duplicate (member, drop, order)."""
    with get_session() as session:
        row = DropParticipation(
            member_id=member_id,
            drop_id=drop_id,
            purchased=True,
            quantity=quantity,
            shopify_order_id=shopify_order_id,
        )
        session.add(row)
        session.flush()
        return _to_record(row)


def list_for_member(member_id: str) -> list[ParticipationRecord]:
    with get_session() as session:
        rows = session.scalars(
            select(DropParticipation)
            .where(DropParticipation.member_id == member_id)
            .order_by(DropParticipation.created_at)
        ).all()
        return [_to_record(r) for r in rows]
