"""Datastore interface consumed by the order pipeline, and its SQLAlchemy implementation."""

from contextlib import contextmanager
from typing import Iterator, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from drop_orders.db import init_db
from drop_orders.db import repositories as repos
from drop_orders.errors import DatastoreError, DuplicateParticipationError
from drop_orders.models.records import DropRecord, ParticipationRecord
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.db.datastore")


class Datastore(Protocol):
    """Table-style reads and writes on drops, profiles, members and drop_participation."""

    def find_drop_by_reference(self, reference: str) -> DropRecord | None:
        """Drop whose external product reference equals reference, or None."""
        ...

    def increment_quantity_sold(self, drop_id: str, quantity: int) -> DropRecord:
        """Atomically add quantity to the drop's sold counter; returns the updated drop."""
        ...

    def find_profile_id_by_email(self, email: str) -> str | None:
        ...

    def find_member_id_by_user(self, user_id: str) -> str | None:
        ...

    def has_participation(self, member_id: str, drop_id: str, order_ref: str) -> bool:
        ...

    def insert_participation(
        self, member_id: str, drop_id: str, quantity: int, order_ref: str
    ) -> ParticipationRecord:
        """Insert purchased=True. Raises DuplicateParticipationError if the triple exists."""
        ...


@contextmanager
def _translate_errors(
    operation: str,
    on_conflict: type[DatastoreError] = DatastoreError,
) -> Iterator[None]:
    try:
        yield
    except IntegrityError as e:
        raise on_conflict(f"{operation}: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.warning("datastore.error", operation=operation, error=str(e))
        raise DatastoreError(f"{operation}: {e}") from e


class SqlDatastore:
    """Datastore backed by the SQLAlchemy repositories."""

    def __init__(self, database_url: str | None = None):
        init_db(database_url)

    def find_drop_by_reference(self, reference: str) -> DropRecord | None:
        with _translate_errors("find_drop_by_reference"):
            return repos.drop_find_by_reference(reference)

    def increment_quantity_sold(self, drop_id: str, quantity: int) -> DropRecord:
        with _translate_errors("increment_quantity_sold"):
            drop = repos.drop_increment_quantity_sold(drop_id, quantity)
        if drop is None:
            raise DatastoreError(f"Drop {drop_id} no longer exists")
        return drop

    def find_profile_id_by_email(self, email: str) -> str | None:
        with _translate_errors("find_profile_id_by_email"):
            return repos.profile_find_by_email(email)

    def find_member_id_by_user(self, user_id: str) -> str | None:
        with _translate_errors("find_member_id_by_user"):
            return repos.member_find_by_user(user_id)

    def has_participation(self, member_id: str, drop_id: str, order_ref: str) -> bool:
        with _translate_errors("has_participation"):
            return repos.participation_exists(member_id, drop_id, order_ref)

    def insert_participation(
        self, member_id: str, drop_id: str, quantity: int, order_ref: str
    ) -> ParticipationRecord:
        with _translate_errors("insert_participation", on_conflict=DuplicateParticipationError):
            return repos.participation_insert_purchase(member_id, drop_id, quantity, order_ref)
