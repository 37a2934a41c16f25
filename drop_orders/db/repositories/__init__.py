"""DB repositories: sync functions that return detached pydantic records."""

from drop_orders.db.repositories.drop_repo import (
    find_by_reference as drop_find_by_reference,
    get_by_id as drop_get_by_id,
    increment_quantity_sold as drop_increment_quantity_sold,
)
from drop_orders.db.repositories.member_repo import (
    find_member_id_by_user as member_find_by_user,
    find_profile_id_by_email as profile_find_by_email,
)
from drop_orders.db.repositories.participation_repo import (
    exists as participation_exists,
    insert_purchase as participation_insert_purchase,
    list_for_member as participation_list_for_member,
)

__all__ = [
    "drop_find_by_reference",
    "drop_get_by_id",
    "drop_increment_quantity_sold",
    "profile_find_by_email",
    "member_find_by_user",
    "participation_exists",
    "participation_insert_purchase",
    "participation_list_for_member",
]
