"""Tests for the SQL datastore: drop lookup, atomic increment, member lookup, participation."""

import unittest

from support import fresh_db, seed_drop, seed_member, seed_profile

from drop_orders.db.repositories import drop_get_by_id, participation_list_for_member
from drop_orders.errors import DatastoreError, DuplicateParticipationError


class TestDropLookup(unittest.TestCase):
    def setUp(self):
        self.store = fresh_db()

    def test_find_by_product_id(self):
        drop_id = seed_drop("8001", quantity_available=20, quantity_sold=4, title="Barolo")
        drop = self.store.find_drop_by_reference("8001")
        self.assertIsNotNone(drop)
        self.assertEqual(drop.id, drop_id)
        self.assertEqual(drop.title, "Barolo")
        self.assertEqual(drop.quantity_sold, 4)
        self.assertEqual(drop.remaining, 16)

    def test_find_by_variant_gid(self):
        drop_id = seed_drop("gid://shopify/ProductVariant/4400")
        drop = self.store.find_drop_by_reference("gid://shopify/ProductVariant/4400")
        self.assertEqual(drop.id, drop_id)

    def test_miss_returns_none(self):
        seed_drop("8001")
        self.assertIsNone(self.store.find_drop_by_reference("8002"))


class TestIncrementQuantitySold(unittest.TestCase):
    def setUp(self):
        self.store = fresh_db()

    def test_increment_adds_quantity(self):
        drop_id = seed_drop("8001", quantity_available=20, quantity_sold=10)
        updated = self.store.increment_quantity_sold(drop_id, 3)
        self.assertEqual(updated.quantity_sold, 13)
        self.assertEqual(updated.remaining, 7)
        self.assertEqual(drop_get_by_id(drop_id).quantity_sold, 13)

    def test_increments_accumulate(self):
        drop_id = seed_drop("8001", quantity_sold=0)
        self.store.increment_quantity_sold(drop_id, 2)
        self.store.increment_quantity_sold(drop_id, 5)
        self.assertEqual(drop_get_by_id(drop_id).quantity_sold, 7)

    def test_oversell_not_prevented(self):
        drop_id = seed_drop("8001", quantity_available=2, quantity_sold=2)
        updated = self.store.increment_quantity_sold(drop_id, 1)
        self.assertEqual(updated.quantity_sold, 3)
        self.assertEqual(updated.remaining, -1)

    def test_unknown_drop_raises(self):
        with self.assertRaises(DatastoreError):
            self.store.increment_quantity_sold("no-such-drop", 1)


class TestMemberLookup(unittest.TestCase):
    def setUp(self):
        self.store = fresh_db()

    def test_profile_email_case_insensitive(self):
        profile_id = seed_profile("Member@Example.com")
        self.assertEqual(self.store.find_profile_id_by_email("member@example.com"), profile_id)

    def test_member_by_user(self):
        member_id = seed_member("member@example.com")
        profile_id = self.store.find_profile_id_by_email("member@example.com")
        self.assertEqual(self.store.find_member_id_by_user(profile_id), member_id)

    def test_profile_without_membership(self):
        profile_id = seed_profile("guest@example.com")
        self.assertIsNone(self.store.find_member_id_by_user(profile_id))


class TestParticipation(unittest.TestCase):
    def setUp(self):
        self.store = fresh_db()
        self.member_id = seed_member("member@example.com")
        self.drop_id = seed_drop("8001")

    def test_insert_and_exists(self):
        self.assertFalse(self.store.has_participation(self.member_id, self.drop_id, "5550001"))
        row = self.store.insert_participation(self.member_id, self.drop_id, 2, "5550001")
        self.assertTrue(row.purchased)
        self.assertEqual(row.quantity, 2)
        self.assertEqual(row.shopify_order_id, "5550001")
        self.assertIsNotNone(row.created_at)
        self.assertTrue(self.store.has_participation(self.member_id, self.drop_id, "5550001"))
        self.assertFalse(self.store.has_participation(self.member_id, self.drop_id, "5550002"))

    def test_duplicate_triple_rejected(self):
        self.store.insert_participation(self.member_id, self.drop_id, 1, "5550001")
        with self.assertRaises(DuplicateParticipationError):
            self.store.insert_participation(self.member_id, self.drop_id, 1, "5550001")
        self.assertEqual(len(participation_list_for_member(self.member_id)), 1)

    def test_same_drop_other_order_allowed(self):
        self.store.insert_participation(self.member_id, self.drop_id, 1, "5550001")
        self.store.insert_participation(self.member_id, self.drop_id, 1, "5550002")
        self.assertEqual(len(participation_list_for_member(self.member_id)), 2)


if __name__ == "__main__":
    unittest.main()
