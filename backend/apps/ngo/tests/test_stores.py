from __future__ import annotations

from unittest import mock

from django.db import DatabaseError
from django.test import TestCase

from apps.ngo.models import Category, Donor, Program
from apps.ngo.services.gateway import StoreGateway
from apps.ngo.services.stores import (
    CATEGORIES,
    DONORS,
    PROGRAMS,
    ModelStore,
    SampleStore,
    UnknownEntity,
)


class SampleStoreTests(TestCase):
    def setUp(self):
        self.store = SampleStore()

    def test_programs_are_seeded_normalized(self):
        programs = {p["program_id"]: p for p in self.store.list(PROGRAMS)}
        self.assertEqual(programs["PRG-004"]["status"], "finished")
        self.assertEqual(programs["PRG-005"]["status"], "running")
        self.assertEqual(programs["PRG-006"]["category"], "education")
        self.assertEqual(programs["PRG-003"]["company_id"], 3)

    def test_insert_generates_ids(self):
        category = self.store.insert(CATEGORIES, {"category_name": "재난"})
        self.assertEqual(category["category_id"], "7")
        donor = self.store.insert(DONORS, {"name": "새 후원자", "email": "new@example.com", "password": "pw"})
        self.assertEqual(donor["donor_id"], 4)
        self.assertIsNotNone(donor["created_at"])

    def test_insert_with_existing_key_replaces(self):
        self.store.insert(CATEGORIES, {"category_id": "1", "category_name": "어린이"})
        categories = self.store.list(CATEGORIES)
        self.assertEqual(len(categories), 6)
        self.assertEqual(self.store.get(CATEGORIES, 1)["category_name"], "어린이")

    def test_status_update_refreshes_label(self):
        updated = self.store.update(PROGRAMS, "PRG-002", {"status": "running"})
        self.assertEqual(updated["status"], "running")
        self.assertEqual(updated["status_label"], "진행 중")
        self.assertIsNotNone(updated["updated_at"])

    def test_update_and_delete_missing(self):
        self.assertIsNone(self.store.update(PROGRAMS, "NOPE", {"status": "running"}))
        self.assertFalse(self.store.delete(PROGRAMS, "NOPE"))

    def test_reads_return_copies(self):
        self.store.list(DONORS)[0]["name"] = "changed"
        self.store.get(DONORS, 1)["name"] = "changed"
        self.assertNotEqual(self.store.get(DONORS, 1)["name"], "changed")

    def test_reset_restores_seed(self):
        self.store.delete(PROGRAMS, "PRG-001")
        self.store.reset()
        self.assertIsNotNone(self.store.get(PROGRAMS, "PRG-001"))

    def test_find(self):
        donor = self.store.find(DONORS, "email", "sky.kim@example.com")
        self.assertEqual(donor["donor_id"], 1)

    def test_unknown_entity(self):
        with self.assertRaises(UnknownEntity):
            self.store.list("volunteers")


class ModelStoreTests(TestCase):
    def setUp(self):
        self.store = ModelStore()

    def test_insert_returns_stored_values(self):
        donor = self.store.insert(DONORS, {"donor_id": None, "name": "Kim", "email": "kim@example.com", "password": "pw"})
        self.assertEqual(Donor.objects.get(pk=donor["donor_id"]).name, "Kim")
        self.assertIsNotNone(donor["created_at"])

    def test_non_numeric_id_on_integer_key_is_missing(self):
        self.assertIsNone(self.store.get(DONORS, "abc"))
        self.assertFalse(self.store.delete(DONORS, "abc"))

    def test_update_touches_updated_at(self):
        Program.objects.create(program_id="P-1", program_name="Test", status="PENDING")
        before = Program.objects.get(pk="P-1").updated_at
        updated = self.store.update(PROGRAMS, "P-1", {"status": "running"})
        self.assertEqual(updated["status"], "running")
        self.assertGreaterEqual(updated["updated_at"], before)

    def test_find_rejects_unknown_field(self):
        with self.assertRaises(ValueError):
            self.store.find(DONORS, "password_hash", "x")


class StoreGatewayTests(TestCase):
    def setUp(self):
        self.gateway = StoreGateway(ModelStore(), SampleStore())

    def test_empty_primary_falls_back(self):
        listing = self.gateway.list(CATEGORIES)
        self.assertEqual(listing.source, "sample")
        self.assertEqual(len(listing.records), 6)
        self.assertIsNone(listing.warning)

    def test_primary_rows_win(self):
        Category.objects.create(category_id="edu", category_name="교육")
        listing = self.gateway.list(CATEGORIES)
        self.assertEqual(listing.source, "database")
        self.assertEqual([c["category_id"] for c in listing.records], ["edu"])

    def test_primary_error_falls_back_with_warning(self):
        with mock.patch.object(self.gateway.primary, "list", side_effect=DatabaseError("down")):
            with self.assertLogs("apps.ngo.services.gateway", level="WARNING"):
                listing = self.gateway.list(PROGRAMS)
        self.assertEqual(listing.source, "sample")
        self.assertIn("DatabaseError", listing.warning)

    def test_primary_error_can_propagate(self):
        with mock.patch.object(self.gateway.primary, "list", side_effect=DatabaseError("down")):
            with self.assertRaises(DatabaseError):
                self.gateway.list(DONORS, fallback_on_error=False)

    def test_get_falls_through_to_sample(self):
        self.assertEqual(self.gateway.get(PROGRAMS, "PRG-001")["program_id"], "PRG-001")
        self.assertIsNone(self.gateway.get(PROGRAMS, "PRG-999"))

    def test_insert_is_mirrored(self):
        stored = self.gateway.insert(CATEGORIES, {"category_id": "9", "category_name": "재난"})
        self.assertTrue(Category.objects.filter(pk="9").exists())
        self.assertEqual(self.gateway.fallback.get(CATEGORIES, "9"), stored)

    def test_insert_survives_primary_failure(self):
        with mock.patch.object(self.gateway.primary, "insert", side_effect=DatabaseError("down")):
            with self.assertLogs("apps.ngo.services.gateway", level="WARNING"):
                stored = self.gateway.insert(CATEGORIES, {"category_name": "재난"})
        self.assertEqual(stored["category_id"], "7")
        self.assertFalse(Category.objects.exists())
        self.assertIsNotNone(self.gateway.fallback.get(CATEGORIES, "7"))

    def test_update_survives_primary_failure(self):
        with mock.patch.object(self.gateway.primary, "update", side_effect=DatabaseError("down")):
            with self.assertLogs("apps.ngo.services.gateway", level="WARNING"):
                updated = self.gateway.update(PROGRAMS, "PRG-002", {"status": "running"})
        self.assertEqual(updated["status"], "running")

    def test_delete_reports_either_store(self):
        Program.objects.create(program_id="P-1", program_name="Test")
        self.assertTrue(self.gateway.delete(PROGRAMS, "P-1"))
        self.assertTrue(self.gateway.delete(PROGRAMS, "PRG-002"))
        self.assertFalse(self.gateway.delete(PROGRAMS, "P-404"))
