#!/usr/bin/env python
# tests/test_collection_migrator.py

import os
import sys
import unittest
from datetime import datetime, timezone

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from energy_migration.core.migration.collection_migrator import CollectionMigrator
from tests.mocks import InMemoryFirestore, InMemoryRealtimeDatabase
from tests.mocks.sample_data import build_rtdb_data

FIXED_NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


class TestUserAndDeviceMigration(unittest.TestCase):

    def setUp(self):
        self.source = InMemoryRealtimeDatabase(build_rtdb_data(user_count=3, device_count=2))
        self.destination = InMemoryFirestore()
        self.migrator = CollectionMigrator(self.source, self.destination, clock=lambda: FIXED_NOW)

    def test_users_are_written_to_user_data(self):
        result = self.migrator.migrate_users()

        self.assertEqual(result.migrated_count, 3)
        self.assertEqual(result.error_count, 0)
        self.assertEqual(
            self.destination.documents["user-data/user0"],
            {"email": "user0@example.com", "username": "user0",
             "devices": {"dev0": "Plug 0", "dev1": "Plug 1"}}
        )

    def test_devices_are_written_to_item_data(self):
        result = self.migrator.migrate_devices()

        self.assertEqual(result.migrated_count, 2)
        device = self.destination.documents["item-data/dev1"]
        self.assertEqual(device["name"], "Device 1")
        self.assertIs(device["isOn"], False)
        self.assertCountEqual(device["user_ids"], ["user0", "user1", "user2"])

    def test_device_migration_is_idempotent(self):
        first = self.migrator.migrate_devices()
        snapshot = dict(self.destination.documents)
        second = self.migrator.migrate_devices()

        self.assertEqual(self.destination.documents, snapshot)
        self.assertEqual(first.migrated_count, second.migrated_count)
        self.assertEqual(first.error_count, second.error_count)

    def test_single_record_failure_does_not_abort_collection(self):
        self.destination.fail_set_paths = {"user-data/user1"}
        result = self.migrator.migrate_users()

        self.assertEqual(result.migrated_count, 2)
        self.assertEqual(result.error_count, 1)
        self.assertEqual(result.errors[0].key, "user1")
        self.assertFalse(result.errors[0].success)
        self.assertIn("user-data/user2", self.destination.documents)

    def test_invalid_device_record_is_counted_as_error(self):
        self.source.data["devices"]["broken"] = {"name": "Bad", "energyLimit": "a lot"}
        result = self.migrator.migrate_devices()

        self.assertEqual(result.migrated_count, 2)
        self.assertEqual(result.error_count, 1)
        self.assertNotIn("item-data/broken", self.destination.documents)

    def test_missing_collection_is_empty(self):
        migrator = CollectionMigrator(InMemoryRealtimeDatabase({}), self.destination)
        result = migrator.migrate_users()
        self.assertEqual((result.migrated_count, result.error_count), (0, 0))

    def test_device_without_timestamp_uses_clock(self):
        self.source.data["devices"]["dev0"].pop("last_updated")
        self.migrator.migrate_devices()
        self.assertEqual(self.destination.documents["item-data/dev0"]["last_updated"], FIXED_NOW)


class TestDailyReadingsMigration(unittest.TestCase):
    """Test cases for readings sub-collection migration."""

    def _migrate(self, readings_daily, **kwargs):
        source = InMemoryRealtimeDatabase({"readings_daily": readings_daily})
        self.destination = InMemoryFirestore()
        return CollectionMigrator(source, self.destination, **kwargs).migrate_daily_readings()

    def test_1001_readings_use_three_commits(self):
        readings = {str(1700000000000 + i): {"energy": i + 1} for i in range(1001)}
        result = self._migrate({"dev0": readings})

        self.assertEqual(self.destination.commits, [500, 500, 1])
        self.assertEqual(result.total_readings, 1001)
        self.assertEqual(result.total_devices, 1)
        self.assertEqual(result.error_count, 0)
        self.assertEqual(self.destination.read_count("item-data/dev0/daily"), 1001)

    def test_empty_readings_are_skipped_without_error(self):
        result = self._migrate({"dev0": {
            "1700000000000": {"energy": 5},
            "1700086400000": {},
            "1700172800000": {"energy": 7, "voltage": 230},
        }})

        self.assertEqual(result.total_readings, 2)
        self.assertEqual(result.error_count, 0)
        self.assertNotIn("item-data/dev0/daily/1700086400000", self.destination.documents)
        self.assertEqual(
            self.destination.documents["item-data/dev0/daily/1700172800000"],
            {"power": 0, "voltage": 230, "current": 0, "frequency": 0, "power_factor": 0, "energy": 7}
        )

    def test_readings_are_batched_per_device(self):
        result = self._migrate({
            "dev0": {str(i): {"energy": 1} for i in range(3)},
            "dev1": {str(i): {"energy": 1} for i in range(2)},
        })

        self.assertEqual(self.destination.commits, [3, 2])
        self.assertEqual(result.per_device, {"dev0": 3, "dev1": 2})
        self.assertEqual(result.total_devices, 2)

    def test_failed_commit_counts_as_error_and_loses_records(self):
        source = InMemoryRealtimeDatabase({"readings_daily": {
            "dev0": {str(i): {"energy": 1} for i in range(1001)}
        }})
        destination = InMemoryFirestore()
        destination.fail_commit_numbers = {2}
        result = CollectionMigrator(source, destination).migrate_daily_readings()

        self.assertEqual(result.error_count, 1)
        self.assertEqual(result.total_readings, 501)
        self.assertEqual(destination.read_count("item-data/dev0/daily"), 501)

    def test_invalid_reading_is_counted_and_others_continue(self):
        result = self._migrate({"dev0": {"1": {"energy": "bad"}, "2": {"energy": 3}}})
        self.assertEqual(result.error_count, 1)
        self.assertEqual(result.total_readings, 1)
        self.assertEqual(result.errors[0].key, "dev0/1")
        self.assertFalse(result.errors[0].success)
        self.assertIn("energy", result.errors[0].reason)


class TestChatRegistryMigration(unittest.TestCase):

    def test_consolidates_chats_and_cursor(self):
        source = InMemoryRealtimeDatabase(build_rtdb_data())
        destination = InMemoryFirestore()
        result = CollectionMigrator(source, destination).migrate_chat_registry()

        self.assertEqual(result.chat_count, 1)
        self.assertEqual(result.last_update_id, 42)
        self.assertIsNone(result.error)
        document = destination.documents["telegram/active_chats"]
        self.assertEqual(document["last_update_id"], 42)
        self.assertEqual(document["chats"]["111"]["addedAt"], 1690000000000)

    def test_missing_telegram_data(self):
        destination = InMemoryFirestore()
        result = CollectionMigrator(InMemoryRealtimeDatabase({}), destination).migrate_chat_registry()

        self.assertEqual(result.chat_count, 0)
        self.assertEqual(destination.documents["telegram/active_chats"], {"chats": {}, "last_update_id": 0})

    def test_failure_is_reported_not_raised(self):
        source = InMemoryRealtimeDatabase(build_rtdb_data())
        source.fail_paths = {"telegram/last_update_id"}
        destination = InMemoryFirestore()
        result = CollectionMigrator(source, destination).migrate_chat_registry()

        self.assertEqual(result.chat_count, 0)
        self.assertIn("read failed", result.error)
        self.assertNotIn("telegram/active_chats", destination.documents)


if __name__ == '__main__':
    unittest.main()
