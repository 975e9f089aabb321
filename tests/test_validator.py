#!/usr/bin/env python
# tests/test_validator.py

import os
import sys
import unittest
from unittest.mock import MagicMock

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from energy_migration.core.migration.collection_migrator import CollectionMigrator
from energy_migration.core.migration.validator import MigrationValidator
from tests.mocks import InMemoryFirestore, InMemoryRealtimeDatabase
from tests.mocks.sample_data import build_rtdb_data


class TestMigrationValidator(unittest.TestCase):
    """Test cases for count comparison between the two stores."""

    def _migrated(self, users, devices, readings=3):
        source = InMemoryRealtimeDatabase(build_rtdb_data(users, devices, readings))
        destination = InMemoryFirestore()
        migrator = CollectionMigrator(source, destination)
        migrator.migrate_users()
        migrator.migrate_devices()
        migrator.migrate_daily_readings()
        return source, destination

    def test_counts_are_conserved(self):
        for users, devices in [(0, 0), (1, 3), (5, 2)]:
            with self.subTest(users=users, devices=devices):
                source, destination = self._migrated(users, devices)
                report = MigrationValidator(source, destination).validate()

                self.assertEqual(report.destination_users, users)
                self.assertEqual(report.destination_devices, devices)
                self.assertTrue(report.is_valid)

    def test_missing_user_fails_validation(self):
        source, destination = self._migrated(3, 2)
        del destination.documents["user-data/user2"]

        report = MigrationValidator(source, destination).validate()
        self.assertFalse(report.users_match)
        self.assertTrue(report.devices_match)
        self.assertFalse(report.is_valid)

    def test_missing_device_fails_validation(self):
        source, destination = self._migrated(1, 2)
        del destination.documents["item-data/dev1"]

        self.assertFalse(MigrationValidator(source, destination).validate().is_valid)

    def test_sample_uses_first_source_device(self):
        source, destination = self._migrated(1, 2, readings=4)
        report = MigrationValidator(source, destination).validate()

        self.assertEqual(report.sample_device_id, "dev0")
        self.assertEqual(report.sample_source_readings, 4)
        self.assertEqual(report.sample_destination_readings, 4)
        self.assertTrue(report.sample_match)

    def test_sample_mismatch_does_not_gate_validity(self):
        source, destination = self._migrated(1, 2, readings=4)
        del destination.documents["item-data/dev0/daily/1700000000000"]

        report = MigrationValidator(source, destination).validate()
        self.assertFalse(report.sample_match)
        self.assertTrue(report.is_valid)

    def test_source_users_counted_from_children(self):
        source, destination = self._migrated(4, 1)
        counting = MagicMock(wraps=source)

        report = MigrationValidator(counting, destination).validate()

        counting.count_children.assert_called_once_with("users")
        self.assertEqual(report.source_users, 4)

    def test_no_devices_means_no_sample(self):
        source, destination = self._migrated(2, 0)
        report = MigrationValidator(source, destination).validate()

        self.assertIsNone(report.sample_device_id)
        self.assertIsNone(report.sample_match)
        self.assertTrue(report.is_valid)


if __name__ == '__main__':
    unittest.main()
