"""
Điều phối toàn bộ quá trình migration RTDB -> Firestore.
"""
import logging
import time

from energy_migration.core.data.models import MigrationReport
from energy_migration.core.migration.collection_migrator import CollectionMigrator
from energy_migration.core.migration.validator import MigrationValidator
from energy_migration.infrastructure.database.firestore_client import MAX_BATCH_WRITES

logger = logging.getLogger(__name__)

NEXT_STEPS = [
    "Deploy code changes",
    "Deploy Firestore indexes: firebase deploy --only firestore:indexes",
    "Deploy security rules: firebase deploy --only firestore:rules",
    "Test the application thoroughly",
    "Keep RTDB as backup for 7 days before disabling",
]


class MigrationOrchestrator:
    """
    Chạy tuần tự: Users -> Devices -> Daily Readings -> Telegram -> Validation.

    Đây là job chạy một lần. Lỗi trong từng bản ghi đã được các migrator xử lý;
    mọi exception thoát ra tới đây được coi là lỗi nghiêm trọng.
    """

    def __init__(self, source, destination, batch_limit: int = MAX_BATCH_WRITES, clock=None):
        self.migrator = CollectionMigrator(source, destination, batch_limit=batch_limit, clock=clock)
        self.validator = MigrationValidator(source, destination)

    def run(self) -> MigrationReport:
        logger.info("=" * 50)
        logger.info("RTDB to Firestore Migration")
        logger.info("=" * 50)

        report = MigrationReport()
        start_time = time.monotonic()

        try:
            report.users = self.migrator.migrate_users()
            report.devices = self.migrator.migrate_devices()
            report.readings = self.migrator.migrate_daily_readings()
            report.chats = self.migrator.migrate_chat_registry()
            report.validation = self.validator.validate()
        except Exception as e:
            report.critical_error = str(e)
            logger.exception(f"✗ Migration failed with critical error: {e}")

        report.duration_seconds = round(time.monotonic() - start_time, 2)
        self.log_summary(report)
        return report

    def log_summary(self, report: MigrationReport) -> None:
        logger.info("=" * 50)
        logger.info("Migration Summary")
        logger.info("=" * 50)
        logger.info(f"Duration: {report.duration_seconds:.2f}s")
        logger.info(f"Users migrated: {report.users.migrated_count} (errors: {report.users.error_count})")
        logger.info(f"Devices migrated: {report.devices.migrated_count} (errors: {report.devices.error_count})")
        logger.info(f"Readings migrated: {report.readings.total_readings} (errors: {report.readings.error_count})")
        logger.info(f"Telegram chats migrated: {report.chats.chat_count}")

        if report.critical_error:
            logger.error(f"Critical error: {report.critical_error}")
            return

        logger.info(f"Validation: {'✓ PASSED' if report.is_valid else '✗ FAILED'}")
        if report.is_valid:
            logger.info("✓ Migration completed successfully!")
            logger.info("Next steps:")
            for index, step in enumerate(NEXT_STEPS, start=1):
                logger.info(f"{index}. {step}")
        else:
            logger.error("✗ Migration completed with errors. Please review the logs.")
