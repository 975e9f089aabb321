"""
Migration từng loại dữ liệu từ Realtime Database sang Firestore.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from energy_migration.core.data.models import (
    ChatRegistryResult,
    CollectionResult,
    ReadingsResult,
    RecordOutcome,
)
from energy_migration.core.migration.batch_writer import BatchWriter
from energy_migration.core.migration.transformer import (
    as_mapping,
    transform_chat_registry,
    transform_device,
    transform_reading,
    transform_user,
)
from energy_migration.infrastructure.config import firebase_config as paths
from energy_migration.infrastructure.database.firestore_client import MAX_BATCH_WRITES

logger = logging.getLogger(__name__)


class CollectionMigrator:
    """
    Đọc toàn bộ một collection nguồn, chuyển đổi từng bản ghi và ghi sang đích.

    Lỗi của một bản ghi được ghi log và đếm, bản ghi tiếp theo vẫn được xử lý.
    Mọi thao tác ghi đều ghi đè toàn bộ document nên chạy lại là an toàn.
    """

    def __init__(self, source, destination, batch_limit: int = MAX_BATCH_WRITES,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            source: RealtimeDatabaseClient (hoặc đối tượng có read_all)
            destination: FirestoreClient
            batch_limit: Số thao tác tối đa mỗi batch
            clock: Hàm trả về thời điểm hiện tại, dùng khi thiết bị thiếu last_updated
        """
        self.source = source
        self.destination = destination
        self.batch_limit = batch_limit
        self.clock = clock

    def _migrate_record(self, key: str, write: Callable[[], Any]) -> RecordOutcome:
        try:
            write()
            return RecordOutcome.ok(key)
        except Exception as e:
            return RecordOutcome.failed(key, str(e))

    def migrate_users(self) -> CollectionResult:
        logger.info("=== Migrating Users ===")
        users = as_mapping(self.source.read_all(paths.RTDB_USERS))
        result = CollectionResult()

        for user_id, user_data in users.items():
            outcome = self._migrate_record(
                user_id,
                lambda: self.destination.set_document(paths.user_doc_path(user_id), transform_user(user_data))
            )
            result.record(outcome)
            if outcome.success:
                logger.info(f"✓ Migrated user {user_id} ({as_mapping(user_data).get('email')})")
            else:
                logger.error(f"✗ Error migrating user {user_id}: {outcome.reason}")

        logger.info(f"Users Migration Complete: success={result.migrated_count}, errors={result.error_count}")
        return result

    def migrate_devices(self) -> CollectionResult:
        logger.info("=== Migrating Devices ===")
        devices = as_mapping(self.source.read_all(paths.RTDB_DEVICES))
        result = CollectionResult()
        now = self.clock() if self.clock else None

        for device_id, device_data in devices.items():
            document = {}

            def write():
                document.update(transform_device(device_data, now=now))
                self.destination.set_document(paths.device_doc_path(device_id), document)

            outcome = self._migrate_record(device_id, write)
            result.record(outcome)
            if outcome.success:
                logger.info(
                    f"✓ Migrated device {device_id} ({document.get('name')}) - "
                    f"{len(document.get('user_ids', []))} users"
                )
            else:
                logger.error(f"✗ Error migrating device {device_id}: {outcome.reason}")

        logger.info(f"Devices Migration Complete: success={result.migrated_count}, errors={result.error_count}")
        return result

    def migrate_daily_readings(self) -> ReadingsResult:
        logger.info("=== Migrating Daily Readings ===")
        devices = as_mapping(self.source.read_all(paths.RTDB_READINGS_DAILY))
        result = ReadingsResult()

        for device_id, readings in devices.items():
            logger.info(f"Migrating readings for device {device_id}...")
            writer = BatchWriter(self.destination, limit=self.batch_limit, label=f"  [{device_id}]")

            for timestamp, reading in as_mapping(readings).items():
                outcome = self._migrate_record(
                    f"{device_id}/{timestamp}",
                    lambda: self._stage_reading(writer, device_id, str(timestamp), reading)
                )
                if not outcome.success:
                    result.error_count += 1
                    result.errors.append(outcome)
                    logger.error(f"  ✗ Error migrating reading {outcome.key}: {outcome.reason}")

            batch_result = writer.flush()
            result.error_count += batch_result.failed_commits
            result.total_readings += batch_result.written
            result.total_devices += 1
            result.per_device[device_id] = batch_result.written
            logger.info(f"  Total for {device_id}: {batch_result.written} readings")

        logger.info(
            f"Daily Readings Migration Complete: devices={result.total_devices}, "
            f"readings={result.total_readings}, errors={result.error_count}"
        )
        return result

    @staticmethod
    def _stage_reading(writer: BatchWriter, device_id: str, timestamp: str, reading: Any) -> None:
        """Đưa một số đo vào batch; số đo rỗng bị bỏ qua."""
        document = transform_reading(reading)
        if document is not None:
            writer.add(paths.daily_doc_path(device_id, timestamp), document)

    def migrate_chat_registry(self) -> ChatRegistryResult:
        logger.info("=== Migrating Telegram Data ===")
        try:
            chats = self.source.read_all(paths.RTDB_TELEGRAM_CHATS)
            last_update_id = self.source.read_all(paths.RTDB_TELEGRAM_LAST_UPDATE_ID)
            document = transform_chat_registry(chats, last_update_id)
            self.destination.set_document(paths.FS_TELEGRAM_DOC, document)
        except Exception as e:
            logger.error(f"✗ Error migrating Telegram data: {e}")
            return ChatRegistryResult(chat_count=0, error=str(e))

        result = ChatRegistryResult(
            chat_count=len(document["chats"]),
            last_update_id=document["last_update_id"]
        )
        logger.info(f"✓ Migrated {result.chat_count} Telegram chats")
        logger.info(f"✓ Last update ID: {result.last_update_id}")
        return result
