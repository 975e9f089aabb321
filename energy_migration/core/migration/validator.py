"""
Kiểm tra kết quả migration bằng cách so sánh số lượng bản ghi hai phía.
"""
import logging

from energy_migration.core.data.models import ValidationReport
from energy_migration.core.migration.transformer import as_mapping
from energy_migration.infrastructure.config import firebase_config as paths

logger = logging.getLogger(__name__)


def _mark(matches) -> str:
    return "✓" if matches else "✗"


class MigrationValidator:
    """
    So sánh số users và devices giữa RTDB và Firestore, cộng một kiểm tra mẫu
    số đo của thiết bị đầu tiên.

    Kiểm tra mẫu chỉ mang tính báo cáo: nó không ảnh hưởng tới is_valid.
    Thiết bị mẫu là khóa đầu tiên RTDB trả về, thứ tự này không được đảm bảo.
    """

    def __init__(self, source, destination):
        self.source = source
        self.destination = destination

    def validate(self) -> ValidationReport:
        logger.info("=== Validating Migration ===")
        report = ValidationReport()

        report.source_users = self.source.count_children(paths.RTDB_USERS)
        report.destination_users = self.destination.read_count(paths.FS_USERS)
        logger.info(
            f"Users: RTDB={report.source_users}, Firestore={report.destination_users} "
            f"{_mark(report.users_match)}"
        )

        source_devices = as_mapping(self.source.read_all(paths.RTDB_DEVICES))
        report.source_devices = len(source_devices)
        report.destination_devices = self.destination.read_count(paths.FS_DEVICES)
        logger.info(
            f"Devices: RTDB={report.source_devices}, Firestore={report.destination_devices} "
            f"{_mark(report.devices_match)}"
        )

        first_device_id = next(iter(source_devices), None)
        if first_device_id is not None:
            report.sample_device_id = first_device_id
            report.sample_source_readings = len(
                as_mapping(self.source.read_all(paths.rtdb_device_readings_path(first_device_id)))
            )
            report.sample_destination_readings = self.destination.read_subcollection_count(
                paths.daily_collection_path(first_device_id)
            )
            logger.info(
                f"Sample device {first_device_id} readings: RTDB={report.sample_source_readings}, "
                f"Firestore={report.sample_destination_readings} {_mark(report.sample_match)}"
            )
            if not report.sample_match:
                logger.warning("Sample reading count mismatch does not affect overall validation result")

        if report.is_valid:
            logger.info("✓ Validation PASSED - All counts match!")
        else:
            logger.error("✗ Validation FAILED - Counts do not match!")

        return report
