"""
Kiểm tra thiết bị vượt ngưỡng năng lượng và broadcast cảnh báo qua Telegram.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from energy_migration.core.data.models import AlertSummary, DeviceRecord, Reading
from energy_migration.infrastructure.config import firebase_config as paths

logger = logging.getLogger(__name__)


def latest_reading(readings: Dict[str, Any]) -> Optional[Tuple[int, Reading]]:
    """
    Chọn số đo có timestamp (khóa dạng số) lớn nhất.

    Returns:
        (timestamp, Reading) hoặc None nếu không có số đo hợp lệ
    """
    candidates = []
    for key, value in readings.items():
        try:
            candidates.append((int(key), value))
        except (TypeError, ValueError):
            logger.debug(f"Ignoring reading with non-numeric key: {key}")

    if not candidates:
        return None

    timestamp, data = max(candidates, key=lambda item: item[0])
    return timestamp, Reading.model_validate(data or {})


class EnergyAlertEvaluator:
    """
    Một chu kỳ kiểm tra (thường do cron gọi mỗi 30 phút).

    Không lọc theo người dùng và không chống gửi trùng: mỗi chu kỳ gửi lại cảnh báo
    cho mọi thiết bị còn vượt ngưỡng tới mọi chat đã đăng ký.
    """

    def __init__(self, store, registry, telegram_client,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Args:
            store: FirestoreClient (dữ liệu đã migration)
            registry: ChatRegistryStore
            telegram_client: TelegramClient
            clock: Hàm trả về thời điểm kiểm tra (UTC)
        """
        self.store = store
        self.registry = registry
        self.telegram = telegram_client
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def resolve_display_name(self, device_id: str, device: DeviceRecord) -> str:
        """Ưu tiên tên tùy chỉnh của người dùng đầu tiên, nếu không dùng tên thiết bị."""
        display_name = device.name or device_id
        if not device.user_ids:
            return display_name

        user = self.store.get_document(paths.user_doc_path(device.user_ids[0]))
        devices = (user or {}).get("devices")
        custom_name = devices.get(device_id) if isinstance(devices, dict) else None
        if custom_name:
            logger.info(f"Custom name for {device_id}: \"{custom_name}\"")
            return custom_name
        return display_name

    def broadcast(self, chat_ids: List[int], display_name: str, energy: float,
                  limit: float, summary: AlertSummary) -> None:
        now = self.clock()
        for chat_id in chat_ids:
            try:
                sent = self.telegram.send_energy_alert(chat_id, display_name, energy, limit, now=now)
            except Exception as e:
                sent = False
                logger.error(f"Error sending alert to chat {chat_id}: {e}")

            if sent:
                summary.alerts_sent += 1
                logger.info(f"✓ Sent alert to chat {chat_id}")
            else:
                summary.send_failures += 1
                logger.warning(f"✗ Failed to send alert to chat {chat_id}")

    def check_device(self, device_id: str, data: Dict[str, Any], chat_ids: List[int],
                     summary: AlertSummary) -> None:
        device = DeviceRecord.model_validate(data or {})
        logger.info(f"Checking device: {device.name} ({device_id}), limit={device.energy_limit} kWh")

        if not device.energy_limit:
            logger.info("Skipped (no limit set)")
            return

        latest = latest_reading(self.store.read_collection(paths.daily_collection_path(device_id)))
        if latest is None:
            logger.info("Skipped (no readings found)")
            return

        timestamp, reading = latest
        logger.info(f"Current energy: {reading.energy:.2f} kWh (reading {timestamp})")

        if reading.energy <= device.energy_limit:
            logger.info("Within limit")
            return

        summary.devices_over_limit += 1
        logger.warning(f"⚠️ {device_id} OVER LIMIT by {reading.energy - device.energy_limit:.2f} kWh")

        display_name = self.resolve_display_name(device_id, device)
        logger.info(f"Broadcasting alert to {len(chat_ids)} chat(s)")
        self.broadcast(chat_ids, display_name, reading.energy, device.energy_limit, summary)

    def run(self) -> AlertSummary:
        summary = AlertSummary()

        chat_ids = self.registry.get_all_active_chat_ids()
        summary.active_chats = len(chat_ids)
        if not chat_ids:
            logger.warning("No active Telegram chats registered")
            return summary

        devices = self.store.read_collection(paths.FS_DEVICES)
        logger.info(f"Found {len(devices)} device(s), {len(chat_ids)} active chat(s)")

        for device_id, data in devices.items():
            summary.devices_checked += 1
            try:
                self.check_device(device_id, data, chat_ids, summary)
            except Exception as e:
                logger.error(f"Error processing device {device_id}: {e}")

        logger.info(
            f"Energy alerts complete: checked={summary.devices_checked}, "
            f"over_limit={summary.devices_over_limit}, sent={summary.alerts_sent}, "
            f"active_chats={summary.active_chats}"
        )
        return summary
