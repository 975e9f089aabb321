"""
Quản lý thiết bị của người dùng trên Firestore sau khi cutover.
"""
import logging
from typing import Any, Dict, List

from energy_migration.infrastructure.config import firebase_config as paths
from energy_migration.infrastructure.exceptions import DataAccessError

logger = logging.getLogger(__name__)


class DeviceService:
    """
    Các thao tác trên user-data/{userId}.devices và item-data/{itemId}.

    Liên kết hai chiều (devices của user <-> user_ids của thiết bị) được
    cập nhật ở cả hai phía nhưng không nằm trong cùng một transaction.
    """

    def __init__(self, store):
        self.store = store

    def get_device_metadata(self, item_id: str) -> Dict[str, Any]:
        metadata = self.store.get_document(paths.device_doc_path(item_id))
        if metadata is None:
            raise DataAccessError("Device not found", source="firestore", details={"item_id": item_id})
        return metadata

    def add_device(self, user_id: str, item_id: str, custom_name: str) -> None:
        """Gắn thiết bị (đã tồn tại) vào người dùng với tên tùy chỉnh."""
        if self.store.get_document(paths.device_doc_path(item_id)) is None:
            raise DataAccessError("Device ID does not exist", source="firestore", details={"item_id": item_id})

        self.store.update_fields(paths.user_doc_path(user_id), {f"devices.{item_id}": custom_name})
        self.store.array_union(paths.device_doc_path(item_id), "user_ids", [user_id])
        logger.info(f"Added device {item_id} to user {user_id}")

    def update_device(self, user_id: str, item_id: str, new_name: str) -> None:
        """Đổi tên tùy chỉnh của thiết bị cho một người dùng."""
        user = self.store.get_document(paths.user_doc_path(user_id))
        if user is None:
            raise DataAccessError("User not found", source="firestore", details={"user_id": user_id})
        if not (user.get("devices") or {}).get(item_id):
            raise DataAccessError("Device not found in user devices", source="firestore",
                                  details={"user_id": user_id, "item_id": item_id})

        self.store.update_fields(paths.user_doc_path(user_id), {f"devices.{item_id}": new_name})

    def delete_device(self, user_id: str, item_id: str) -> None:
        """Gỡ thiết bị khỏi danh sách của người dùng (thiết bị vẫn tồn tại)."""
        self.store.delete_fields(paths.user_doc_path(user_id), [f"devices.{item_id}"])
        self.store.array_remove(paths.device_doc_path(item_id), "user_ids", [user_id])
        logger.info(f"Removed device {item_id} from user {user_id}")

    def set_energy_limit(self, item_id: str, limit: float) -> None:
        if limit < 0:
            raise ValueError("Energy limit must not be negative")
        self.store.update_fields(paths.device_doc_path(item_id), {"energyLimit": limit})

    def toggle_device(self, item_id: str, new_state: bool) -> None:
        self.store.update_fields(paths.device_doc_path(item_id), {"isOn": bool(new_state)})

    def get_daily_readings(self, item_id: str, max_results: int = 30) -> List[Dict[str, Any]]:
        """
        Lấy `max_results` số đo gần nhất, trả về theo thứ tự cũ -> mới.

        Mỗi phần tử có thêm khóa 'id' là timestamp của document.
        """
        readings = self.store.read_collection(paths.daily_collection_path(item_id))
        ordered = sorted(readings.items(), key=lambda item: item[0], reverse=True)[:max_results]
        return [{"id": doc_id, **data} for doc_id, data in reversed(ordered)]
