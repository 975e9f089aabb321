"""
Các hàm thuần chuyển một bản ghi RTDB sang dạng document Firestore.

Không có I/O. Mọi giá trị thiếu đều được gán mặc định; dữ liệu không phải
object ở cấp collection được coi là collection rỗng.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from energy_migration.core.data.models import (
    ChatRegistry,
    DeviceRecord,
    Reading,
    UserRecord,
    utc_now,
)


def as_mapping(value: Any) -> Dict[str, Any]:
    """Trả về value nếu là dict, ngược lại trả về dict rỗng."""
    return value if isinstance(value, dict) else {}


def transform_user(raw: Any) -> Dict[str, Any]:
    """users/{id} -> user-data/{id}"""
    user = UserRecord.model_validate(as_mapping(raw))
    return user.model_dump()


def transform_device(raw: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    devices/{id} -> item-data/{id}

    Args:
        raw: Dữ liệu thiết bị từ RTDB
        now: Thời điểm dùng khi thiếu last_updated (mặc định giờ UTC hiện tại)
    """
    data = dict(as_mapping(raw))
    if not data.get("last_updated"):
        data["last_updated"] = now or utc_now()
    device = DeviceRecord.model_validate(data)
    return device.model_dump(by_alias=True)


def transform_reading(raw: Any) -> Optional[Dict[str, Any]]:
    """
    readings_daily/{deviceId}/{timestamp} -> item-data/{deviceId}/daily/{timestamp}

    Returns:
        Document số đo, hoặc None nếu bản ghi rỗng (bỏ qua, không tính là lỗi)
    """
    data = as_mapping(raw)
    if not data:
        return None
    return Reading.model_validate(data).model_dump()


def transform_chat_registry(chats: Any, last_update_id: Any) -> Dict[str, Any]:
    """telegram/active_chats + telegram/last_update_id -> telegram/active_chats"""
    registry = ChatRegistry.model_validate({
        "chats": chats,
        "last_update_id": last_update_id,
    })
    return registry.model_dump()
