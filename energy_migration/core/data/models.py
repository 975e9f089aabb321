"""
Models dữ liệu cho người dùng, thiết bị, số đo năng lượng và kết quả migration.
"""
from typing import Any, Dict, List, Optional, Union
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class UserRecord(BaseModel):
    """Người dùng (user-data/{userId})."""
    model_config = ConfigDict(populate_by_name=True)

    email: Any = None
    username: Any = None
    devices: Dict[str, Any] = Field(default_factory=dict)  # deviceId -> tên tùy chỉnh

    @field_validator('devices', mode='before')
    @classmethod
    def default_devices(cls, value):
        return value if isinstance(value, dict) else {}


class DeviceRecord(BaseModel):
    """Thiết bị đo năng lượng (item-data/{deviceId})."""
    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    is_on: bool = Field(True, alias="isOn")
    energy_limit: Number = Field(0, alias="energyLimit")  # 0 = chưa đặt
    last_updated: Any = None
    user_ids: List[str] = Field(default_factory=list)

    @field_validator('is_on', mode='before')
    @classmethod
    def default_is_on(cls, value):
        # Thiếu trường khác với tắt: thiếu thì coi như đang bật
        return True if value is None else value

    @field_validator('energy_limit', mode='before')
    @classmethod
    def default_energy_limit(cls, value):
        return value or 0

    @field_validator('user_ids', mode='before')
    @classmethod
    def normalize_user_ids(cls, value):
        """Chuyển tập hợp dạng {userId: true} thành danh sách không trùng, không rỗng."""
        if isinstance(value, dict):
            candidates = list(value.keys())
        elif isinstance(value, (list, tuple, set)):
            candidates = list(value)
        else:
            candidates = []

        result = []
        for user_id in candidates:
            if user_id and user_id not in result:
                result.append(str(user_id))
        return result


class Reading(BaseModel):
    """Số đo năng lượng theo ngày (item-data/{deviceId}/daily/{timestamp})."""
    power: Number = 0
    voltage: Number = 0
    current: Number = 0
    frequency: Number = 0
    power_factor: Number = 0
    energy: Number = 0

    @field_validator('power', 'voltage', 'current', 'frequency', 'power_factor', 'energy', mode='before')
    @classmethod
    def default_zero(cls, value):
        return 0 if value is None else value


class ChatEntry(BaseModel):
    """Một chat Telegram đã đăng ký nhận cảnh báo."""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    chat_id: Optional[int] = Field(None, alias="chatId")
    username: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_active: Optional[int] = Field(None, alias="lastActive")
    added_at: Optional[int] = Field(None, alias="addedAt")


class ChatRegistry(BaseModel):
    """Document tổng hợp telegram/active_chats."""
    chats: Dict[str, Any] = Field(default_factory=dict)
    last_update_id: int = 0

    @field_validator('chats', mode='before')
    @classmethod
    def default_chats(cls, value):
        return value if isinstance(value, dict) else {}

    @field_validator('last_update_id', mode='before')
    @classmethod
    def default_last_update_id(cls, value):
        return value or 0


def utc_now() -> datetime:
    """Thời điểm hiện tại theo UTC."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Kết quả migration và cảnh báo
# ---------------------------------------------------------------------------

class RecordOutcome(BaseModel):
    """Kết quả xử lý một bản ghi: thành công hoặc thất bại kèm lý do."""
    key: str
    success: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls, key: str) -> "RecordOutcome":
        return cls(key=key, success=True)

    @classmethod
    def failed(cls, key: str, reason: str) -> "RecordOutcome":
        return cls(key=key, success=False, reason=reason)


class CollectionResult(BaseModel):
    """Kết quả migration cho users hoặc devices."""
    migrated_count: int = 0
    error_count: int = 0
    errors: List[RecordOutcome] = Field(default_factory=list)

    def record(self, outcome: RecordOutcome) -> None:
        if outcome.success:
            self.migrated_count += 1
        else:
            self.error_count += 1
            self.errors.append(outcome)


class BatchWriteResult(BaseModel):
    """Thống kê của BatchWriter sau khi flush."""
    written: int = 0
    commits: int = 0
    failed_commits: int = 0
    failed_writes: int = 0


class ReadingsResult(BaseModel):
    """Kết quả migration số đo theo ngày."""
    total_readings: int = 0
    total_devices: int = 0
    error_count: int = 0
    errors: List[RecordOutcome] = Field(default_factory=list)
    per_device: Dict[str, int] = Field(default_factory=dict)


class ChatRegistryResult(BaseModel):
    """Kết quả migration dữ liệu Telegram."""
    chat_count: int = 0
    last_update_id: int = 0
    error: Optional[str] = None


class ValidationReport(BaseModel):
    """Kết quả so sánh số lượng giữa RTDB và Firestore."""
    source_users: int = 0
    destination_users: int = 0
    source_devices: int = 0
    destination_devices: int = 0
    sample_device_id: Optional[str] = None
    sample_source_readings: Optional[int] = None
    sample_destination_readings: Optional[int] = None

    @property
    def users_match(self) -> bool:
        return self.source_users == self.destination_users

    @property
    def devices_match(self) -> bool:
        return self.source_devices == self.destination_devices

    @property
    def sample_match(self) -> Optional[bool]:
        if self.sample_device_id is None:
            return None
        return self.sample_source_readings == self.sample_destination_readings

    @property
    def is_valid(self) -> bool:
        # Kiểm tra mẫu chỉ để báo cáo, không ảnh hưởng kết quả tổng
        return self.users_match and self.devices_match


class MigrationReport(BaseModel):
    """Báo cáo tổng hợp sau một lần chạy migration."""
    duration_seconds: float = 0.0
    users: CollectionResult = Field(default_factory=CollectionResult)
    devices: CollectionResult = Field(default_factory=CollectionResult)
    readings: ReadingsResult = Field(default_factory=ReadingsResult)
    chats: ChatRegistryResult = Field(default_factory=ChatRegistryResult)
    validation: Optional[ValidationReport] = None
    critical_error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.critical_error is None and self.validation is not None and self.validation.is_valid

    @property
    def exit_code(self) -> int:
        return 0 if self.is_valid else 1


class AlertSummary(BaseModel):
    """Thống kê của một chu kỳ kiểm tra cảnh báo năng lượng."""
    devices_checked: int = 0
    devices_over_limit: int = 0
    alerts_sent: int = 0
    send_failures: int = 0
    active_chats: int = 0


class DiscoverySummary(BaseModel):
    """Thống kê của một lần poll Telegram."""
    updates_processed: int = 0
    new_chats: int = 0
    latest_update_id: int = 0
