"""
Lớp tiện ích để đọc dữ liệu từ Firebase Realtime Database (nguồn migration).
"""
import logging
from typing import Any, Optional

from firebase_admin import db

from energy_migration.infrastructure.exceptions import DataAccessError

logger = logging.getLogger(__name__)


class RealtimeDatabaseClient:
    """
    Client chỉ đọc cho Realtime Database.

    Sau khi cutover, RTDB chỉ được giữ lại làm bản sao lưu nên
    client không cung cấp thao tác ghi.
    """

    def __init__(self, base_path: str = "", reference_factory=None):
        """
        Khởi tạo client với đường dẫn cơ sở.

        Args:
            base_path: Đường dẫn cơ sở trong database
            reference_factory: Hàm tạo tham chiếu (mặc định db.reference)
        """
        self.base_path = base_path.strip("/")
        self._reference_factory = reference_factory or db.reference

    def _get_reference(self, path: Optional[str] = None):
        """
        Lấy tham chiếu đến một đường dẫn trong database.

        Args:
            path: Đường dẫn tương đối (sẽ được thêm vào base_path)
        """
        if path:
            full_path = f"{self.base_path}/{path}" if self.base_path else path
        else:
            full_path = self.base_path or "/"

        return self._reference_factory(full_path)

    def read_all(self, path: str) -> Any:
        """
        Đọc toàn bộ dữ liệu tại một đường dẫn.

        Args:
            path: Đường dẫn collection (ví dụ 'users')

        Returns:
            Dữ liệu tại đường dẫn, hoặc None nếu không tồn tại

        Raises:
            DataAccessError: Nếu đọc thất bại
        """
        try:
            data = self._get_reference(path).get()
            logger.debug(f"Read data at path: {path}")
            return data
        except Exception as e:
            logger.error(f"RTDB read error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to read {path}: {e}", source="rtdb") from e

    def count_children(self, path: str) -> int:
        """Đếm số khóa con tại đường dẫn (0 nếu không phải mapping)."""
        data = self.read_all(path)
        if isinstance(data, dict):
            return len(data)
        return 0
