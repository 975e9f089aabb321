"""
Quản lý danh sách chat Telegram nhận cảnh báo (document telegram/active_chats).
"""
import logging
import time
from typing import Callable, List, Optional

from energy_migration.core.data.models import ChatEntry, ChatRegistry
from energy_migration.infrastructure.config import firebase_config as paths

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatRegistryStore:
    """
    Lưu các chat đã liên hệ với bot và con trỏ update cuối cùng đã xử lý.

    Các hàm đọc trả về giá trị rỗng khi lỗi; các hàm ghi ném lại exception.
    """

    def __init__(self, store, clock: Optional[Callable[[], int]] = None):
        """
        Args:
            store: FirestoreClient
            clock: Hàm trả về thời gian hiện tại theo mili giây
        """
        self.store = store
        self.clock = clock or _now_ms
        self.path = paths.FS_TELEGRAM_DOC

    def _load(self) -> Optional[ChatRegistry]:
        document = self.store.get_document(self.path)
        if document is None:
            return None
        return ChatRegistry.model_validate(document)

    def save_active_chat(self, chat_id: int, username: Optional[str] = None,
                         first_name: Optional[str] = None) -> None:
        """Tạo mới hoặc cập nhật một chat, giữ nguyên addedAt của lần đầu."""
        try:
            now = self.clock()
            registry = self._load()
            entry = ChatEntry(
                chat_id=chat_id,
                username=username or None,
                first_name=first_name or None,
                last_active=now,
                added_at=now
            )

            if registry is None:
                self.store.set_document(self.path, {
                    "chats": {str(chat_id): entry.model_dump(by_alias=True)},
                    "last_update_id": 0,
                })
                return

            existing = registry.chats.get(str(chat_id))
            if isinstance(existing, dict) and existing.get("addedAt"):
                entry.added_at = existing["addedAt"]
            self.store.update_fields(self.path, {
                f"chats.{chat_id}": entry.model_dump(by_alias=True)
            })
        except Exception as e:
            logger.error(f"Error saving chat ID {chat_id}: {e}")
            raise

    def get_all_active_chat_ids(self) -> List[int]:
        """Danh sách chat id để broadcast."""
        try:
            registry = self._load()
        except Exception as e:
            logger.error(f"Error getting active chat IDs: {e}")
            return []

        if registry is None:
            return []
        chat_ids = []
        for chat_id in registry.chats.keys():
            try:
                chat_ids.append(int(chat_id))
            except ValueError:
                logger.warning(f"Skipping invalid chat ID: {chat_id!r}")
        return chat_ids

    def get_last_update_id(self) -> int:
        try:
            registry = self._load()
        except Exception as e:
            logger.error(f"Error getting last update ID: {e}")
            return 0

        return registry.last_update_id if registry else 0

    def set_last_update_id(self, update_id: int) -> None:
        try:
            if self.store.get_document(self.path) is None:
                self.store.set_document(self.path, {"chats": {}, "last_update_id": update_id})
            else:
                self.store.update_fields(self.path, {"last_update_id": update_id})
        except Exception as e:
            logger.error(f"Error setting last update ID: {e}")
            raise

    def remove_inactive_chats(self, days_old: int = 90) -> int:
        """
        Xóa các chat không hoạt động quá `days_old` ngày.

        Chưa được dùng trong luồng chính.

        Returns:
            Số chat đã xóa
        """
        try:
            registry = self._load()
            if registry is None:
                return 0

            cutoff = self.clock() - days_old * 24 * 60 * 60 * 1000
            stale = [
                chat_id for chat_id, chat in registry.chats.items()
                if not isinstance(chat, dict) or (chat.get("lastActive") or 0) < cutoff
            ]

            if stale:
                self.store.delete_fields(self.path, [f"chats.{chat_id}" for chat_id in stale])

            return len(stale)
        except Exception as e:
            logger.error(f"Error removing inactive chats: {e}")
            return 0
