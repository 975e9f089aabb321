"""
Phát hiện chat Telegram mới bằng cách poll getUpdates.
"""
import logging
from typing import Any, Dict, Iterable

from energy_migration.core.data.models import DiscoverySummary

logger = logging.getLogger(__name__)


def advance_cursor(current: int, update_ids: Iterable[int]) -> int:
    """Con trỏ mới = max(con trỏ hiện tại, update id lớn nhất đã thấy)."""
    return max([current, *update_ids])


class ChatDiscovery:
    """
    Một lần poll: đăng ký các chat riêng tư đã nhắn cho bot và gửi lời chào.

    Con trỏ chỉ được lưu một lần sau khi xử lý xong cả batch update.
    """

    def __init__(self, telegram_client, registry, poll_timeout: int = 30):
        self.telegram = telegram_client
        self.registry = registry
        self.poll_timeout = poll_timeout

    def run_once(self) -> DiscoverySummary:
        last_update_id = self.registry.get_last_update_id()
        logger.info(f"Last update ID: {last_update_id}")

        offset = last_update_id + 1 if last_update_id > 0 else None
        updates = self.telegram.get_updates(offset=offset, timeout=self.poll_timeout)

        summary = DiscoverySummary(latest_update_id=last_update_id)
        if not updates:
            logger.info("No new updates available")
            return summary

        logger.info(f"Found {len(updates)} update(s)")
        for update in updates:
            summary.updates_processed += 1
            try:
                if self._process_update(update):
                    summary.new_chats += 1
            except Exception as e:
                logger.error(f"Error processing update {update.get('update_id')}: {e}")

        update_ids = [u["update_id"] for u in updates if isinstance(u.get("update_id"), int)]
        summary.latest_update_id = advance_cursor(last_update_id, update_ids)

        if summary.latest_update_id > last_update_id:
            logger.info(f"Updating last update ID: {last_update_id} → {summary.latest_update_id}")
            self.registry.set_last_update_id(summary.latest_update_id)

        logger.info(
            f"Discovery complete: updates={summary.updates_processed}, "
            f"new_chats={summary.new_chats}, latest_update_id={summary.latest_update_id}"
        )
        return summary

    def _process_update(self, update: Dict[str, Any]) -> bool:
        """
        Returns:
            bool: True nếu chat được đăng ký và lời chào được gửi thành công
        """
        message = update.get("message")
        if not message:
            logger.debug(f"Update {update.get('update_id')} skipped (no message)")
            return False

        chat = message.get("chat") or {}
        if chat.get("type") != "private":
            logger.debug(f"Update {update.get('update_id')} skipped ({chat.get('type')} chat)")
            return False

        chat_id = chat["id"]
        first_name = chat.get("first_name")
        self.registry.save_active_chat(chat_id, chat.get("username"), first_name)
        logger.info(f"Registered chat {chat_id} (@{chat.get('username') or 'none'})")

        if self.telegram.send_welcome_message(chat_id, first_name):
            return True

        logger.warning(f"Failed to send welcome message to chat {chat_id}")
        return False
