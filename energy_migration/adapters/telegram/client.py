import logging
from enum import Enum
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import RequestException, Timeout

from .messages import format_energy_alert, format_welcome_message

logger = logging.getLogger(__name__)


class ParseMode(str, Enum):
    """Chế độ định dạng tin nhắn."""
    PLAIN = "plain"
    HTML = "HTML"
    MARKDOWN = "Markdown"


class TelegramClient:
    """Client HTTP tối giản cho Telegram Bot API (sendMessage, getUpdates)."""

    def __init__(self, token: str,
                 api_base: str = "https://api.telegram.org",
                 timeout: int = 10,
                 session: Optional[requests.Session] = None):
        self.token = token
        self.api_url = f"{api_base.rstrip('/')}/bot{token}"
        self.timeout = timeout
        self.session = session or requests.Session()

        if not token:
            logger.warning("TELEGRAM_BOT_TOKEN is not set; Telegram calls will be skipped")

    def send_message(self, chat_id: int, text: str, parse_mode: ParseMode = ParseMode.HTML) -> bool:
        """
        Gửi tin nhắn tới một chat.

        Returns:
            bool: True nếu Telegram chấp nhận tin nhắn
        """
        if not self.token:
            logger.error("TELEGRAM_BOT_TOKEN is not set")
            return False

        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode != ParseMode.PLAIN:
            payload["parse_mode"] = ParseMode(parse_mode).value

        try:
            response = self.session.post(
                f"{self.api_url}/sendMessage",
                json=payload,
                timeout=self.timeout
            )
            data = response.json()
        except Timeout:
            logger.error(f"Timeout sending Telegram message to {chat_id} ({self.timeout}s)")
            return False
        except RequestException as e:
            logger.error(f"Error sending Telegram message to {chat_id}: {e}")
            return False
        except ValueError as e:
            logger.error(f"Invalid response from Telegram for chat {chat_id}: {e}")
            return False

        if not data.get("ok"):
            logger.error(f"Failed to send message to {chat_id}: {data.get('description')}")
            return False

        return True

    def send_energy_alert(self, chat_id: int, device_name: str, current_energy: float,
                          limit: float, now: Optional[datetime] = None) -> bool:
        message = format_energy_alert(device_name, current_energy, limit, now=now)
        return self.send_message(chat_id, message, ParseMode.HTML)

    def send_welcome_message(self, chat_id: int, first_name: Optional[str] = None) -> bool:
        return self.send_message(chat_id, format_welcome_message(first_name), ParseMode.HTML)

    def get_updates(self, offset: Optional[int] = None, timeout: int = 30) -> Optional[List[Dict[str, Any]]]:
        """
        Long-poll các update mới.

        Args:
            offset: id của update đầu tiên cần lấy (các update nhỏ hơn bị bỏ qua)
            timeout: Thời gian long-poll phía Telegram (giây)

        Returns:
            Danh sách update, hoặc None nếu lỗi
        """
        if not self.token:
            logger.error("TELEGRAM_BOT_TOKEN is not set")
            return None

        params: Dict[str, Any] = {"timeout": timeout}
        if offset:
            params["offset"] = offset

        try:
            response = self.session.get(
                f"{self.api_url}/getUpdates",
                params=params,
                timeout=timeout + self.timeout
            )
            data = response.json()
        except RequestException as e:
            logger.error(f"Error getting Telegram updates: {e}")
            return None
        except ValueError as e:
            logger.error(f"Invalid getUpdates response: {e}")
            return None

        if not data.get("ok"):
            logger.error(f"Failed to get updates: {data.get('description')}")
            return None

        return data.get("result", [])
