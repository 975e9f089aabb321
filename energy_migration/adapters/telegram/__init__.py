from .client import TelegramClient, ParseMode
from .messages import format_energy_alert, format_welcome_message

__all__ = [
    "TelegramClient",
    "ParseMode",
    "format_energy_alert",
    "format_welcome_message"
]
