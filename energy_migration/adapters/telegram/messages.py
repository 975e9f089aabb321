"""
Nội dung các tin nhắn Telegram (HTML).
"""
from datetime import datetime, timezone
from html import escape
from typing import Optional

BOT_NAME = "AIDE Energy Monitor Bot"


def format_utc_timestamp(moment: datetime) -> str:
    """Định dạng kiểu 'Oct 19, 2026, 3:04 PM'."""
    moment = moment.astimezone(timezone.utc)
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M} {moment:%p}"


def format_energy_alert(device_name: str, current_energy: float, limit: float,
                        now: Optional[datetime] = None) -> str:
    """
    Tạo nội dung cảnh báo vượt ngưỡng năng lượng.

    Args:
        device_name: Tên hiển thị của thiết bị
        current_energy: Năng lượng hiện tại (kWh)
        limit: Ngưỡng đã cấu hình (kWh)
        now: Thời điểm kiểm tra (không phải thời điểm của số đo)
    """
    over_by = current_energy - limit
    timestamp = format_utc_timestamp(now or datetime.now(timezone.utc))

    return (
        "⚠️ <b>Energy Limit Exceeded</b>\n"
        "\n"
        f"Device: <b>{escape(str(device_name))}</b>\n"
        f"Current: <b>{current_energy:.2f} kWh</b>\n"
        f"Limit: <b>{limit:.2f} kWh</b>\n"
        f"Over by: <b>{over_by:.2f} kWh</b>\n"
        "\n"
        f"Time: {timestamp} UTC\n"
        "\n"
        "Please check your device to reduce energy consumption."
    )


def format_welcome_message(first_name: Optional[str] = None) -> str:
    """Tin nhắn chào mừng khi một chat mới được đăng ký."""
    greeting = f"Hi {escape(first_name)}!" if first_name else "Hi there!"

    return (
        f"{greeting} 👋\n"
        "\n"
        f"Welcome to <b>{BOT_NAME}</b>!\n"
        "\n"
        "You will receive notifications when any device exceeds its energy limit.\n"
        "\n"
        "Your chat has been registered for alerts. You'll be notified every 30 minutes "
        "about devices that are over their energy limits.\n"
        "\n"
        "To stop receiving notifications, you can block this bot anytime."
    )
