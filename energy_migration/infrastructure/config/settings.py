"""
Cấu hình tập trung cho công cụ migration và hệ thống cảnh báo.
"""
import os
from dotenv import load_dotenv

from energy_migration.infrastructure.exceptions import ConfigurationError

# Load biến môi trường từ file .env
load_dotenv()


class Config:

    # Cấu hình Firebase
    FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH", "./firebase-service-account.json")
    FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL", "")

    # Firestore giới hạn 500 thao tác ghi cho mỗi batch
    FIRESTORE_BATCH_LIMIT = int(os.getenv("FIRESTORE_BATCH_LIMIT", "500"))

    # Cấu hình Telegram Bot
    TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
    TELEGRAM_API_BASE = os.getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
    TELEGRAM_REQUEST_TIMEOUT = int(os.getenv("TELEGRAM_REQUEST_TIMEOUT", "10"))
    TELEGRAM_POLL_TIMEOUT = int(os.getenv("TELEGRAM_POLL_TIMEOUT", "30"))

    # Cấu hình logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR", "logs")

    @classmethod
    def validate(cls, *required_vars):
        """
        Kiểm tra các biến môi trường bắt buộc.

        Args:
            required_vars: Tên các thuộc tính cấu hình phải có giá trị

        Raises:
            ConfigurationError: Nếu thiếu biến nào đó
        """
        missing_vars = []
        for var in required_vars:
            if not getattr(cls, var, None):
                missing_vars.append(var)

        if missing_vars:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing_vars)}",
                details={"missing": missing_vars}
            )

        if cls.FIRESTORE_BATCH_LIMIT < 1 or cls.FIRESTORE_BATCH_LIMIT > 500:
            raise ConfigurationError(
                "FIRESTORE_BATCH_LIMIT must be between 1 and 500",
                details={"value": cls.FIRESTORE_BATCH_LIMIT}
            )

        return True
