"""
Thiết lập hệ thống logging.
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
import os

from energy_migration.infrastructure.config.settings import Config

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_file="energy_migration.log", level=None):
    """Thiết lập cấu hình logging cho ứng dụng."""
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }
    log_level = level or level_map.get(Config.LOG_LEVEL.upper(), logging.INFO)

    # Tạo thư mục logs nếu chưa tồn tại
    os.makedirs(Config.LOG_DIR, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Xoá handler cũ khi gọi lại nhiều lần
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(DEFAULT_FORMAT)

    file_handler = RotatingFileHandler(
        os.path.join(Config.LOG_DIR, log_file),
        maxBytes=10485760,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    # Giảm độ ồn của các thư viện bên ngoài
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)

    logger.info("Logging system initialized")
    return logger
