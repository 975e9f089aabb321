"""
Cấu hình đường dẫn dữ liệu trên Realtime Database (nguồn) và Firestore (đích).
"""

# Realtime Database
RTDB_USERS = "users"
RTDB_DEVICES = "devices"
RTDB_READINGS_DAILY = "readings_daily"
RTDB_TELEGRAM_CHATS = "telegram/active_chats"
RTDB_TELEGRAM_LAST_UPDATE_ID = "telegram/last_update_id"

# Firestore
FS_USERS = "user-data"
FS_DEVICES = "item-data"
FS_DAILY_SUBCOLLECTION = "daily"
FS_TELEGRAM_DOC = "telegram/active_chats"


def user_doc_path(user_id: str) -> str:
    return f"{FS_USERS}/{user_id}"


def device_doc_path(device_id: str) -> str:
    return f"{FS_DEVICES}/{device_id}"


def daily_collection_path(device_id: str) -> str:
    return f"{FS_DEVICES}/{device_id}/{FS_DAILY_SUBCOLLECTION}"


def daily_doc_path(device_id: str, timestamp: str) -> str:
    return f"{daily_collection_path(device_id)}/{timestamp}"


def rtdb_device_readings_path(device_id: str) -> str:
    return f"{RTDB_READINGS_DAILY}/{device_id}"
