"""
Thiết lập kết nối đến Firebase (Realtime Database và Firestore).
"""
import os
import logging
import firebase_admin
from firebase_admin import credentials, db, firestore

from energy_migration.infrastructure.config.settings import Config
from energy_migration.infrastructure.exceptions import StoreConnectionError

# Khởi tạo logger
logger = logging.getLogger(__name__)

# Biến toàn cục lưu trữ kết nối
firebase_app = None
firestore_client = None


def init_firebase_connection():
    """Khởi tạo kết nối Firebase."""
    global firebase_app

    # Kiểm tra xem Firebase đã được khởi tạo chưa
    if firebase_app is not None:
        logger.info("Firebase app already initialized")
        return firebase_app

    # Nếu đã có một app khác được khởi tạo, sử dụng nó
    if firebase_admin._apps:
        logger.info("Using existing Firebase app")
        firebase_app = firebase_admin.get_app()
        return firebase_app

    cred_path = Config.FIREBASE_CREDENTIALS_PATH
    db_url = Config.FIREBASE_DATABASE_URL

    if not cred_path or not os.path.exists(cred_path):
        logger.error(f"Firebase credentials file not found: {cred_path}")
        raise StoreConnectionError(
            f"Firebase credentials file not found: {cred_path}",
            store_name="firebase"
        )

    try:
        cred = credentials.Certificate(cred_path)
        firebase_app = firebase_admin.initialize_app(cred, {
            'databaseURL': db_url
        })
    except Exception as e:
        logger.error(f"Failed to connect to Firebase: {str(e)}")
        raise StoreConnectionError(str(e), store_name="firebase") from e

    logger.info(f"Firebase connection established to {db_url}")
    return firebase_app


def get_firebase_db_reference(path=None):
    """
    Trả về tham chiếu đến Firebase Realtime Database.

    Args:
        path: Đường dẫn trong database (tùy chọn)

    Returns:
        Tham chiếu đến database
    """
    if firebase_app is None:
        init_firebase_connection()

    # Đảm bảo path là chuỗi hợp lệ
    if path is None:
        path = "/"

    return db.reference(path)


def get_firestore_client():
    """Trả về Firestore client dùng chung."""
    global firestore_client

    if firestore_client is None:
        app = init_firebase_connection()
        firestore_client = firestore.client(app)
        logger.info("Firestore client created")

    return firestore_client
