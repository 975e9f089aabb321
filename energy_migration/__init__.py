"""
Công cụ migration dữ liệu từ Firebase Realtime Database sang Firestore
và hệ thống cảnh báo năng lượng qua Telegram.
"""
__version__ = "0.1.0"
