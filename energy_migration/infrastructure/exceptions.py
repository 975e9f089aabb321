"""
Định nghĩa các exception tùy chỉnh cho ứng dụng.
"""
from typing import Any, Dict, Optional


class BaseServiceException(Exception):
    """Base exception cho tất cả các service exception."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(BaseServiceException):
    """Exception khi gặp lỗi cấu hình."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="configuration_error",
            details=details
        )


class StoreConnectionError(BaseServiceException):
    """Exception khi không kết nối được tới database."""

    def __init__(
        self,
        message: str,
        store_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["store"] = store_name
        super().__init__(
            message=message,
            error_code="connection_error",
            details=details
        )


class DataAccessError(BaseServiceException):
    """Exception khi gặp lỗi truy cập dữ liệu."""

    def __init__(
        self,
        message: str,
        source: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["source"] = source
        super().__init__(
            message=message,
            error_code="data_access_error",
            details=details
        )
