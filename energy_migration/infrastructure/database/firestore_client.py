"""
Lớp tiện ích để thao tác với Cloud Firestore (đích migration).
"""
import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from firebase_admin import firestore

from energy_migration.infrastructure.exceptions import DataAccessError

logger = logging.getLogger(__name__)

# Firestore giới hạn số thao tác ghi trong một batch
MAX_BATCH_WRITES = 500

GroupWrite = Tuple[str, Dict[str, Any]]


class FirestoreClient:
    """
    Lớp cung cấp các tiện ích để thao tác với Firestore theo đường dẫn
    dạng 'collection/doc/collection/doc'.
    """

    def __init__(self, client=None):
        """
        Args:
            client: firestore.Client đã khởi tạo (mặc định lấy từ connections)
        """
        if client is None:
            from .connections import get_firestore_client
            client = get_firestore_client()
        self.client = client

    def set_document(self, path: str, data: Dict[str, Any]) -> None:
        """
        Ghi đè toàn bộ một document.

        Args:
            path: Đường dẫn document
            data: Dữ liệu cần ghi
        """
        try:
            self.client.document(path).set(data)
            logger.debug(f"Document set at path: {path}")
        except Exception as e:
            logger.error(f"Firestore set error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to set {path}: {e}", source="firestore") from e

    def update_fields(self, path: str, data: Dict[str, Any]) -> None:
        """
        Cập nhật một phần document. Khóa dạng 'a.b' là field path lồng nhau.

        Args:
            path: Đường dẫn document
            data: Dict chứa các cập nhật
        """
        try:
            self.client.document(path).update(data)
            logger.debug(f"Document updated at path: {path}")
        except Exception as e:
            logger.error(f"Firestore update error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to update {path}: {e}", source="firestore") from e

    def delete_fields(self, path: str, fields: Sequence[str]) -> None:
        """Xóa các field (có thể lồng nhau) khỏi document trong một lần cập nhật."""
        self.update_fields(path, {field: firestore.DELETE_FIELD for field in fields})

    def array_union(self, path: str, field: str, values: Sequence[Any]) -> None:
        """Thêm các giá trị vào field mảng nếu chưa có."""
        self.update_fields(path, {field: firestore.ArrayUnion(list(values))})

    def array_remove(self, path: str, field: str, values: Sequence[Any]) -> None:
        """Xóa các giá trị khỏi field mảng."""
        self.update_fields(path, {field: firestore.ArrayRemove(list(values))})

    def commit_group(self, writes: Iterable[GroupWrite]) -> None:
        """
        Ghi đè một nhóm document trong một batch nguyên tử.

        Args:
            writes: Danh sách (path, data), tối đa 500 phần tử

        Raises:
            ValueError: Nếu nhóm vượt quá giới hạn của Firestore
            DataAccessError: Nếu commit thất bại
        """
        writes = list(writes)
        if len(writes) > MAX_BATCH_WRITES:
            raise ValueError(f"Batch of {len(writes)} writes exceeds limit of {MAX_BATCH_WRITES}")

        batch = self.client.batch()
        for path, data in writes:
            batch.set(self.client.document(path), data)

        try:
            batch.commit()
            logger.debug(f"Committed batch of {len(writes)} writes")
        except Exception as e:
            logger.error(f"Firestore batch commit error ({len(writes)} writes): {str(e)}")
            raise DataAccessError(f"Batch commit failed: {e}", source="firestore") from e

    def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        """
        Lấy dữ liệu document.

        Returns:
            Dict dữ liệu hoặc None nếu document không tồn tại
        """
        try:
            snapshot = self.client.document(path).get()
        except Exception as e:
            logger.error(f"Firestore get error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to get {path}: {e}", source="firestore") from e

        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def read_collection(self, path: str) -> Dict[str, Dict[str, Any]]:
        """
        Đọc toàn bộ collection.

        Returns:
            Dict ánh xạ document id -> dữ liệu
        """
        try:
            return {doc.id: doc.to_dict() or {} for doc in self.client.collection(path).stream()}
        except Exception as e:
            logger.error(f"Firestore read error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to read {path}: {e}", source="firestore") from e

    def read_count(self, path: str) -> int:
        """Đếm số document trong một collection gốc."""
        try:
            return sum(1 for _ in self.client.collection(path).stream())
        except Exception as e:
            logger.error(f"Firestore count error at {path}: {str(e)}")
            raise DataAccessError(f"Failed to count {path}: {e}", source="firestore") from e

    def read_subcollection_count(self, path: str) -> int:
        """
        Đếm số document trong một sub-collection.

        Args:
            path: Đường dẫn dạng 'item-data/{id}/daily'
        """
        return self.read_count(path)
