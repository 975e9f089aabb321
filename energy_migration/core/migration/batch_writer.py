"""
Gom các thao tác ghi Firestore thành từng batch có giới hạn kích thước.
"""
import logging
from typing import Any, Dict, Iterable, List, Tuple

from energy_migration.core.data.models import BatchWriteResult
from energy_migration.infrastructure.database.firestore_client import (
    MAX_BATCH_WRITES,
    GroupWrite,
)

logger = logging.getLogger(__name__)


class BatchWriter:
    """
    Tích lũy các cặp (path, document) và commit theo nhóm tối đa `limit` thao tác.

    Mỗi lần commit là độc lập: commit lỗi được ghi log và đếm, các nhóm sau
    vẫn tiếp tục. Không retry; dữ liệu của nhóm lỗi bị mất trong lần chạy này.
    """

    def __init__(self, store, limit: int = MAX_BATCH_WRITES, label: str = ""):
        """
        Args:
            store: Đối tượng có phương thức commit_group(writes)
            limit: Số thao tác tối đa mỗi batch (Firestore: 500)
            label: Tên dùng trong log
        """
        if limit < 1 or limit > MAX_BATCH_WRITES:
            raise ValueError(f"Batch limit must be between 1 and {MAX_BATCH_WRITES}")
        self.store = store
        self.limit = limit
        self.label = label
        self._pending: List[GroupWrite] = []
        self.result = BatchWriteResult()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def add(self, path: str, data: Dict[str, Any]) -> None:
        """Thêm một thao tác ghi; commit ngay khi nhóm đạt giới hạn."""
        self._pending.append((path, data))
        if len(self._pending) >= self.limit:
            self._commit()

    def flush(self) -> BatchWriteResult:
        """Commit phần còn lại và trả về thống kê."""
        if self._pending:
            self._commit(final=True)
        return self.result

    def write_all(self, writes: Iterable[Tuple[str, Dict[str, Any]]]) -> BatchWriteResult:
        """Ghi toàn bộ chuỗi (path, document) rồi flush."""
        for path, data in writes:
            self.add(path, data)
        return self.flush()

    def _commit(self, final: bool = False) -> None:
        group = self._pending
        self._pending = []
        kind = "final batch" if final else "batch"

        try:
            self.store.commit_group(group)
        except Exception as e:
            self.result.failed_commits += 1
            self.result.failed_writes += len(group)
            logger.error(f"{self.label} ✗ Error committing {kind} of {len(group)} writes: {e}")
            return

        self.result.commits += 1
        self.result.written += len(group)
        logger.info(f"{self.label} ✓ Committed {kind} of {len(group)} writes")
