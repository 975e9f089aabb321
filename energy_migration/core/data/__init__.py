from .models import (
    UserRecord,
    DeviceRecord,
    Reading,
    ChatEntry,
    ChatRegistry,
    RecordOutcome,
    CollectionResult,
    BatchWriteResult,
    ReadingsResult,
    ChatRegistryResult,
    ValidationReport,
    MigrationReport,
    AlertSummary,
    DiscoverySummary
)

__all__ = [
    "UserRecord",
    "DeviceRecord",
    "Reading",
    "ChatEntry",
    "ChatRegistry",
    "RecordOutcome",
    "CollectionResult",
    "BatchWriteResult",
    "ReadingsResult",
    "ChatRegistryResult",
    "ValidationReport",
    "MigrationReport",
    "AlertSummary",
    "DiscoverySummary"
]
