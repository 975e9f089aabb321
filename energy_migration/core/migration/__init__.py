from .batch_writer import BatchWriter
from .collection_migrator import CollectionMigrator
from .validator import MigrationValidator
from .orchestrator import MigrationOrchestrator

__all__ = [
    "BatchWriter",
    "CollectionMigrator",
    "MigrationValidator",
    "MigrationOrchestrator"
]
