from .connections import (
    init_firebase_connection,
    get_firebase_db_reference,
    get_firestore_client
)
from .firebase_client import RealtimeDatabaseClient
from .firestore_client import FirestoreClient, MAX_BATCH_WRITES

__all__ = [
    "init_firebase_connection",
    "get_firebase_db_reference",
    "get_firestore_client",
    "RealtimeDatabaseClient",
    "FirestoreClient",
    "MAX_BATCH_WRITES"
]
