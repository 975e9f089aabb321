from .store_mock import InMemoryRealtimeDatabase, InMemoryFirestore, FakeTelegramClient

__all__ = ["InMemoryRealtimeDatabase", "InMemoryFirestore", "FakeTelegramClient"]
