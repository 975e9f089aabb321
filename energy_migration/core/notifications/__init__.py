from .chat_registry import ChatRegistryStore
from .discovery import ChatDiscovery, advance_cursor

__all__ = ["ChatRegistryStore", "ChatDiscovery", "advance_cursor"]
