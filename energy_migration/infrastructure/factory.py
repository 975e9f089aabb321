"""
Factory để khởi tạo các thành phần chính của ứng dụng.
"""
import logging

from .config.settings import Config
from .database import RealtimeDatabaseClient, FirestoreClient
from .database.connections import init_firebase_connection, get_firestore_client

logger = logging.getLogger(__name__)


class ServiceFactory:
    """
    Factory để khởi tạo và quản lý các service dependencies.
    """

    _instance = None

    def __new__(cls):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super(ServiceFactory, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Khởi tạo factory nếu chưa được khởi tạo."""
        if self._initialized:
            return

        logger.info("Initializing ServiceFactory")
        self.config = Config
        self.services = {}
        self._initialized = True

    def create_rtdb_client(self) -> RealtimeDatabaseClient:
        """Tạo và trả về client đọc Realtime Database."""
        if 'rtdb_client' not in self.services:
            init_firebase_connection()
            self.services['rtdb_client'] = RealtimeDatabaseClient()
            logger.info("Created Realtime Database client")
        return self.services['rtdb_client']

    def create_firestore_client(self) -> FirestoreClient:
        """Tạo và trả về FirestoreClient."""
        if 'firestore_client' not in self.services:
            self.services['firestore_client'] = FirestoreClient(get_firestore_client())
            logger.info("Created Firestore client")
        return self.services['firestore_client']

    def create_chat_registry(self):
        from energy_migration.core.notifications import ChatRegistryStore

        if 'chat_registry' not in self.services:
            self.services['chat_registry'] = ChatRegistryStore(self.create_firestore_client())
        return self.services['chat_registry']

    def create_telegram_client(self):
        from energy_migration.adapters.telegram import TelegramClient

        if 'telegram_client' not in self.services:
            self.services['telegram_client'] = TelegramClient(
                token=self.config.TELEGRAM_BOT_TOKEN,
                api_base=self.config.TELEGRAM_API_BASE,
                timeout=self.config.TELEGRAM_REQUEST_TIMEOUT
            )
            logger.info("Created Telegram client")
        return self.services['telegram_client']
