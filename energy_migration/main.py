"""
Điểm vào dòng lệnh: migration, kiểm tra cảnh báo năng lượng và phát hiện chat Telegram.
"""
import logging
import sys

from energy_migration.infrastructure import get_service_factory
from energy_migration.infrastructure.config import Config
from energy_migration.infrastructure.exceptions import BaseServiceException
from energy_migration.infrastructure.logging import setup_logging

logger = logging.getLogger(__name__)


def migrate_main():
    """Chạy migration RTDB -> Firestore. Exit code 0 nếu validation thành công."""
    from energy_migration.core.migration import MigrationOrchestrator

    setup_logging("migration.log")
    try:
        Config.validate("FIREBASE_CREDENTIALS_PATH", "FIREBASE_DATABASE_URL")
        factory = get_service_factory()
        orchestrator = MigrationOrchestrator(
            factory.create_rtdb_client(),
            factory.create_firestore_client(),
            batch_limit=Config.FIRESTORE_BATCH_LIMIT
        )
    except BaseServiceException as e:
        logger.error(f"✗ Migration could not start: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"✗ Migration could not start: {e}")
        return 1

    return orchestrator.run().exit_code


def alerts_main():
    """Một chu kỳ kiểm tra cảnh báo năng lượng."""
    from energy_migration.core.alerts import EnergyAlertEvaluator

    setup_logging("energy_alerts.log")
    try:
        Config.validate("FIREBASE_CREDENTIALS_PATH", "TELEGRAM_BOT_TOKEN")
        factory = get_service_factory()
        evaluator = EnergyAlertEvaluator(
            factory.create_firestore_client(),
            factory.create_chat_registry(),
            factory.create_telegram_client()
        )
        evaluator.run()
    except BaseServiceException as e:
        logger.error(f"Energy alerts failed: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error during energy alerts: {e}")
        return 1

    return 0


def discovery_main():
    """Một lần poll Telegram để đăng ký chat mới."""
    from energy_migration.core.notifications import ChatDiscovery

    setup_logging("telegram_discovery.log")
    try:
        Config.validate("FIREBASE_CREDENTIALS_PATH", "TELEGRAM_BOT_TOKEN")
        factory = get_service_factory()
        discovery = ChatDiscovery(
            factory.create_telegram_client(),
            factory.create_chat_registry(),
            poll_timeout=Config.TELEGRAM_POLL_TIMEOUT
        )
        discovery.run_once()
    except BaseServiceException as e:
        logger.error(f"Telegram discovery failed: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error during Telegram discovery: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(migrate_main())
