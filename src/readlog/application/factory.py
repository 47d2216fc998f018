"""
Gateway Factory
Centralizes the logic for selecting the storage backend.
"""

import logging

from readlog.application.config import AppConfig
from readlog.application.tracker import ReadingTracker
from readlog.domain.ports import RecordGateway
from readlog.infrastructure.adapters.memory_gateway import InMemoryRecordGateway
from readlog.infrastructure.adapters.sqlite_gateway import SqliteRecordGateway

logger = logging.getLogger(__name__)


def get_record_gateway(config: AppConfig) -> RecordGateway:
    """
    Returns the RecordGateway implementation selected by config.
    """
    if config.backend == "memory":
        logger.debug("Backend: memory")
        return InMemoryRecordGateway()

    logger.debug(f"Backend: sqlite ({config.db_path})")
    return SqliteRecordGateway(config.db_path)


def build_tracker(config: AppConfig) -> ReadingTracker:
    """Returns an unstarted ReadingTracker that owns its gateway."""
    return ReadingTracker(get_record_gateway(config), close_gateway=True)
