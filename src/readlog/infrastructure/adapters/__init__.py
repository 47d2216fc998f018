# Infrastructure Adapters Package
from .memory_gateway import InMemoryRecordGateway
from .sqlite_gateway import SqliteRecordGateway

__all__ = ["InMemoryRecordGateway", "SqliteRecordGateway"]
