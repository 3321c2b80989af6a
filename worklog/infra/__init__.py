"""Infrastructure layer - Cache tier, durable tier and configuration"""

from .db import DatabaseEngine
from .cache import LocalCache
from .durable_store import DurableStore, SqlDurableStore, FileDurableStore, create_durable_store

__all__ = ["DatabaseEngine", "LocalCache", "DurableStore", "SqlDurableStore", "FileDurableStore",
           "create_durable_store"]
