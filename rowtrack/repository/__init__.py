from .base import Repository
from .memory import MemoryRepository
from .sql import SqlRepository

__all__ = ["Repository", "MemoryRepository", "SqlRepository"]
