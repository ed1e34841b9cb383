# Rowtrack package
__version__ = "1.0.0"

from .models import Role, Category, Group
from .repository import Repository, MemoryRepository, SqlRepository

__all__ = [
    "Role",
    "Category",
    "Group",
    "Repository",
    "MemoryRepository",
    "SqlRepository",
]
