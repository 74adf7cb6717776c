from .migrator import SQLiteMigrator
from .uow import SQLiteUnitOfWork

__all__ = ["SQLiteMigrator", "SQLiteUnitOfWork"]
