from app.core.db.base import Base, BaseModel
from app.core.db.engine import Database, get_db_util

__all__ = ["Base", "BaseModel", "Database", "get_db_util"]
