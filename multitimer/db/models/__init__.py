"""SQLAlchemy ORM models"""

from multitimer.db.models.kv_record import KeyValueRecord

__all__ = ["KeyValueRecord"]
