"""Database layer"""
from multitimer.db.base import Base
from multitimer.db.session import create_engine_and_session

__all__ = ["Base", "create_engine_and_session"]
