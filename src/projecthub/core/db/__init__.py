"""Database utilities - engine, sessions, table bootstrap."""

from src.projecthub.core.db.engine import build_engine
from src.projecthub.core.db.schema import create_tables, drop_tables
from src.projecthub.core.db.session import build_session_factory, session_scope

__all__ = [
    # Engine
    "build_engine",
    # Session
    "build_session_factory",
    "session_scope",
    # Schema bootstrap
    "create_tables",
    "drop_tables",
]
