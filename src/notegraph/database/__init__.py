"""
Database module for notegraph
"""

from .connection import (
    create_engine_from_settings,
    create_session_factory,
    session_scope,
    check_database_connection,
)

__all__ = [
    "create_engine_from_settings",
    "create_session_factory",
    "session_scope",
    "check_database_connection",
]
