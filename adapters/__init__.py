"""
Adapters package - External storage connections.
The embedded SQLite database is the only storage backend.
"""

from adapters.sqlite_adapter import DatabaseConnection, SQLITE_PRAGMAS, MEMORY_DATABASE

__all__ = [
    "DatabaseConnection",
    "SQLITE_PRAGMAS",
    "MEMORY_DATABASE",
]
