"""
App package - Application configuration and core utilities.
Contains settings, exceptions, logging setup and the composition root.
"""

from app.config import settings
from app.exceptions import (
    DatabaseError,
    NotInitializedError,
    ConnectionFailedError,
    ServiceValidationError,
    NotFoundError,
    QueryFailedError,
    WriteFailedError,
    MigrationError,
    SeedError,
)

__all__ = [
    "settings",
    "DatabaseError",
    "NotInitializedError",
    "ConnectionFailedError",
    "ServiceValidationError",
    "NotFoundError",
    "QueryFailedError",
    "WriteFailedError",
    "MigrationError",
    "SeedError",
]
