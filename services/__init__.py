"""Services package - Bootstrap and seeding on top of the repositories"""

from services.database_service import DatabaseService
from services.seed_service import SeedService

__all__ = [
    "DatabaseService",
    "SeedService",
]
