"""
Pytest configuration.
Puts the project root on sys.path and keeps every test away from the
developer's real database file.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path so we can import adapters, domain, repositories, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from app.config import settings  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Default database path points into tmp_path; seeding stays on as in production."""
    monkeypatch.setattr(settings, "database_path", str(tmp_path / "default.db"))
    monkeypatch.setattr(settings, "seed_on_startup", True)
    monkeypatch.setattr(settings, "db_echo", False)
    yield settings
