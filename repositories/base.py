"""
Base repository for the data access layer.
Repositories share one injected DatabaseConnection and never open their own
handle.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, TypeVar

from adapters.sqlite_adapter import DatabaseConnection
from app.config import settings

RepositoryType = TypeVar("RepositoryType", bound="BaseRepository")
T = TypeVar("T")


def build_update_statement(
    table: str, columns: Mapping[str, Any], where: Mapping[str, Any]
) -> Tuple[str, Dict[str, Any]]:
    """
    Build ``UPDATE table SET ... WHERE ...`` touching only ``columns``.

    Column and table names come from the mappers' column maps, never from
    caller input; values are always bound.

    Args:
        table: Table name
        columns: Column name -> new value
        where: Column name -> value, joined with AND

    Returns:
        (statement, params)
    """
    if not columns:
        raise ValueError("build_update_statement needs at least one column to set")
    if not where:
        raise ValueError("build_update_statement needs a WHERE clause")

    params: Dict[str, Any] = {}
    assignments = []
    for column, value in columns.items():
        params[f"set_{column}"] = value
        assignments.append(f"{column} = :set_{column}")

    conditions = []
    for column, value in where.items():
        params[f"where_{column}"] = value
        conditions.append(f"{column} = :where_{column}")

    statement = (
        f"UPDATE {table} SET {', '.join(assignments)} WHERE {' AND '.join(conditions)}"
    )
    return statement, params


def changed_columns(
    row: Mapping[str, Any], fields: Iterable[str], column_map: Mapping[str, str]
) -> Dict[str, Any]:
    """Pick the serialized values of the changed entity fields out of a full row."""
    return {column_map[name]: row[column_map[name]] for name in fields}


class BaseRepository:
    """
    Base repository providing shared plumbing.
    All repositories should inherit from this class.
    """

    def __init__(self, connection: DatabaseConnection):
        self.connection = connection

    def execute_in_transaction(
        self: RepositoryType, operation: Callable[[RepositoryType], T]
    ) -> T:
        """Run ``operation(self)`` inside one transaction; all writes commit or none do."""
        return self.connection.run_in_transaction(lambda _conn: operation(self))

    @staticmethod
    def _page(limit: Optional[int], offset: Optional[int]) -> Dict[str, int]:
        """LIMIT/OFFSET params; a missing or zero limit means the configured page size."""
        return {
            "limit": int(limit) if limit else settings.default_page_size,
            "offset": int(offset or 0),
        }

    @staticmethod
    def _count(row: Optional[Mapping[str, Any]]) -> int:
        return int(row["count"]) if row else 0
