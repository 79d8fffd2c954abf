"""
Thin record-store adapter over the Supabase table API.

The coordinators only need find / insert / update against a handful of
tables, plus a way to tell a unique-index rejection apart from every other
failure. Everything Supabase-specific stays in this module.
"""

from typing import Any, Dict, List, Optional, Protocol
import logging

from postgrest.exceptions import APIError
from supabase import Client

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class RecordStoreError(Exception):
    """Any record-store failure other than a unique-index rejection."""


class UniqueViolation(RecordStoreError):
    """The store rejected a write because of a unique constraint."""


class RecordStore(Protocol):
    def find(
        self,
        table: str,
        match: Optional[Dict[str, Any]] = None,
        any_of: Optional[Dict[str, Any]] = None,
        columns: str = "*",
    ) -> Optional[Dict[str, Any]]: ...

    def find_all(
        self,
        table: str,
        match: Optional[Dict[str, Any]] = None,
        columns: str = "*",
    ) -> List[Dict[str, Any]]: ...

    def insert(self, table: str, fields: Dict[str, Any]) -> Dict[str, Any]: ...

    def update(self, table: str, record_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]: ...


def _quote(value: Any) -> str:
    """Quote a value for a PostgREST or=() filter so commas and parens in names survive."""
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


def build_or_filter(any_of: Dict[str, Any]) -> str:
    """{"name": "FC Reds", "slug": "fc-reds"} -> 'name.eq."FC Reds",slug.eq."fc-reds"'"""
    return ",".join(f"{column}.eq.{_quote(value)}" for column, value in any_of.items())


def _translate(exc: Exception, action: str, table: str) -> RecordStoreError:
    if isinstance(exc, APIError) and str(exc.code) == UNIQUE_VIOLATION_CODE:
        return UniqueViolation(exc.message or f"Unique constraint violated on {table}")
    if isinstance(exc, APIError):
        return RecordStoreError(exc.message or f"Failed to {action} {table}")
    return RecordStoreError(f"Failed to {action} {table}: {exc}")


class SupabaseRecordStore:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find(
        self,
        table: str,
        match: Optional[Dict[str, Any]] = None,
        any_of: Optional[Dict[str, Any]] = None,
        columns: str = "*",
    ) -> Optional[Dict[str, Any]]:
        """Return the first row matching every `match` pair and any `any_of` pair, or None."""
        try:
            query = self.supabase.table(table).select(columns)
            for column, value in (match or {}).items():
                query = query.eq(column, value)
            if any_of:
                query = query.or_(build_or_filter(any_of))
            result = query.limit(1).execute()
        except Exception as e:
            raise _translate(e, "read", table) from e
        return result.data[0] if result.data else None

    def find_all(
        self,
        table: str,
        match: Optional[Dict[str, Any]] = None,
        columns: str = "*",
    ) -> List[Dict[str, Any]]:
        try:
            query = self.supabase.table(table).select(columns)
            for column, value in (match or {}).items():
                query = query.eq(column, value)
            result = query.execute()
        except Exception as e:
            raise _translate(e, "read", table) from e
        return result.data or []

    def insert(self, table: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.supabase.table(table).insert(fields).execute()
        except Exception as e:
            raise _translate(e, "insert into", table) from e
        if not result.data:
            raise RecordStoreError(f"Insert into {table} returned no row")
        return result.data[0]

    def update(self, table: str, record_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Update one row by id. Returns None when no row has that id."""
        try:
            result = self.supabase.table(table)\
                .update(fields)\
                .eq("id", record_id)\
                .execute()
        except Exception as e:
            raise _translate(e, "update", table) from e
        return result.data[0] if result.data else None
