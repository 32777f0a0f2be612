"""
Record Store backed by a hosted Supabase project (PostgREST tables).

Rows are exchanged as plain dicts, same as SQLiteRecordStore; list-valued
columns are native Postgres arrays/JSON on the Supabase side so no encoding
is needed here.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from supabase import Client

from core.exceptions import RecordConflictError, RecordStoreError
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


class SupabaseRecordStore(RecordStore):
    """RecordStore implementation over supabase-py's table builder."""

    def __init__(self, client: Client):
        self._client = client

    def _execute(self, operation: str, table: str, query) -> List[Dict[str, Any]]:
        try:
            response = query.execute()
        except Exception as e:
            code = getattr(e, "code", None)
            logger.error(
                "Supabase table operation failed",
                extra={"operation": operation, "table": table, "error": str(e), "code": code}
            )
            if code == UNIQUE_VIOLATION:
                raise RecordConflictError(operation=operation, table=table) from e
            raise RecordStoreError(operation=operation, table=table) from e
        return response.data or []

    def insert(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        rows = self._execute("insert", table, self._client.table(table).insert(dict(record)))
        if not rows:
            raise RecordStoreError(operation="insert", table=table)
        return rows[0]

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.is_(column, "null") if value is None else query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit:
            query = query.limit(limit)
        return self._execute("select", table, query)

    def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        patch = {k: v for k, v in patch.items() if k != "id"}
        if not patch:
            return self.select_one(table, {"id": record_id})
        rows = self._execute("update", table, self._client.table(table).update(patch).eq("id", record_id))
        return rows[0] if rows else None

    def delete(self, table: str, record_id: str) -> bool:
        rows = self._execute("delete", table, self._client.table(table).delete().eq("id", record_id))
        return bool(rows)

    def ping(self) -> None:
        self._execute("ping", "profiles", self._client.table("profiles").select("id").limit(1))
