"""
Record Store contract and its SQLite implementation.

The portal talks to its relational store through four logical operations
(insert / select / update / delete per table). `RecordStore` fixes that
contract; `SQLiteRecordStore` implements it locally with WAL mode and a busy
timeout, `repositories.supabase_store.SupabaseRecordStore` implements it
against a hosted Supabase project.

IMPORTANT: Store instantiation should be done through the DI layer.
Use core.dependencies.get_record_store() instead of instantiating directly.
"""
import json
import sqlite3
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

from core.config import DATABASE_PATH, DATABASE_BUSY_TIMEOUT
from core.exceptions import RecordConflictError, RecordStoreError

logger = logging.getLogger(__name__)


# =============================================================================
# TABLE DEFINITIONS
# =============================================================================
# Column -> SQLite type. List-valued columns are stored as JSON text and
# boolean columns as 0/1; both are decoded back on read.

TABLES: Dict[str, Dict[str, str]] = {
    "profiles": {
        "id": "TEXT PRIMARY KEY",
        "email": "TEXT",
        "full_name": "TEXT",
        "avatar_url": "TEXT",
        "enrollment_number": "TEXT",
        "course": "TEXT",
        "phone": "TEXT",
        "age": "INTEGER",
        "height": "REAL",
        "weight": "REAL",
        "blood_group": "TEXT",
        "allergies": "TEXT",
        "chronic_conditions": "TEXT",
        "medications": "TEXT",
        "exercise_frequency": "TEXT",
        "sleep_hours": "REAL",
        "stress_level": "INTEGER",
        "diet_type": "TEXT",
        "medical_details_completed": "INTEGER NOT NULL DEFAULT 0",
        "created_at": "TEXT",
        "updated_at": "TEXT",
    },
    "bmi_records": {
        "id": "TEXT PRIMARY KEY",
        "user_id": "TEXT NOT NULL",
        "bmi": "REAL NOT NULL",
        "category": "TEXT NOT NULL",
        "height": "REAL NOT NULL",
        "weight": "REAL NOT NULL",
        "calculated_at": "TEXT NOT NULL",
    },
    "mental_health_assessments": {
        "id": "TEXT PRIMARY KEY",
        "user_id": "TEXT NOT NULL",
        "name": "TEXT",
        "email": "TEXT",
        "score": "INTEGER NOT NULL",
        "status": "TEXT NOT NULL",
        "recommendations": "TEXT NOT NULL",
        "lifestyle": "TEXT NOT NULL",
        "stressors": "TEXT",
        "created_at": "TEXT NOT NULL",
    },
    "medical_records": {
        "id": "TEXT PRIMARY KEY",
        "user_id": "TEXT NOT NULL",
        "file_name": "TEXT NOT NULL",
        "file_url": "TEXT NOT NULL",
        "file_path": "TEXT NOT NULL",
        "file_type": "TEXT NOT NULL",
        "description": "TEXT",
        "record_date": "TEXT",
        "uploaded_at": "TEXT NOT NULL",
    },
    # Only used by the local identity backend
    "users": {
        "id": "TEXT PRIMARY KEY",
        "email": "TEXT UNIQUE NOT NULL",
        "password_hash": "TEXT NOT NULL",
        "full_name": "TEXT",
        "created_at": "TEXT NOT NULL",
    },
    "sessions": {
        "id": "TEXT PRIMARY KEY",
        "user_id": "TEXT NOT NULL",
        "expires_at": "TEXT NOT NULL",
        "created_at": "TEXT NOT NULL",
    },
}

JSON_COLUMNS = {
    "profiles": {"allergies", "chronic_conditions"},
    "mental_health_assessments": {"recommendations", "lifestyle"},
}

BOOL_COLUMNS = {
    "profiles": {"medical_details_completed"},
}

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_bmi_user ON bmi_records (user_id, calculated_at)",
    "CREATE INDEX IF NOT EXISTS idx_assessments_user ON mental_health_assessments (user_id, created_at)",
    "CREATE INDEX IF NOT EXISTS idx_medical_records_user ON medical_records (user_id, uploaded_at)",
    "CREATE INDEX IF NOT EXISTS idx_sessions_user ON sessions (user_id)",
]


# =============================================================================
# CONTRACT
# =============================================================================

class RecordStore(ABC):
    """
    Relational record store with filtered read/insert/update/delete per table.

    Rows travel as plain dicts keyed by column name. Implementations raise
    RecordStoreError (or RecordConflictError) on failure.
    """

    @abstractmethod
    def insert(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored (including generated id)."""

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return rows matching all equality filters."""

    @abstractmethod
    def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply a partial update; return the updated row or None if the id is unknown."""

    @abstractmethod
    def delete(self, table: str, record_id: str) -> bool:
        """Delete a row by id; return whether a row was removed."""

    @abstractmethod
    def ping(self) -> None:
        """Raise if the store is unreachable."""

    def select_one(self, table: str, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Convenience: first row matching the filters, or None."""
        rows = self.select(table, filters=filters, limit=1)
        return rows[0] if rows else None


# =============================================================================
# SQLITE IMPLEMENTATION
# =============================================================================

class SQLiteRecordStore(RecordStore):
    """
    SQLite-backed record store with concurrency optimizations.

    Features:
    - WAL mode for better concurrent read/write performance
    - Busy timeout to handle lock contention gracefully
    - Column whitelist per table (filters and patches never reach SQL unchecked)
    - UUID primary keys generated on insert when the caller supplies none

    Usage:
        # Via dependency injection (recommended):
        from core.dependencies import get_record_store
        store = get_record_store()

        # Direct instantiation (for testing):
        store = SQLiteRecordStore(db_path="/tmp/test.db")
    """

    def __init__(self, db_path: Optional[str] = None, busy_timeout: Optional[int] = None):
        """
        Initialize the store and create the schema if needed.

        Args:
            db_path: Path to SQLite database file. Defaults to config DATABASE_PATH.
            busy_timeout: SQLite busy timeout in milliseconds. Defaults to config value.
        """
        self.db_path = db_path or DATABASE_PATH
        self.busy_timeout = busy_timeout if busy_timeout is not None else DATABASE_BUSY_TIMEOUT

        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    def _configure_connection(self, conn: sqlite3.Connection) -> None:
        conn.execute(f"PRAGMA busy_timeout = {self.busy_timeout}")
        conn.execute("PRAGMA foreign_keys = ON")

    def _init_db(self) -> None:
        """Create tables and indexes, and enable WAL mode."""
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        cursor = conn.cursor()

        # WAL mode persists in the database file
        cursor.execute("PRAGMA journal_mode = WAL")
        result = cursor.fetchone()
        if result and result[0].lower() == 'wal':
            logger.info(f"SQLite WAL mode enabled for {self.db_path}")
        else:
            logger.warning(f"Failed to enable WAL mode, current mode: {result}")

        for table, columns in TABLES.items():
            column_sql = ",\n                ".join(f"{name} {ddl}" for name, ddl in columns.items())
            cursor.execute(f"CREATE TABLE IF NOT EXISTS {table} (\n                {column_sql}\n            )")
        for statement in INDEXES:
            cursor.execute(statement)

        conn.commit()
        conn.close()

        logger.info(
            f"Record store initialized: {self.db_path} "
            f"(busy_timeout={self.busy_timeout}ms)"
        )

    def get_connection(self) -> sqlite3.Connection:
        """Get a new configured connection with dict-like rows."""
        conn = sqlite3.connect(self.db_path)
        self._configure_connection(conn)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self, operation: str, table: str) -> Iterator[sqlite3.Cursor]:
        """Run a block in one transaction, translating sqlite errors to RecordStoreError."""
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            yield cursor
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            logger.warning(
                "Record store constraint violation",
                extra={"operation": operation, "table": table, "error": str(e)}
            )
            raise RecordConflictError(operation=operation, table=table) from e
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(
                "Record store operation failed",
                extra={"operation": operation, "table": table, "error": str(e)}
            )
            raise RecordStoreError(operation=operation, table=table) from e
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Encoding helpers
    # -------------------------------------------------------------------------

    def _check_columns(self, table: str, columns) -> None:
        if table not in TABLES:
            raise ValueError(f"Unknown table: {table}")
        unknown = set(columns) - set(TABLES[table])
        if unknown:
            raise ValueError(f"Unknown column(s) for {table}: {', '.join(sorted(unknown))}")

    def _encode(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        json_cols = JSON_COLUMNS.get(table, set())
        bool_cols = BOOL_COLUMNS.get(table, set())
        encoded = {}
        for key, value in record.items():
            if key in json_cols and value is not None:
                value = json.dumps(list(value))
            elif key in bool_cols and value is not None:
                value = 1 if value else 0
            encoded[key] = value
        return encoded

    def _decode(self, table: str, row: sqlite3.Row) -> Dict[str, Any]:
        json_cols = JSON_COLUMNS.get(table, set())
        bool_cols = BOOL_COLUMNS.get(table, set())
        decoded = dict(row)
        for key in json_cols:
            if decoded.get(key) is not None:
                decoded[key] = json.loads(decoded[key])
        for key in bool_cols:
            if key in decoded:
                decoded[key] = bool(decoded[key])
        return decoded

    # -------------------------------------------------------------------------
    # RecordStore operations
    # -------------------------------------------------------------------------

    def insert(self, table: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        self._check_columns(table, record.keys())
        values = self._encode(table, record)
        values.setdefault("id", str(uuid.uuid4()))

        columns = list(values)
        placeholders = ", ".join("?" for _ in columns)

        # Insert and read back in the same transaction
        with self._transaction("insert", table) as cursor:
            cursor.execute(
                f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})",
                [values[c] for c in columns],
            )
            cursor.execute(f"SELECT * FROM {table} WHERE id = ?", (values["id"],))
            row = cursor.fetchone()

        return self._decode(table, row)

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        filters = dict(filters or {})
        self._check_columns(table, list(filters) + ([order_by] if order_by else []))
        encoded = self._encode(table, filters)

        query = f"SELECT * FROM {table} WHERE 1=1"
        params: List[Any] = []
        for column, value in encoded.items():
            if value is None:
                query += f" AND {column} IS NULL"
            else:
                query += f" AND {column} = ?"
                params.append(value)

        if order_by:
            query += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

        if limit:
            query += " LIMIT ?"
            params.append(limit)

        with self._transaction("select", table) as cursor:
            cursor.execute(query, params)
            rows = cursor.fetchall()

        return [self._decode(table, row) for row in rows]

    def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        patch = {k: v for k, v in patch.items() if k != "id"}
        self._check_columns(table, patch.keys())
        values = self._encode(table, patch)

        with self._transaction("update", table) as cursor:
            if values:
                assignments = ", ".join(f"{column} = ?" for column in values)
                cursor.execute(
                    f"UPDATE {table} SET {assignments} WHERE id = ?",
                    [*values.values(), record_id],
                )
            cursor.execute(f"SELECT * FROM {table} WHERE id = ?", (record_id,))
            row = cursor.fetchone()

        return self._decode(table, row) if row else None

    def delete(self, table: str, record_id: str) -> bool:
        self._check_columns(table, [])
        with self._transaction("delete", table) as cursor:
            cursor.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,))
            removed = cursor.rowcount > 0
        return removed

    def ping(self) -> None:
        with self._transaction("ping", "sqlite_master") as cursor:
            cursor.execute("SELECT 1")
