"""
repositories/base.py
--------------------
Shared CRUD plumbing for the per-table repositories.

A subclass declares its table, the columns it inserts, the columns that
may be patched and its list ordering, and implements ``_from_row`` to map
one row dict onto its domain model. Rows are checked against the expected
columns before mapping, so a schema drift fails loudly instead of
leaking half-filled records into the services.
"""

import uuid
from typing import Any, Iterable, Mapping, Optional

from psycopg2 import sql

from db.connection import dict_cursor, get_connection, release_connection
from utils.errors import RecordShapeError
from utils.logger import get_logger

logger = get_logger(__name__)


def require_columns(row: Mapping[str, Any], columns: Iterable[str], table: str) -> None:
    """
    Raise RecordShapeError if ``row`` lacks any of ``columns``.

    Extra keys (``user_id`` and the like) are allowed and ignored.
    """
    missing = [c for c in columns if c not in row]
    if missing:
        raise RecordShapeError(table, missing)


def is_record_id(value: Any) -> bool:
    """True if ``value`` looks like a primary key of ours (a UUID)."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class RecordRepository:
    """
    Base repository: list / get / add / update / delete scoped to one account.

    Class attributes:
        table: Table name.
        columns: Insertable columns; each matches a model attribute.
        server_columns: Columns filled in by the database (id, timestamps).
        updatable: Columns accepted by ``update``.
        order_by: (column, direction) pairs for ``list_all``.
    """

    table: str = ""
    columns: tuple[str, ...] = ()
    server_columns: tuple[str, ...] = ("id",)
    updatable: frozenset[str] = frozenset()
    order_by: tuple[tuple[str, str], ...] = (("created_at", "DESC"),)

    # ── READ ──────────────────────────────────────────────

    def list_all(self, user_id: int) -> list:
        """Return every record owned by ``user_id`` in the table's list order."""
        query = sql.SQL("SELECT * FROM {table} WHERE user_id = %s ORDER BY {order};").format(
            table=sql.Identifier(self.table),
            order=self._order_clause(),
        )
        conn = get_connection()
        try:
            with dict_cursor(conn) as cur:
                cur.execute(query, (user_id,))
                return [self._map(row) for row in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, record_id: str, user_id: int) -> Optional[Any]:
        """Fetch a single record by id, scoped to the account."""
        if not is_record_id(record_id):
            return None
        query = sql.SQL("SELECT * FROM {table} WHERE id = %s AND user_id = %s;").format(
            table=sql.Identifier(self.table),
        )
        conn = get_connection()
        try:
            with dict_cursor(conn) as cur:
                cur.execute(query, (record_id, user_id))
                row = cur.fetchone()
                return self._map(row) if row else None
        finally:
            release_connection(conn)

    # ── CREATE ────────────────────────────────────────────

    def add(self, record: Any, user_id: int) -> Any:
        """
        Insert a new record.

        Returns:
            A new model instance carrying the store-assigned id and defaults.
        """
        query = sql.SQL(
            "INSERT INTO {table} (user_id, {columns}) VALUES (%s, {values}) RETURNING *;"
        ).format(
            table=sql.Identifier(self.table),
            columns=sql.SQL(", ").join(sql.Identifier(c) for c in self.columns),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in self.columns),
        )
        params = [user_id] + [getattr(record, c) for c in self.columns]
        conn = get_connection()
        try:
            with dict_cursor(conn) as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()
            stored = self._map(row)
            logger.info(f"Added {self.table} #{stored.id} for user {user_id}")
            return stored
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add to {self.table}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, record_id: str, user_id: int, **fields: Any) -> Optional[Any]:
        """
        Patch only the given columns; every other column keeps its value.

        Returns:
            The updated record, or None if no row matched.

        Raises:
            ValueError: If ``fields`` is empty or names a column outside ``updatable``.
        """
        if not fields:
            raise ValueError("Nothing to update")
        unknown = set(fields) - self.updatable
        if unknown:
            raise ValueError(f"Cannot update {', '.join(sorted(unknown))} on {self.table}")
        if not is_record_id(record_id):
            return None

        query = sql.SQL(
            "UPDATE {table} SET {assignments} WHERE id = %s AND user_id = %s RETURNING *;"
        ).format(
            table=sql.Identifier(self.table),
            assignments=sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(k), sql.Placeholder()) for k in fields
            ),
        )
        params = list(fields.values()) + [record_id, user_id]
        conn = get_connection()
        try:
            with dict_cursor(conn) as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()
            if row is None:
                return None
            logger.info(f"Updated {self.table} #{record_id}: {', '.join(fields)}")
            return self._map(row)
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update {self.table} #{record_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, record_id: str, user_id: int) -> bool:
        """
        Delete a record by id, scoped to the account.

        Returns:
            True if a row was deleted, False if there was nothing to delete.
        """
        if not is_record_id(record_id):
            return False
        query = sql.SQL("DELETE FROM {table} WHERE id = %s AND user_id = %s;").format(
            table=sql.Identifier(self.table),
        )
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (record_id, user_id))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted {self.table} #{record_id} for user {user_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete {self.table} #{record_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    def _order_clause(self) -> sql.Composable:
        parts = []
        for column, direction in self.order_by:
            if direction not in ("ASC", "DESC"):
                raise ValueError(f"Bad sort direction {direction!r} on {self.table}")
            parts.append(sql.SQL("{} {}").format(sql.Identifier(column), sql.SQL(direction)))
        return sql.SQL(", ").join(parts)

    def _map(self, row: Mapping[str, Any]) -> Any:
        require_columns(row, self.server_columns + self.columns, self.table)
        return self._from_row(row)

    def _from_row(self, row: Mapping[str, Any]) -> Any:
        raise NotImplementedError
