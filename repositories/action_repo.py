# ============================================================================
# ACTION REPOSITORY
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - ActionInstance CRUD operations
# PURPOSE: Database access for the actions table
# CREATED: 13 OCT 2026
# ============================================================================
"""
Action Repository

PostgreSQL persistence adapter for action rows.

Encoding boundary:
- parameters are stored as JSONB and come back as a dict
- trigger_names are stored space-joined
- aid is stored as text with aid_numeric marking numeric ids
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from psycopg import errors, sql
from psycopg.rows import dict_row
from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from core.config import get_defaults
from core.models import ActionInstance
from .base import (
    ActionId,
    ActionNotFoundError,
    ActionRepository,
    DuplicateActionError,
)
from .database import actions_table

COLUMNS = (
    "aid", "aid_numeric", "type", "callback", "parameters", "label",
    "configurable", "node_type", "node_id", "trigger_names", "source_file",
)


def _key(aid: ActionId) -> Tuple[str, bool]:
    """Storage key for an id: (text, is_numeric)."""
    return str(aid), isinstance(aid, int)


def _column_value(field: str, value: Any) -> Any:
    """Encode one model field for storage."""
    if field == "parameters":
        return Json(value or {})
    if field == "trigger_names":
        if isinstance(value, str):
            return " ".join(value.split())
        return " ".join(sorted(value or ()))
    if field == "configurable":
        return int(value)
    return value


class PostgresActionRepository(ActionRepository):
    """Repository for ActionInstance rows in PostgreSQL."""

    def __init__(self, pool: ConnectionPool, schema: Optional[str] = None):
        super().__init__()
        self.pool = pool
        self.schema = schema or get_defaults().storage.db_schema
        self.table = actions_table(self.schema)

    # =========================================================================
    # ROW MAPPING
    # =========================================================================

    @staticmethod
    def _row_to_model(row: Dict[str, Any]) -> ActionInstance:
        aid = int(row["aid"]) if row["aid_numeric"] else row["aid"]
        return ActionInstance(
            aid=aid,
            type=row["type"],
            callback=row["callback"],
            parameters=row["parameters"] or {},
            label=row["label"],
            configurable=row["configurable"],
            node_type=row["node_type"],
            node_id=row["node_id"],
            trigger_names=row["trigger_names"] or "",
            source_file=row["source_file"],
        )

    @staticmethod
    def _model_to_params(action: ActionInstance) -> Dict[str, Any]:
        aid, numeric = _key(action.aid)
        params = {"aid": aid, "aid_numeric": numeric}
        for field in COLUMNS[2:]:
            params[field] = _column_value(field, getattr(action, field))
        return params

    def _select(self, where: sql.Composable, params: Any = None) -> List[ActionInstance]:
        query = sql.SQL("SELECT {} FROM {} WHERE {} ORDER BY aid").format(
            sql.SQL(", ").join(map(sql.Identifier, COLUMNS)),
            self.table,
            where,
        )
        with self.pool.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return [self._row_to_model(row) for row in cur.fetchall()]

    # =========================================================================
    # READS
    # =========================================================================

    def select_all(self) -> List[ActionInstance]:
        with self._error_context("action select_all"):
            return self._select(sql.SQL("TRUE"))

    def select_by_id(self, aid: ActionId) -> Optional[ActionInstance]:
        text, numeric = _key(aid)
        with self._error_context("action select", aid):
            rows = self._select(
                sql.SQL("aid = %s AND aid_numeric = %s"),
                (text, numeric),
            )
        return rows[0] if rows else None

    def select_by_ids(self, aids: Iterable[ActionId]) -> List[ActionInstance]:
        wanted = {_key(aid) for aid in aids}
        if not wanted:
            return []

        with self._error_context("action select_many"):
            rows = self._select(
                sql.SQL("aid = ANY(%s)"),
                ([text for text, _ in wanted],),
            )
        # aid text alone is ambiguous between "42" and 42
        return [row for row in rows if _key(row.aid) in wanted]

    def select_where_parameters_non_empty(self) -> List[ActionInstance]:
        with self._error_context("action select_configured"):
            return self._select(sql.SQL("parameters <> '{}'::jsonb"))

    # =========================================================================
    # WRITES
    # =========================================================================

    def insert(self, action: ActionInstance) -> ActionInstance:
        query = sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            self.table,
            sql.SQL(", ").join(map(sql.Identifier, COLUMNS)),
            sql.SQL(", ").join(map(sql.Placeholder, COLUMNS)),
        )
        with self._error_context("action insert", action.aid):
            try:
                with self.pool.connection() as conn:
                    conn.execute(query, self._model_to_params(action))
            except errors.UniqueViolation as e:
                raise DuplicateActionError(action.aid) from e

        self._log_operation(True, "Inserted action", action.aid)
        return action

    def merge_by_key(self, aid: ActionId, fields: Dict[str, Any]) -> ActionInstance:
        self._check_fields(fields)
        if not fields:
            existing = self.select_by_id(aid)
            if existing is None:
                raise ActionNotFoundError(aid, operation="merge")
            return existing

        text, numeric = _key(aid)
        params = {name: _column_value(name, value) for name, value in fields.items()}
        params["_aid"] = text
        params["_aid_numeric"] = numeric

        query = sql.SQL(
            "UPDATE {} SET {} WHERE aid = {} AND aid_numeric = {} RETURNING {}"
        ).format(
            self.table,
            sql.SQL(", ").join(
                sql.SQL("{} = {}").format(sql.Identifier(name), sql.Placeholder(name))
                for name in fields
            ),
            sql.Placeholder("_aid"),
            sql.Placeholder("_aid_numeric"),
            sql.SQL(", ").join(map(sql.Identifier, COLUMNS)),
        )

        with self._error_context("action merge", aid):
            with self.pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query, params)
                    row = cur.fetchone()

        if row is None:
            raise ActionNotFoundError(aid, operation="merge")

        self._log_operation(True, "Updated action", aid, {"fields": sorted(fields)})
        return self._row_to_model(row)

    def delete(self, aid: ActionId) -> bool:
        text, numeric = _key(aid)
        query = sql.SQL("DELETE FROM {} WHERE aid = %s AND aid_numeric = %s").format(self.table)

        with self._error_context("action delete", aid):
            with self.pool.connection() as conn:
                cur = conn.execute(query, (text, numeric))
                removed = cur.rowcount > 0

        if removed:
            self._log_operation(True, "Deleted action", aid)
        return removed

    def next_id(self) -> int:
        query = sql.SQL("SELECT nextval({}::regclass) AS aid").format(
            sql.Literal(f"{self.schema}.{get_defaults().storage.sequence}")
        )
        with self._error_context("action next_id"):
            with self.pool.connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(query)
                    return int(cur.fetchone()["aid"])


__all__ = ["PostgresActionRepository"]
