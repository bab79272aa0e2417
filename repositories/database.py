# ============================================================================
# DATABASE CONNECTION POOL
# ============================================================================
# EPOCH: 1 - ACTION DISPATCH
# STATUS: Core - PostgreSQL connection management
# PURPOSE: Provide connection pooling and schema bootstrap for psycopg3
# CREATED: 13 OCT 2026
# ============================================================================
"""
Database Connection Pool

Manages PostgreSQL connections using psycopg3 and psycopg_pool.
Singleton pattern ensures one pool per application.

Dispatch is synchronous and request-scoped, so this is the blocking
ConnectionPool rather than the async one.

Connection settings, in priority order:
1. DATABASE_URL
2. Individual POSTGRES_* components

Usage:
    from repositories.database import init_pool, ensure_schema

    pool = init_pool()
    ensure_schema(pool)
    with pool.connection() as conn:
        conn.execute("SELECT 1")
"""

import os
import logging
from typing import Optional

from psycopg import sql
from psycopg_pool import ConnectionPool

from core.config import get_defaults

logger = logging.getLogger(__name__)

# Global pool instance
_pool: Optional[ConnectionPool] = None


def get_connection_string() -> str:
    """
    Get database connection string from environment.

    Returns:
        PostgreSQL connection string
    """
    if url := os.environ.get("DATABASE_URL"):
        return url

    host = os.environ.get("POSTGRES_HOST", "localhost")
    port = os.environ.get("POSTGRES_PORT", "5432")
    name = os.environ.get("POSTGRES_DB", "postgres")
    user = os.environ.get("POSTGRES_USER", "postgres")
    password = os.environ.get("POSTGRES_PASSWORD", "")
    sslmode = os.environ.get("POSTGRES_SSLMODE", "prefer")

    return f"postgresql://{user}:{password}@{host}:{port}/{name}?sslmode={sslmode}"


def _safe_conninfo(conninfo: str) -> str:
    """Strip credentials before logging."""
    if "@" in conninfo:
        return conninfo.split("@")[-1]
    if "password=" in conninfo:
        return conninfo.split("password=")[0] + "password=***"
    return conninfo


def init_pool(
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    connection_string: Optional[str] = None,
) -> ConnectionPool:
    """
    Initialize the global connection pool.

    Args:
        min_size: Minimum connections to maintain
        max_size: Maximum connections allowed
        connection_string: Override connection string (defaults to env)

    Returns:
        ConnectionPool instance
    """
    global _pool

    if _pool is not None:
        logger.warning("Pool already initialized, returning existing pool")
        return _pool

    storage = get_defaults().storage
    min_size = min_size if min_size is not None else storage.pool_min_size
    max_size = max_size if max_size is not None else storage.pool_max_size
    conninfo = connection_string or get_connection_string()

    logger.info(f"Initializing connection pool: {_safe_conninfo(conninfo)}")

    _pool = ConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
    )
    _pool.open()
    logger.info(f"Connection pool opened (min={min_size}, max={max_size})")

    return _pool


def get_pool() -> ConnectionPool:
    """Get the global connection pool, initializing if needed."""
    if _pool is None:
        return init_pool()
    return _pool


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool

    if _pool is not None:
        _pool.close()
        _pool = None
        logger.info("Connection pool closed")


# ============================================================================
# SCHEMA
# ============================================================================

def actions_table(schema: str) -> sql.Identifier:
    return sql.Identifier(schema, get_defaults().storage.table)


def actions_sequence(schema: str) -> sql.Identifier:
    return sql.Identifier(schema, get_defaults().storage.sequence)


def schema_statements(schema: str) -> list:
    """
    DDL for the action registry.

    aid holds either a catalog identity or a numeric id rendered as text;
    aid_numeric records which, so "42" and 42 never collide.
    """
    table = actions_table(schema)
    return [
        sql.SQL("CREATE SCHEMA IF NOT EXISTS {}").format(sql.Identifier(schema)),
        sql.SQL("CREATE SEQUENCE IF NOT EXISTS {}").format(actions_sequence(schema)),
        sql.SQL("""
            CREATE TABLE IF NOT EXISTS {} (
                aid VARCHAR(255) NOT NULL,
                aid_numeric BOOLEAN NOT NULL DEFAULT FALSE,
                type VARCHAR(32) NOT NULL DEFAULT '',
                callback VARCHAR(255) NOT NULL,
                parameters JSONB NOT NULL DEFAULT '{{}}'::jsonb,
                label VARCHAR(255) NOT NULL DEFAULT '',
                configurable SMALLINT NOT NULL DEFAULT 0,
                node_type VARCHAR(32),
                node_id BIGINT,
                trigger_names TEXT NOT NULL DEFAULT '',
                source_file TEXT,
                PRIMARY KEY (aid, aid_numeric)
            )
        """).format(table),
        sql.SQL("CREATE INDEX IF NOT EXISTS {} ON {} (callback)").format(
            sql.Identifier("idx_actions_callback"), table,
        ),
    ]


def ensure_schema(pool: ConnectionPool, schema: Optional[str] = None) -> None:
    """Create schema, sequence and table if missing."""
    schema = schema or get_defaults().storage.db_schema
    with pool.connection() as conn:
        for statement in schema_statements(schema):
            conn.execute(statement)
    logger.info(f"Action registry schema ready: {schema}")


__all__ = [
    "get_connection_string",
    "init_pool",
    "get_pool",
    "close_pool",
    "actions_table",
    "actions_sequence",
    "schema_statements",
    "ensure_schema",
]
