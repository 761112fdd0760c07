"""Database module for the entity store.

This module handles:
- Choosing the store backend (in-memory or PostgreSQL/CockroachDB)
- Database connection pool initialization
- Schema management
- Connection lifecycle
"""

import logging
import ssl
from typing import Optional, Dict, Any
import backoff
import asyncpg
from urllib.parse import urlparse, parse_qs

from .exceptions import DatabaseError, DatabaseSchemaError, StoreError
from .lib.schema_manager import SchemaManager
from .store import (
    StoreSession,
    EntityStore,
    MemoryStore,
    MemoryTransaction,
    PostgresStore,
    PostgresTransaction,
)

logger = logging.getLogger(__name__)

_pool: Optional[asyncpg.Pool] = None
_schema_manager: Optional[SchemaManager] = None
_store: Optional[EntityStore] = None

def _get_ssl_context() -> ssl.SSLContext:
    """Create SSL context for CockroachDB Cloud connections."""
    ssl_context = ssl.create_default_context()
    ssl_context.verify_mode = ssl.CERT_REQUIRED
    ssl_context.check_hostname = True
    return ssl_context

def _get_connection_kwargs(db_url: str) -> Dict[str, Any]:
    """Get connection kwargs from database URL.

    Args:
        db_url: Database connection URL

    Returns:
        Dict of connection parameters
    """
    parsed = urlparse(db_url)
    params = parse_qs(parsed.query)

    sslmode = params.get('sslmode', ['require'])[0]
    kwargs = {
        'ssl': False if sslmode == 'disable' else _get_ssl_context(),
        'server_settings': {
            'statement_timeout': '300000',  # 5 minutes
        }
    }

    # Add any additional params from URL
    for key, values in params.items():
        if key not in ('sslmode', 'ssl'):  # SSL params handled above
            kwargs[key] = values[0]

    return kwargs

@backoff.on_exception(
    backoff.expo,
    (asyncpg.exceptions.PostgresConnectionError, asyncpg.exceptions.CannotConnectNowError, OSError),
    max_tries=5
)
async def init_db(db_url: str) -> asyncpg.Pool:
    """Initialize the database connection pool and schema.

    Args:
        db_url: Database connection URL

    Returns:
        The connection pool

    Raises:
        ValueError: If database URL is not provided
        DatabaseSchemaError: If the schema cannot be created or migrated
    """
    global _pool, _schema_manager

    if not db_url:
        raise ValueError("Database URL not provided")

    try:
        conn_kwargs = _get_connection_kwargs(db_url)

        _pool = await asyncpg.create_pool(
            db_url,
            min_size=2,          # Minimum idle connections
            max_size=10,         # Maximum connections
            max_queries=10000,   # Reset connection after this many queries
            max_inactive_connection_lifetime=300.0,  # 5 minutes
            command_timeout=60.0,  # 1 minute command timeout
            **conn_kwargs
        )

        _schema_manager = SchemaManager(_pool)
        await _schema_manager.initialize()

        logger.info("Database initialized")
        return _pool

    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

async def init_store(settings: Dict[str, Any]) -> EntityStore:
    """Create the entity store selected by ``store_backend``.

    Args:
        settings: Validated settings (see config.load_settings_conf)

    Returns:
        The initialized store
    """
    global _store

    backend = settings.get('store_backend', 'memory')
    if backend == 'postgres':
        pool = await init_db(settings.get('db_url'))
        _store = PostgresStore(pool)
    elif backend == 'memory':
        _store = MemoryStore()
    else:
        raise ValueError(f"Unknown store backend: {backend}")

    logger.info(f"Using {backend} entity store")
    return _store

async def get_store() -> EntityStore:
    """Get the initialized entity store.

    Raises:
        RuntimeError: If the store hasn't been initialized
    """
    if not _store:
        raise RuntimeError("Entity store not initialized")
    return _store

async def close() -> None:
    """Close the store and any connection pool."""
    global _pool, _schema_manager, _store

    if _pool:
        await _pool.close()
    _pool = None
    _schema_manager = None
    _store = None

# Export public interface
__all__ = [
    'init_db',
    'init_store',
    'get_store',
    'close',
    'DatabaseError',
    'DatabaseSchemaError',
    'StoreError',
    'StoreSession',
    'EntityStore',
    'MemoryStore',
    'MemoryTransaction',
    'PostgresStore',
    'PostgresTransaction',
    'SchemaManager',
]
