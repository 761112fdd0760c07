"""Entity store backends.

The store exposes three primitives, ``load``, ``save`` and ``remove``, over
typed entity records. ``transaction()`` yields a session with the same
primitives whose writes only become visible when the block exits normally;
an exception inside the block discards every write made through it.
"""
import copy
import json
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from models import Entity
from .exceptions import StoreError

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Entity)

def _build(model: Type[E], data: dict) -> E:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise StoreError(f"Stored {model.kind} record is invalid: {e}") from e

class StoreSession(ABC):
    """Keyed load/save/remove over entity records."""

    @abstractmethod
    async def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        """Load a record, or None if it does not exist."""

    @abstractmethod
    async def save(self, entity: Entity) -> None:
        """Create or fully replace a record."""

    @abstractmethod
    async def remove(self, model: Type[Entity], entity_id: str) -> None:
        """Delete a record. Removing a missing record is not an error."""

class EntityStore(StoreSession):
    """A store that can also open transactions."""

    @abstractmethod
    def transaction(self):
        """Async context manager yielding a StoreSession."""

    async def close(self) -> None:
        pass

# -----------------------------------------------------------------------------
# In-memory backend
# -----------------------------------------------------------------------------

class MemoryTransaction(StoreSession):
    """Buffers writes over a MemoryStore until commit."""

    def __init__(self, store: 'MemoryStore'):
        self._store = store
        # (kind, id) -> record data, None marks a removal
        self._writes: Dict[Tuple[str, str], Optional[dict]] = {}

    async def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        key = (model.kind, entity_id)
        if key in self._writes:
            data = self._writes[key]
            return _build(model, copy.deepcopy(data)) if data is not None else None
        return await self._store.load(model, entity_id)

    async def save(self, entity: Entity) -> None:
        self._writes[(entity.kind, entity.id)] = entity.to_record()

    async def remove(self, model: Type[Entity], entity_id: str) -> None:
        self._writes[(model.kind, entity_id)] = None

    def commit(self) -> None:
        for (kind, entity_id), data in self._writes.items():
            records = self._store._records.setdefault(kind, {})
            if data is None:
                records.pop(entity_id, None)
            else:
                records[entity_id] = data
        self._writes = {}

class MemoryStore(EntityStore):
    """Dictionary-backed store, used for tests and short replays."""

    def __init__(self):
        self._records: Dict[str, Dict[str, dict]] = {}

    async def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        data = self._records.get(model.kind, {}).get(entity_id)
        if data is None:
            return None
        return _build(model, copy.deepcopy(data))

    async def save(self, entity: Entity) -> None:
        self._records.setdefault(entity.kind, {})[entity.id] = entity.to_record()

    async def remove(self, model: Type[Entity], entity_id: str) -> None:
        self._records.get(model.kind, {}).pop(entity_id, None)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[MemoryTransaction]:
        tx = MemoryTransaction(self)
        yield tx
        tx.commit()

    def count(self, model: Type[Entity]) -> int:
        """Number of stored records of one kind."""
        return len(self._records.get(model.kind, {}))

    def ids(self, model: Type[Entity]) -> List[str]:
        """Ids of stored records of one kind, in insertion order."""
        return list(self._records.get(model.kind, {}))

# -----------------------------------------------------------------------------
# PostgreSQL / CockroachDB backend
# -----------------------------------------------------------------------------

async def _fetch_record(conn, model: Type[E], entity_id: str) -> Optional[E]:
    row = await conn.fetchrow(
        'SELECT data FROM entities WHERE kind = $1 AND id = $2',
        model.kind,
        entity_id
    )
    if not row:
        return None
    data = row['data']
    if isinstance(data, str):
        data = json.loads(data)
    return _build(model, data)

async def _upsert_record(conn, entity: Entity) -> None:
    await conn.execute(
        '''
        INSERT INTO entities (kind, id, data, updated_at)
        VALUES ($1, $2, $3::jsonb, now())
        ON CONFLICT (kind, id)
        DO UPDATE SET
            data = EXCLUDED.data,
            updated_at = now()
        ''',
        entity.kind,
        entity.id,
        json.dumps(entity.to_record())
    )

async def _delete_record(conn, model: Type[Entity], entity_id: str) -> None:
    await conn.execute(
        'DELETE FROM entities WHERE kind = $1 AND id = $2',
        model.kind,
        entity_id
    )

class PostgresTransaction(StoreSession):
    """Session bound to one connection inside an open database transaction."""

    def __init__(self, conn):
        self.conn = conn

    async def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        return await _fetch_record(self.conn, model, entity_id)

    async def save(self, entity: Entity) -> None:
        await _upsert_record(self.conn, entity)

    async def remove(self, model: Type[Entity], entity_id: str) -> None:
        await _delete_record(self.conn, model, entity_id)

class PostgresStore(EntityStore):
    """Store backed by the ``entities`` table."""

    def __init__(self, pool):
        """Initialize the store.

        Args:
            pool: asyncpg connection pool
        """
        self.pool = pool

    async def load(self, model: Type[E], entity_id: str) -> Optional[E]:
        async with self.pool.acquire() as conn:
            return await _fetch_record(conn, model, entity_id)

    async def save(self, entity: Entity) -> None:
        async with self.pool.acquire() as conn:
            await _upsert_record(conn, entity)

    async def remove(self, model: Type[Entity], entity_id: str) -> None:
        async with self.pool.acquire() as conn:
            await _delete_record(conn, model, entity_id)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[PostgresTransaction]:
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                yield PostgresTransaction(conn)

    async def close(self) -> None:
        await self.pool.close()
