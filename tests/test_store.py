"""Tests for the entity store backends."""

import copy
import json
import ssl

import pytest
import pytest_asyncio

import database
from database import MemoryStore, PostgresStore, StoreError
from database import _get_connection_kwargs
from models import Conductor, ConductorRegistry, NFT

class FakeConnection:
    """Minimal asyncpg connection over a dict of (kind, id) -> JSON text."""

    def __init__(self):
        self.rows = {}
        self.queries = []

    async def fetchrow(self, query, *args):
        self.queries.append(query)
        data = self.rows.get((args[0], args[1]))
        return {'data': data} if data is not None else None

    async def execute(self, query, *args):
        self.queries.append(query)
        if 'INSERT INTO entities' in query:
            self.rows[(args[0], args[1])] = args[2]
        elif 'DELETE FROM entities' in query:
            self.rows.pop((args[0], args[1]), None)

    def transaction(self):
        return FakeTransaction(self)

class FakeTransaction:
    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        self.snapshot = copy.deepcopy(self.conn.rows)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.conn.rows = self.snapshot
        return False

class FakeAcquire:
    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, exc_type, exc, tb):
        return False

class FakePool:
    def __init__(self):
        self.conn = FakeConnection()
        self.closed = False

    def acquire(self):
        return FakeAcquire(self.conn)

    async def close(self):
        self.closed = True

@pytest_asyncio.fixture
async def pg_store():
    return PostgresStore(FakePool())

# MemoryStore

@pytest.mark.asyncio
async def test_memory_load_returns_fresh_copy(store):
    await store.save(Conductor(id='0x01', conductor_id=1, appraisals=['0x0a']))

    loaded = await store.load(Conductor, '0x01')
    loaded.appraisals.append('0x0b')

    assert (await store.load(Conductor, '0x01')).appraisals == ['0x0a']

@pytest.mark.asyncio
async def test_memory_missing_record(store):
    assert await store.load(Conductor, '0x01') is None
    await store.remove(Conductor, '0x01')

@pytest.mark.asyncio
async def test_memory_records_are_keyed_by_kind(store):
    await store.save(Conductor(id='0x01', conductor_id=1))
    assert await store.load(NFT, '0x01') is None
    assert store.count(Conductor) == 1
    assert store.ids(Conductor) == ['0x01']

@pytest.mark.asyncio
async def test_transaction_commits_on_exit(store):
    async with store.transaction() as session:
        await session.save(Conductor(id='0x01', conductor_id=1))
        assert (await session.load(Conductor, '0x01')).conductor_id == 1
        assert await store.load(Conductor, '0x01') is None

    assert (await store.load(Conductor, '0x01')).conductor_id == 1

@pytest.mark.asyncio
async def test_transaction_discards_writes_on_error(store):
    await store.save(ConductorRegistry(id='main', conductor_ids=[1]))

    with pytest.raises(RuntimeError):
        async with store.transaction() as session:
            await session.save(ConductorRegistry(id='main', conductor_ids=[1, 2]))
            await session.save(Conductor(id='0x02', conductor_id=2))
            raise RuntimeError("read failed")

    assert (await store.load(ConductorRegistry, 'main')).conductor_ids == [1]
    assert await store.load(Conductor, '0x02') is None

@pytest.mark.asyncio
async def test_transaction_remove_hides_record(store):
    await store.save(NFT(id='0x05', nft_id=5))

    async with store.transaction() as session:
        await session.remove(NFT, '0x05')
        assert await session.load(NFT, '0x05') is None
        assert await store.load(NFT, '0x05') is not None

    assert await store.load(NFT, '0x05') is None

# PostgresStore

@pytest.mark.asyncio
async def test_postgres_save_load_remove(pg_store):
    await pg_store.save(Conductor(id='0x01', conductor_id=1, wallet='0xabc'))

    stored = json.loads(pg_store.pool.conn.rows[('Conductor', '0x01')])
    assert stored['conductorId'] == 1
    assert stored['notAppraised'] == []

    loaded = await pg_store.load(Conductor, '0x01')
    assert loaded.wallet == '0xabc'

    await pg_store.remove(Conductor, '0x01')
    assert await pg_store.load(Conductor, '0x01') is None

@pytest.mark.asyncio
async def test_postgres_upsert_replaces_record(pg_store):
    await pg_store.save(Conductor(id='0x01', conductor_id=1, review_count=1))
    await pg_store.save(Conductor(id='0x01', conductor_id=1, review_count=2))

    assert (await pg_store.load(Conductor, '0x01')).review_count == 2
    assert any('ON CONFLICT (kind, id)' in q for q in pg_store.pool.conn.queries)

@pytest.mark.asyncio
async def test_postgres_transaction_rolls_back(pg_store):
    with pytest.raises(RuntimeError):
        async with pg_store.transaction() as session:
            await session.save(Conductor(id='0x01', conductor_id=1))
            raise RuntimeError("read failed")

    assert await pg_store.load(Conductor, '0x01') is None

@pytest.mark.asyncio
async def test_postgres_invalid_record_raises(pg_store):
    pg_store.pool.conn.rows[('NFT', '0x05')] = json.dumps({'id': '0x05'})
    with pytest.raises(StoreError):
        await pg_store.load(NFT, '0x05')

@pytest.mark.asyncio
async def test_postgres_close_closes_pool(pg_store):
    await pg_store.close()
    assert pg_store.pool.closed

# Module lifecycle

@pytest.mark.asyncio
async def test_init_store_memory_backend():
    await database.close()
    with pytest.raises(RuntimeError):
        await database.get_store()

    created = await database.init_store({'store_backend': 'memory'})
    assert isinstance(created, MemoryStore)
    assert await database.get_store() is created
    await database.close()

@pytest.mark.asyncio
async def test_init_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        await database.init_store({'store_backend': 'sqlite'})

def test_connection_kwargs_respect_sslmode():
    assert _get_connection_kwargs('postgresql://root@localhost:26257/db?sslmode=disable')['ssl'] is False
    kwargs = _get_connection_kwargs('postgresql://root@host:26257/db')
    assert isinstance(kwargs['ssl'], ssl.SSLContext)
