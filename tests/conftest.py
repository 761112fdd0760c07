"""Shared fixtures: in-memory store, fake contract reads and a fake gateway."""

import pytest
import pytest_asyncio

from content import ContentResolver, ContentUnavailableError
from database import MemoryStore
from monitor import EventMonitor
from rpc import ContractCallError
from event_utils import SOURCES

class FakeContractRPC:
    """Stands in for ContractRPC, answering from canned decoded results."""

    def __init__(self):
        self.results = {}
        self.calls = []

    def set(self, address, function, args, result):
        self.results[(address.lower(), function, tuple(args))] = result

    def call_contract(self, address, function, args):
        key = (address.lower(), function, tuple(args))
        self.calls.append(key)
        if key not in self.results:
            raise ContractCallError(f"no result for {function}{tuple(args)}", -32000, function)
        result = self.results[key]
        if isinstance(result, Exception):
            raise result
        return result

    def count(self, function):
        return sum(1 for _, name, _ in self.calls if name == function)

class FakeFetcher:
    """Serves documents from a dict; anything else is unavailable."""

    def __init__(self):
        self.documents = {}
        self.requested = []

    def fetch(self, content_id):
        self.requested.append(content_id)
        if content_id not in self.documents:
            raise ContentUnavailableError(content_id, "not pinned")
        return self.documents[content_id]

@pytest.fixture
def rpc():
    return FakeContractRPC()

@pytest.fixture
def fetcher():
    return FakeFetcher()

@pytest_asyncio.fixture
async def store():
    """Create and return an empty in-memory store."""
    return MemoryStore()

@pytest_asyncio.fixture
async def resolver(store, fetcher):
    """Create a content resolver whose workers are not started."""
    return ContentResolver(store, fetcher, workers=2)

@pytest_asyncio.fixture
async def monitor(store, rpc, resolver):
    """Create an event monitor over every test contract, without retry delays."""
    return EventMonitor(
        store,
        rpc,
        resolver,
        SOURCES,
        max_event_retries=2,
        event_retry_delay=0
    )
