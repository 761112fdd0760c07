"""Content module for resolving content-addressed metadata.

This module provides:
- An IPFS gateway client
- Decoders for the Metadata, BaseMetadata and ReactionMetadata shapes
- A queue-driven resolver that runs decoding off the event path

Handlers only ever schedule jobs; nothing in event processing waits for a
job to finish, and a failed fetch simply produces no record.
"""
import asyncio
import logging
from typing import List, Optional, Set, Tuple

from database import EntityStore
from models import Entity
from .exceptions import ContentError, ContentUnavailableError
from .extract import extract_number, extract_string
from .handlers import (
    ContentKind,
    content_id_from_uri,
    handle_base_metadata,
    handle_metadata,
    handle_reaction_metadata,
)
from .ipfs import IPFSClient

logger = logging.getLogger(__name__)

class ContentResolver:
    """Resolve content ids into metadata records using a pool of worker tasks."""

    def __init__(self, store: EntityStore, fetcher, workers: int = 4, description_from_title: bool = True):
        """Initialize the resolver.

        Args:
            store: Entity store that receives the records
            fetcher: Object with a blocking ``fetch(content_id) -> bytes``
            workers: Number of concurrent worker tasks
            description_from_title: See ``handle_base_metadata``
        """
        self.store = store
        self.fetcher = fetcher
        self.workers = workers
        self.description_from_title = description_from_title
        self.running = False
        self.queue: asyncio.Queue = asyncio.Queue()
        self._pending: Set[Tuple[str, ContentKind]] = set()
        self._tasks: List[asyncio.Task] = []

    def schedule(self, content_id: Optional[str], kind: ContentKind) -> None:
        """Queue a resolution job without waiting for it."""
        if not content_id:
            return

        job = (content_id, kind)
        if job in self._pending:
            logger.debug(f"{kind.value} {content_id} already queued")
            return

        self._pending.add(job)
        self.queue.put_nowait(job)

    async def resolve(self, content_id: str, kind: ContentKind) -> Optional[Entity]:
        """Fetch and decode one document.

        Returns:
            The saved record, or None if the content was unavailable or malformed
        """
        loop = asyncio.get_running_loop()
        try:
            # Gateway fetches are blocking
            payload = await loop.run_in_executor(None, self.fetcher.fetch, content_id)
        except ContentUnavailableError as e:
            logger.warning(str(e))
            return None

        if kind == ContentKind.METADATA:
            record = await handle_metadata(self.store, content_id, payload)
        elif kind == ContentKind.BASE_METADATA:
            record = await handle_base_metadata(
                self.store, content_id, payload, self.description_from_title
            )
        elif kind == ContentKind.REACTION_METADATA:
            record = await handle_reaction_metadata(self.store, content_id, payload)
        else:
            raise ContentError(f"Unknown content kind: {kind}")

        if record is not None:
            logger.info(f"Resolved {kind.value} {content_id}")
        return record

    async def process_jobs(self) -> None:
        """Worker loop: resolve queued jobs until stopped."""
        while self.running:
            content_id, kind = await self.queue.get()
            # Once picked up, the same job may be queued again
            self._pending.discard((content_id, kind))
            try:
                await self.resolve(content_id, kind)
            except Exception as e:
                logger.error(f"Error resolving {kind.value} {content_id}: {e}")
            finally:
                self.queue.task_done()

    async def start(self) -> None:
        """Start the worker tasks."""
        if self.running:
            return
        self.running = True
        self._tasks = [
            asyncio.create_task(self.process_jobs(), name=f"content-worker-{i}")
            for i in range(self.workers)
        ]
        logger.info(f"Content resolver started with {self.workers} workers")

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        await self.queue.join()

    async def stop(self) -> None:
        """Cancel the worker tasks. Jobs still queued are dropped."""
        self.running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Content resolver stopped")

# Export public interface
__all__ = [
    'ContentResolver',
    'ContentKind',
    'ContentError',
    'ContentUnavailableError',
    'IPFSClient',
    'content_id_from_uri',
    'extract_string',
    'extract_number',
    'handle_metadata',
    'handle_base_metadata',
    'handle_reaction_metadata',
]
