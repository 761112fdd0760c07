"""Monitor module for dispatching contract events to their handlers.

This module provides sequential event processing including:
- Routing by (data source, event name)
- One store transaction per event
- Scheduling content resolution after commit
- Retrying failed events before giving up
"""

import asyncio
import logging
from typing import Dict, Iterable, Optional

from content import ContentResolver
from database import EntityStore
from handlers import HandlerContext, HandlerError, get_handler
from models import ChainEvent, InvalidEventError
from rpc import ContractRPC
from .feed import read_event_feed

# Configure logging
logger = logging.getLogger(__name__)

class EventMonitor:
    """Process contract events strictly one at a time, in delivery order."""

    def __init__(
        self,
        store: EntityStore,
        rpc: ContractRPC,
        resolver: Optional[ContentResolver] = None,
        sources: Optional[Dict[str, str]] = None,
        max_event_retries: int = 5,
        event_retry_delay: float = 2
    ):
        """Initialize the event monitor.

        Args:
            store: Entity store receiving all mutations
            rpc: Client for authoritative contract reads
            resolver: Content resolver for metadata jobs (None disables resolution)
            sources: Lowercase contract address -> data source name
            max_event_retries: Extra attempts for a failing event before giving up
            event_retry_delay: Seconds to wait between attempts
        """
        self.store = store
        self.rpc = rpc
        self.resolver = resolver
        self.sources = {address.lower(): name for address, name in (sources or {}).items()}
        self.max_event_retries = max_event_retries
        self.event_retry_delay = event_retry_delay
        self.running = False
        self.event_queue = asyncio.Queue()
        self.processed = 0

    async def process_event(self, event: ChainEvent) -> bool:
        """Run the handler for one event inside its own transaction.

        Returns:
            True if a handler ran and its writes were committed

        Raises:
            HandlerError: If the event parameters are malformed
        """
        source = self.sources.get(event.contract_address)
        if source is None:
            logger.debug(f"Ignoring {event.event_name} from unindexed contract {event.contract_address}")
            return False

        handler = get_handler(source, event.event_name)
        if handler is None:
            logger.warning(f"No handler for {source}.{event.event_name}, skipping")
            return False

        async with self.store.transaction() as session:
            ctx = HandlerContext(session, self.rpc)
            try:
                await handler(event, ctx)
            except InvalidEventError as e:
                raise HandlerError(str(e)) from e

        # Only committed events hand their content jobs to the resolver
        if self.resolver:
            for content_id, kind in ctx.content_jobs:
                self.resolver.schedule(content_id, kind)

        self.processed += 1
        logger.debug(
            f"Processed {source}.{event.event_name} "
            f"block={event.block_number} log={event.log_index}"
        )
        return True

    async def process_with_retry(self, event: ChainEvent) -> bool:
        """Process an event, retrying failures up to ``max_event_retries`` times.

        Malformed events are logged and skipped. Any other error that survives
        every retry is re-raised.
        """
        attempt = 0
        while True:
            try:
                return await self.process_event(event)
            except HandlerError as e:
                logger.error(f"Skipping malformed event {event.id}: {e}")
                return False
            except Exception as e:
                attempt += 1
                if attempt > self.max_event_retries:
                    logger.error(
                        f"Giving up on {event.event_name} {event.id} after {attempt} attempts: {e}"
                    )
                    raise
                logger.error(
                    f"Error processing {event.event_name} {event.id} "
                    f"(attempt {attempt}/{self.max_event_retries}): {e}"
                )
                await asyncio.sleep(self.event_retry_delay)

    def submit(self, event: ChainEvent) -> None:
        """Queue an event for processing."""
        self.event_queue.put_nowait(event)

    async def process_events(self) -> None:
        """Process queued events until stopped.

        An event that keeps failing stops the monitor and the error propagates.
        """
        while self.running:
            event = await self.event_queue.get()
            try:
                await self.process_with_retry(event)
            except Exception:
                self.stop()
                raise
            finally:
                self.event_queue.task_done()

    async def replay(self, events: Iterable[ChainEvent]) -> int:
        """Process events from an iterable in order.

        Returns:
            Number of events whose handler ran
        """
        count = 0
        for event in events:
            if await self.process_with_retry(event):
                count += 1
        logger.info(f"Replayed {count} events")
        return count

    async def start(self) -> None:
        """Start processing queued events."""
        logger.info(f"Starting event monitor for {len(self.sources)} contracts")
        self.running = True
        await self.process_events()

    def stop(self):
        """Stop the event monitor."""
        logger.info("Stopping event monitor...")
        self.running = False

# Export public interface
__all__ = [
    'EventMonitor',
    'read_event_feed',
]
