"""Run the indexer over an event feed.

Usage:
    python main.py [FEED]

FEED is a JSON-lines file of decoded events, or ``-`` (the default) to read
them from stdin as they are delivered.
"""
import asyncio
import signal
import logging
import sys

from config import get_settings, contract_sources
from content import ContentResolver, IPFSClient
from database import init_store, close as db_close
from monitor import EventMonitor, read_event_feed
from rpc import create_client

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Global flag for graceful shutdown
should_exit = False

def handle_shutdown(signum, frame):
    """Handle shutdown signals gracefully."""
    global should_exit
    logger.info("Shutdown signal received. Cleaning up...")
    should_exit = True

async def feed_events(monitor: EventMonitor, path: str) -> None:
    """Submit events from the feed to the monitor and wait for them to finish."""
    loop = asyncio.get_running_loop()
    events = read_event_feed(path)

    while not should_exit:
        # Reading the feed blocks, so keep it off the event loop
        event = await loop.run_in_executor(None, next, events, None)
        if event is None:
            break
        monitor.submit(event)

    await monitor.event_queue.join()
    logger.info(f"Feed {path} exhausted after {monitor.processed} events")

async def main(feed_path: str = '-'):
    """Main application entry point."""
    global should_exit

    settings = get_settings()
    logging.getLogger().setLevel(settings['log_level'])

    # Register shutdown handlers
    signal.signal(signal.SIGINT, handle_shutdown)
    signal.signal(signal.SIGTERM, handle_shutdown)

    logger.info("Initializing entity store...")
    store = await init_store(settings)

    fetcher = IPFSClient(
        settings['ipfs_gateway'],
        timeout=settings['ipfs_timeout'],
        max_tries=settings['content_max_tries']
    )
    resolver = ContentResolver(
        store,
        fetcher,
        workers=settings['content_workers'],
        description_from_title=settings['description_from_title']
    )
    monitor = EventMonitor(
        store,
        create_client(settings),
        resolver,
        contract_sources(settings),
        max_event_retries=settings['max_event_retries'],
        event_retry_delay=settings['event_retry_delay']
    )

    tasks = []
    try:
        await resolver.start()

        tasks = [
            asyncio.create_task(monitor.start(), name="monitor"),
            asyncio.create_task(feed_events(monitor, feed_path), name="feed")
        ]

        while not should_exit:
            done, _ = await asyncio.wait(tasks, timeout=1, return_when=asyncio.FIRST_COMPLETED)
            if not done:
                continue

            for task in done:
                if not task.cancelled() and task.exception():
                    logger.error(f"Task {task.get_name()} failed with error: {task.exception()}")
                    raise task.exception()
            # The feed is exhausted and every event has been processed
            break

        if not should_exit:
            await resolver.join()

    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise
    finally:
        logger.info("Starting cleanup...")
        monitor.stop()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await resolver.stop()
        await db_close()

if __name__ == "__main__":
    try:
        asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else '-'))
    except KeyboardInterrupt:
        pass
