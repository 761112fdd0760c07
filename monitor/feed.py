"""JSON-lines event feed reader."""
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from pydantic import ValidationError

from models import ChainEvent, InvalidEventError

logger = logging.getLogger(__name__)

@contextmanager
def _open_feed(path: str) -> Iterator[TextIO]:
    if path == '-':
        yield sys.stdin
        return
    with open(path, encoding='utf-8') as f:
        yield f

def read_event_feed(path: str) -> Iterator[ChainEvent]:
    """Yield one ChainEvent per non-blank line of ``path`` (``-`` for stdin).

    Raises:
        InvalidEventError: If a line is not a valid event
    """
    with _open_feed(path) as feed:
        for line_number, line in enumerate(feed, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield ChainEvent.model_validate_json(line)
            except ValidationError as e:
                raise InvalidEventError(f"{path}:{line_number}: invalid event: {e}") from e
