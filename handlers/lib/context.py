"""Per-event handler context."""
import logging
from typing import List, Optional, Tuple, Type, TypeVar

from content import ContentKind, content_id_from_uri
from database import StoreSession
from models import Entity, ReactionUsage, id_from_int, reaction_usage_id
from rpc import ContractRPC, ReactionUsageData
from .relations import unique

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Entity)

class HandlerError(Exception):
    """Raised when an event cannot be handled as delivered."""
    pass

class HandlerContext:
    """State shared by the handler of one event.

    Holds the transactional store session, the contract RPC client and the
    content jobs to schedule once the event's transaction has committed.
    """

    def __init__(self, session: StoreSession, rpc: ContractRPC):
        self.session = session
        self.rpc = rpc
        self.content_jobs: List[Tuple[str, ContentKind]] = []

    async def load_or_create(self, model: Type[E], entity_id: str, **fields) -> E:
        """Load a record and apply ``fields``, or create it from ``fields``.

        The record is not saved.
        """
        entity = await self.session.load(model, entity_id)
        if entity is None:
            return model(id=entity_id, **fields)
        return entity.model_copy(update=fields)

    def link_content(self, uri: Optional[str], kind: ContentKind) -> Optional[str]:
        """Record a resolution job for the content id in ``uri`` and return it."""
        content_id = content_id_from_uri(uri)
        if content_id:
            self.content_jobs.append((content_id, kind))
        return content_id

    async def save_reaction_usages(self, usages: List[ReactionUsageData]) -> List[str]:
        """Load-or-create the ReactionUsage for each (count, reaction) pair."""
        usage_ids = []
        for usage in usages:
            usage_id = reaction_usage_id(usage.count, usage.reaction_id)
            record = await self.load_or_create(
                ReactionUsage,
                usage_id,
                count=usage.count,
                reaction=id_from_int(usage.reaction_id)
            )
            await self.session.save(record)
            usage_ids.append(usage_id)
        return unique(usage_ids)
