"""IonicNFT and AccessControl event handlers.

These contracts only feed immutable event-log records keyed by the log id.
"""
import logging
from typing import Type

from models import (
    AdminAdded,
    AdminRemoved,
    AdminRevoked,
    Approval,
    ApprovalForAll,
    ChainEvent,
    EventRecord,
    MintersAuthorized,
    MonaTokenUpdated,
    PodeTokenUpdated,
    TokenMinted,
    TokenURIUpdated,
    Transfer,
)
from models.events import (
    AdminAddedParams,
    AdminRemovedParams,
    AdminRevokedParams,
    ApprovalForAllParams,
    ApprovalParams,
    EventParams,
    MintersAuthorizedParams,
    MonaTokenUpdatedParams,
    PodeTokenUpdatedParams,
    TokenMintedParams,
    TokenURIUpdatedParams,
    TransferParams,
)
from .lib.context import HandlerContext

logger = logging.getLogger(__name__)

def event_record_handler(model: Type[EventRecord], params_model: Type[EventParams]):
    """Build a handler that stores the event's parameters as a ``model`` record."""
    async def handler(event: ChainEvent, ctx: HandlerContext) -> None:
        params = event.parse(params_model)
        record = model(
            id=event.id,
            block_number=event.block_number,
            block_timestamp=event.block_timestamp,
            transaction_hash=event.transaction_hash,
            **params.model_dump()
        )
        await ctx.session.save(record)
        logger.debug(f"Recorded {model.kind} {record.id}")

    handler.__name__ = f"handle_{model.kind}"
    return handler

handle_approval = event_record_handler(Approval, ApprovalParams)
handle_approval_for_all = event_record_handler(ApprovalForAll, ApprovalForAllParams)
handle_minters_authorized = event_record_handler(MintersAuthorized, MintersAuthorizedParams)
handle_token_minted = event_record_handler(TokenMinted, TokenMintedParams)
handle_token_uri_updated = event_record_handler(TokenURIUpdated, TokenURIUpdatedParams)
handle_transfer = event_record_handler(Transfer, TransferParams)

handle_admin_added = event_record_handler(AdminAdded, AdminAddedParams)
handle_admin_removed = event_record_handler(AdminRemoved, AdminRemovedParams)
handle_admin_revoked = event_record_handler(AdminRevoked, AdminRevokedParams)
handle_mona_token_updated = event_record_handler(MonaTokenUpdated, MonaTokenUpdatedParams)
handle_pode_token_updated = event_record_handler(PodeTokenUpdated, PodeTokenUpdatedParams)
