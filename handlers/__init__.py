"""Event handlers for every indexed contract.

Each handler is ``async def handler(event, ctx)`` where ``ctx`` is a
HandlerContext bound to the event's store transaction. Handlers load, mutate
and save entities through ``ctx.session``, read authoritative state through
``ctx.rpc`` and record content jobs on the context.
"""
from typing import Awaitable, Callable, Dict, Optional, Tuple

from models import ChainEvent
from . import appraisals, conductors, designers, nft, reaction_packs
from .lib.context import HandlerContext, HandlerError

Handler = Callable[[ChainEvent, HandlerContext], Awaitable[None]]

# (data source, event name) -> handler
HANDLERS: Dict[Tuple[str, str], Handler] = {
    ('IonicAppraisals', 'AppraisalCreated'): appraisals.handle_appraisal_created,
    ('IonicAppraisals', 'NFTRemoved'): appraisals.handle_nft_removed,
    ('IonicAppraisals', 'NFTSubmitted'): appraisals.handle_nft_submitted,

    ('IonicConductors', 'ConductorRegistered'): conductors.handle_conductor_registered,
    ('IonicConductors', 'ConductorDeleted'): conductors.handle_conductor_deleted,
    ('IonicConductors', 'ConductorStatsUpdated'): conductors.handle_conductor_stats_updated,
    ('IonicConductors', 'ConductorUpdated'): conductors.handle_conductor_updated,
    ('IonicConductors', 'ReviewSubmitted'): conductors.handle_review_submitted,
    ('IonicConductors', 'ReviewerURIUpdated'): conductors.handle_reviewer_uri_updated,

    ('IonicDesigners', 'DesignerInvited'): designers.handle_designer_invited,
    ('IonicDesigners', 'DesignerDeactivated'): designers.handle_designer_deactivated,
    ('IonicDesigners', 'DesignerURI'): designers.handle_designer_uri,

    ('IonicReactionPacks', 'ReactionPackCreated'): reaction_packs.handle_reaction_pack_created,
    ('IonicReactionPacks', 'ReactionAdded'): reaction_packs.handle_reaction_added,
    ('IonicReactionPacks', 'PackPurchased'): reaction_packs.handle_pack_purchased,

    ('IonicNFT', 'Approval'): nft.handle_approval,
    ('IonicNFT', 'ApprovalForAll'): nft.handle_approval_for_all,
    ('IonicNFT', 'MintersAuthorized'): nft.handle_minters_authorized,
    ('IonicNFT', 'TokenMinted'): nft.handle_token_minted,
    ('IonicNFT', 'TokenURIUpdated'): nft.handle_token_uri_updated,
    ('IonicNFT', 'Transfer'): nft.handle_transfer,

    ('AccessControl', 'AdminAdded'): nft.handle_admin_added,
    ('AccessControl', 'AdminRemoved'): nft.handle_admin_removed,
    ('AccessControl', 'AdminRevoked'): nft.handle_admin_revoked,
    ('AccessControl', 'MonaTokenUpdated'): nft.handle_mona_token_updated,
    ('AccessControl', 'PodeTokenUpdated'): nft.handle_pode_token_updated,
}

def get_handler(source: str, event_name: str) -> Optional[Handler]:
    """Look up the handler for an event of ``source``, if any."""
    return HANDLERS.get((source, event_name))

# Export public interface
__all__ = [
    'HANDLERS',
    'Handler',
    'HandlerContext',
    'HandlerError',
    'get_handler',
]
