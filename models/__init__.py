"""Entity records, chain events and deterministic identifiers.

This module provides:
- The materialized entity types read by the query layer
- The decoded event envelope and typed event parameters
- Id derivation helpers shared by every handler
"""

from .ids import (
    REGISTRY_ID,
    normalize_address,
    int_to_bytes,
    id_from_int,
    event_id,
    reaction_usage_id,
    response_metadata_id,
)
from .entities import (
    Entity,
    BlockRecord,
    EventRecord,
    Conductor,
    NFT,
    Appraisal,
    ReactionUsage,
    ConductorRegistry,
    Reviewer,
    Review,
    Designer,
    ReactionPack,
    Reaction,
    Purchase,
    TokenReaction,
    Metadata,
    ResponseMetadata,
    BaseMetadata,
    ReactionMetadata,
    Approval,
    ApprovalForAll,
    MintersAuthorized,
    TokenMinted,
    TokenURIUpdated,
    Transfer,
    AdminAdded,
    AdminRemoved,
    AdminRevoked,
    MonaTokenUpdated,
    PodeTokenUpdated,
    ENTITY_TYPES,
)
from .events import ChainEvent, InvalidEventError

# Export public interface
__all__ = [
    'REGISTRY_ID',
    'normalize_address',
    'int_to_bytes',
    'id_from_int',
    'event_id',
    'reaction_usage_id',
    'response_metadata_id',
    'Entity',
    'BlockRecord',
    'EventRecord',
    'Conductor',
    'NFT',
    'Appraisal',
    'ReactionUsage',
    'ConductorRegistry',
    'Reviewer',
    'Review',
    'Designer',
    'ReactionPack',
    'Reaction',
    'Purchase',
    'TokenReaction',
    'Metadata',
    'ResponseMetadata',
    'BaseMetadata',
    'ReactionMetadata',
    'Approval',
    'ApprovalForAll',
    'MintersAuthorized',
    'TokenMinted',
    'TokenURIUpdated',
    'Transfer',
    'AdminAdded',
    'AdminRemoved',
    'AdminRevoked',
    'MonaTokenUpdated',
    'PodeTokenUpdated',
    'ENTITY_TYPES',
    'ChainEvent',
    'InvalidEventError',
]
