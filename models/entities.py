"""Materialized entity records.

Field names are snake_case in Python and camelCase when serialized, which is
the shape the query layer reads. List fields hold entity ids and are only ever
replaced as a whole (see ``handlers.lib.relations``).
"""
from typing import ClassVar, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Entity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    kind: ClassVar[str] = 'Entity'

    id: str

    def to_record(self) -> dict:
        """Serialize to the stored (camelCase) representation."""
        return self.model_dump(by_alias=True)


class BlockRecord(Entity):
    block_number: Optional[int] = None
    block_timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None


# -----------------------------------------------------------------------------
# Shows and appraisals
# -----------------------------------------------------------------------------

class Conductor(BlockRecord):
    kind: ClassVar[str] = 'Conductor'

    conductor_id: Optional[int] = None
    wallet: Optional[str] = None
    uri: Optional[str] = None
    metadata: Optional[str] = None

    appraisal_count: Optional[int] = None
    total_score: Optional[int] = None
    average_score: Optional[int] = None
    review_count: Optional[int] = None
    total_review_score: Optional[int] = None
    average_review_score: Optional[int] = None
    invite_count: Optional[int] = None
    available_invites: Optional[int] = None

    appraisals: List[str] = Field(default_factory=list)
    reviews: List[str] = Field(default_factory=list)
    invited_designers: List[str] = Field(default_factory=list)
    not_appraised: List[str] = Field(default_factory=list)


class NFT(BlockRecord):
    kind: ClassVar[str] = 'NFT'

    nft_id: int
    nft_contract: Optional[str] = None
    token_id: Optional[int] = None
    submitter: Optional[str] = None
    token_type: Optional[int] = None
    active: Optional[bool] = None

    appraisal_count: Optional[int] = None
    total_score: Optional[int] = None
    average_score: Optional[int] = None

    appraisals: List[str] = Field(default_factory=list)


class Appraisal(BlockRecord):
    kind: ClassVar[str] = 'Appraisal'

    appraisal_id: int
    appraiser: str
    nft_id: int
    conductor_id: int
    overall_score: int
    nft_contract: Optional[str] = None
    uri: Optional[str] = None
    metadata: Optional[str] = None
    token_type: Optional[int] = None

    conductor: str
    nft: str
    reactions: List[str] = Field(default_factory=list)


class ReactionUsage(Entity):
    kind: ClassVar[str] = 'ReactionUsage'

    count: int
    reaction: str


class ConductorRegistry(Entity):
    kind: ClassVar[str] = 'ConductorRegistry'

    conductor_ids: List[int] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Reviews
# -----------------------------------------------------------------------------

class Reviewer(Entity):
    kind: ClassVar[str] = 'Reviewer'

    wallet: str
    uri: Optional[str] = None
    metadata: Optional[str] = None
    review_count: Optional[int] = None
    total_score: Optional[int] = None
    average_score: Optional[int] = None
    last_review_timestamp: Optional[int] = None

    reviews: List[str] = Field(default_factory=list)


class Review(Entity):
    kind: ClassVar[str] = 'Review'

    review_id: int
    reviewer: str
    conductor_id: int
    review_score: int
    timestamp: Optional[int] = None
    uri: Optional[str] = None
    metadata: Optional[str] = None

    conductor: str
    reactions: List[str] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Designers and reaction packs
# -----------------------------------------------------------------------------

class Designer(Entity):
    kind: ClassVar[str] = 'Designer'

    designer_id: int
    wallet: Optional[str] = None
    active: Optional[bool] = None
    invite_timestamp: Optional[int] = None
    pack_count: Optional[int] = None
    uri: Optional[str] = None
    metadata: Optional[str] = None

    invited_by: Optional[str] = None
    reaction_packs: List[str] = Field(default_factory=list)


class ReactionPack(Entity):
    kind: ClassVar[str] = 'ReactionPack'

    pack_id: int
    designer: Optional[str] = None
    base_price: Optional[int] = None
    current_price: Optional[int] = None
    price_increment: Optional[int] = None
    max_editions: Optional[int] = None
    sold_count: Optional[int] = None
    conductor_reserved_spots: Optional[int] = None
    active: Optional[bool] = None
    pack_uri: Optional[str] = None
    pack_metadata: Optional[str] = None

    designer_profile: Optional[str] = None
    reactions: List[str] = Field(default_factory=list)
    purchases: List[str] = Field(default_factory=list)


class Reaction(Entity):
    kind: ClassVar[str] = 'Reaction'

    reaction_id: int
    pack_id: Optional[int] = None
    reaction_uri: Optional[str] = None
    reaction_metadata: Optional[str] = None
    token_ids: List[int] = Field(default_factory=list)

    pack: Optional[str] = None
    token_reactions: List[str] = Field(default_factory=list)


class Purchase(Entity):
    kind: ClassVar[str] = 'Purchase'

    purchase_id: int
    pack_id: int
    buyer: str
    price: int
    edition_number: int
    share_weight: Optional[int] = None
    timestamp: Optional[int] = None
    transaction_hash: Optional[str] = None

    pack: str


class TokenReaction(Entity):
    kind: ClassVar[str] = 'TokenReaction'

    token_id: int
    reaction: str


# -----------------------------------------------------------------------------
# Resolved off-chain content
# -----------------------------------------------------------------------------

class Metadata(Entity):
    kind: ClassVar[str] = 'Metadata'

    comment: Optional[str] = None
    reactions: Optional[List[str]] = None


class ResponseMetadata(Entity):
    kind: ClassVar[str] = 'ResponseMetadata'

    emoji: Optional[str] = None
    count: int = 0


class BaseMetadata(Entity):
    kind: ClassVar[str] = 'BaseMetadata'

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class ReactionMetadata(Entity):
    kind: ClassVar[str] = 'ReactionMetadata'

    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    model: Optional[str] = None
    workflow: Optional[str] = None
    prompt: Optional[str] = None


# -----------------------------------------------------------------------------
# Event log records (NFT and access control contracts)
# -----------------------------------------------------------------------------

class EventRecord(BlockRecord):
    block_number: int
    block_timestamp: int
    transaction_hash: str


class Approval(EventRecord):
    kind: ClassVar[str] = 'Approval'

    owner: str
    approved: str
    token_id: int


class ApprovalForAll(EventRecord):
    kind: ClassVar[str] = 'ApprovalForAll'

    owner: str
    operator: str
    approved: bool


class MintersAuthorized(EventRecord):
    kind: ClassVar[str] = 'MintersAuthorized'

    minters: List[str] = Field(default_factory=list)


class TokenMinted(EventRecord):
    kind: ClassVar[str] = 'TokenMinted'

    minter: str
    token_id: int


class TokenURIUpdated(EventRecord):
    kind: ClassVar[str] = 'TokenURIUpdated'

    reason: str
    uri: str


class Transfer(EventRecord):
    kind: ClassVar[str] = 'Transfer'

    from_: str = Field(alias='from')
    to: str
    token_id: int


class AdminAdded(EventRecord):
    kind: ClassVar[str] = 'AdminAdded'

    admin: str


class AdminRemoved(EventRecord):
    kind: ClassVar[str] = 'AdminRemoved'

    admin: str


class AdminRevoked(EventRecord):
    kind: ClassVar[str] = 'AdminRevoked'


class MonaTokenUpdated(EventRecord):
    kind: ClassVar[str] = 'MonaTokenUpdated'

    new_token: str


class PodeTokenUpdated(EventRecord):
    kind: ClassVar[str] = 'PodeTokenUpdated'

    new_token: str


ENTITY_TYPES: Dict[str, Type[Entity]] = {
    model.kind: model
    for model in (
        Conductor, NFT, Appraisal, ReactionUsage, ConductorRegistry,
        Reviewer, Review, Designer, ReactionPack, Reaction, Purchase,
        TokenReaction, Metadata, ResponseMetadata, BaseMetadata,
        ReactionMetadata, Approval, ApprovalForAll, MintersAuthorized,
        TokenMinted, TokenURIUpdated, Transfer, AdminAdded, AdminRemoved,
        AdminRevoked, MonaTokenUpdated, PodeTokenUpdated,
    )
}
