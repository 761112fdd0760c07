"""Typed snapshots of authoritative contract state.

Field names follow the contract ABI (camelCase on the wire).
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.events import Address


class Snapshot(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReactionUsageData(Snapshot):
    count: int
    reaction_id: int


class AppraisalData(Snapshot):
    nft_contract: Address
    uri: str = ''
    reactions: List[ReactionUsageData] = Field(default_factory=list)


class NFTData(Snapshot):
    nft_contract: Address
    active: bool
    appraisal_count: int
    total_score: int
    average_score: int


class ConductorStats(Snapshot):
    appraisal_count: int
    total_score: int
    average_score: int
    review_count: int
    total_review_score: int
    average_review_score: int
    invite_count: int
    available_invites: int


class ConductorData(Snapshot):
    conductor_id: int
    wallet: Optional[Address] = None
    uri: Optional[str] = None
    stats: ConductorStats


class ReviewData(Snapshot):
    uri: str = ''
    reactions: List[ReactionUsageData] = Field(default_factory=list)


class ReviewerStats(Snapshot):
    review_count: int
    total_score: int
    average_score: int
    last_review_timestamp: int


class ReviewerData(Snapshot):
    stats: ReviewerStats


class DesignerData(Snapshot):
    designer_id: int
    wallet: Optional[Address] = None
    active: bool
    pack_count: int
    uri: str = ''
    reaction_pack_ids: List[int] = Field(default_factory=list)


class ReactionPackData(Snapshot):
    current_price: int
    max_editions: int
    sold_count: int
    conductor_reserved_spots: int
    active: bool
    pack_uri: str = ''
    reaction_ids: List[int] = Field(default_factory=list)


class PurchaseData(Snapshot):
    share_weight: int


class ReactionData(Snapshot):
    token_ids: List[int] = Field(default_factory=list)
