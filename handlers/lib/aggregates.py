"""Aggregate synchronization from authoritative contract reads.

Counts, totals and averages are never accumulated from event payloads. Every
``sync_*`` overwrites the stored fields with a snapshot; every ``refresh_*``
performs the read first and returns the snapshot it applied.
"""
from models import NFT, Conductor, Designer, ReactionPack, Reviewer
from rpc import (
    ConductorData,
    ConductorStats,
    DesignerData,
    IonicAppraisals,
    IonicConductors,
    IonicDesigners,
    IonicReactionPacks,
    NFTData,
    ReactionPackData,
    ReviewerStats,
)

def sync_conductor(conductor: Conductor, stats: ConductorStats) -> Conductor:
    conductor.appraisal_count = stats.appraisal_count
    conductor.total_score = stats.total_score
    conductor.average_score = stats.average_score
    conductor.review_count = stats.review_count
    conductor.total_review_score = stats.total_review_score
    conductor.average_review_score = stats.average_review_score
    conductor.invite_count = stats.invite_count
    conductor.available_invites = stats.available_invites
    return conductor

def sync_nft(nft: NFT, data: NFTData) -> NFT:
    nft.active = data.active
    nft.appraisal_count = data.appraisal_count
    nft.total_score = data.total_score
    nft.average_score = data.average_score
    return nft

def sync_reviewer(reviewer: Reviewer, stats: ReviewerStats) -> Reviewer:
    reviewer.review_count = stats.review_count
    reviewer.total_score = stats.total_score
    reviewer.average_score = stats.average_score
    reviewer.last_review_timestamp = stats.last_review_timestamp
    return reviewer

def sync_designer(designer: Designer, data: DesignerData) -> Designer:
    designer.active = data.active
    designer.pack_count = data.pack_count
    return designer

def sync_pack(pack: ReactionPack, data: ReactionPackData) -> ReactionPack:
    pack.sold_count = data.sold_count
    pack.current_price = data.current_price
    pack.active = data.active
    return pack

def refresh_conductor(conductor: Conductor, contract: IonicConductors) -> ConductorData:
    data = contract.get_conductor(conductor.conductor_id)
    sync_conductor(conductor, data.stats)
    return data

def refresh_nft(nft: NFT, contract: IonicAppraisals) -> NFTData:
    data = contract.get_nft(nft.nft_id)
    sync_nft(nft, data)
    return data

def refresh_reviewer(reviewer: Reviewer, contract: IonicConductors) -> ReviewerStats:
    stats = contract.get_reviewer(reviewer.wallet).stats
    sync_reviewer(reviewer, stats)
    return stats

def refresh_designer(designer: Designer, contract: IonicDesigners) -> DesignerData:
    data = contract.get_designer(designer.designer_id)
    sync_designer(designer, data)
    return data

def refresh_pack(pack: ReactionPack, contract: IonicReactionPacks) -> ReactionPackData:
    data = contract.get_reaction_pack(pack.pack_id)
    sync_pack(pack, data)
    return data
