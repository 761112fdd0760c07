"""Tests for IonicConductors event handling."""

import pytest

from content import ContentKind
from models import REGISTRY_ID, Conductor, ConductorRegistry, Review, Reviewer, reaction_usage_id
from event_utils import (
    CONDUCTORS,
    WALLET_A,
    WALLET_B,
    conductor_deleted,
    conductor_result,
    make_event,
    register_conductor,
    review_submitted,
    usages,
)

def set_review(rpc, review_id, uri='ipfs://QmReview', reactions=()):
    rpc.set(CONDUCTORS, 'getReview', [review_id], {'uri': uri, 'reactions': list(reactions)})

def set_reviewer(rpc, wallet, review_count=1, total_score=4, average_score=4, last=1700000000):
    rpc.set(CONDUCTORS, 'getReviewer', [wallet], {
        'stats': {
            'reviewCount': review_count,
            'totalScore': total_score,
            'averageScore': average_score,
            'lastReviewTimestamp': last,
        }
    })

@pytest.mark.asyncio
async def test_conductor_registered(store, rpc, monitor, resolver):
    await register_conductor(monitor, rpc, 1, appraisalCount=3, totalScore=240, averageScore=80,
                             inviteCount=1, availableInvites=4)

    conductor = await store.load(Conductor, '0x01')
    assert conductor.conductor_id == 1
    assert conductor.wallet == WALLET_A
    assert conductor.uri == 'ipfs://QmConductor'
    assert conductor.metadata == 'QmConductor'
    assert conductor.block_number == 100
    assert (conductor.appraisal_count, conductor.total_score, conductor.average_score) == (3, 240, 80)
    assert (conductor.review_count, conductor.total_review_score, conductor.average_review_score) == (0, 0, 0)
    assert (conductor.invite_count, conductor.available_invites) == (1, 4)

    registry = await store.load(ConductorRegistry, REGISTRY_ID)
    assert registry.conductor_ids == [1]
    assert resolver.queue.get_nowait() == ('QmConductor', ContentKind.BASE_METADATA)

@pytest.mark.asyncio
async def test_registering_twice_keeps_one_registry_entry(store, rpc, monitor):
    await register_conductor(monitor, rpc, 1)
    await register_conductor(monitor, rpc, 2)
    await register_conductor(monitor, rpc, 1)

    registry = await store.load(ConductorRegistry, REGISTRY_ID)
    assert registry.conductor_ids == [1, 2]

@pytest.mark.asyncio
async def test_registration_keeps_existing_relations(store, rpc, monitor):
    await store.save(Conductor(id='0x01', conductor_id=1, invited_designers=['0x04']))

    await register_conductor(monitor, rpc, 1)

    conductor = await store.load(Conductor, '0x01')
    assert conductor.invited_designers == ['0x04']
    assert conductor.wallet == WALLET_A

@pytest.mark.asyncio
async def test_conductor_deleted(store, rpc, monitor):
    await register_conductor(monitor, rpc, 1)
    await register_conductor(monitor, rpc, 2)

    await monitor.process_event(conductor_deleted(1))

    assert await store.load(Conductor, '0x01') is None
    assert (await store.load(ConductorRegistry, REGISTRY_ID)).conductor_ids == [2]

@pytest.mark.asyncio
async def test_deleting_unindexed_conductor(store, rpc, monitor):
    assert await monitor.process_event(conductor_deleted(9))
    assert store.count(Conductor) == 0

@pytest.mark.asyncio
async def test_stats_updated_overwrites_every_stat(store, rpc, monitor):
    await register_conductor(monitor, rpc, 1, appraisalCount=3, inviteCount=2)
    rpc.set(CONDUCTORS, 'getConductor', [1], conductor_result(1, reviewCount=5, totalReviewScore=20,
                                                             averageReviewScore=4))

    await monitor.process_event(make_event(CONDUCTORS, 'ConductorStatsUpdated', {'conductorId': 1}))

    conductor = await store.load(Conductor, '0x01')
    assert (conductor.review_count, conductor.total_review_score, conductor.average_review_score) == (5, 20, 4)
    assert conductor.appraisal_count == 0
    assert conductor.invite_count == 0

@pytest.mark.asyncio
async def test_stats_update_for_unindexed_conductor_reads_nothing(store, rpc, monitor):
    assert await monitor.process_event(make_event(CONDUCTORS, 'ConductorStatsUpdated', {'conductorId': 3}))
    assert rpc.count('getConductor') == 0
    assert store.count(Conductor) == 0

@pytest.mark.asyncio
async def test_conductor_updated(store, rpc, monitor, resolver):
    await register_conductor(monitor, rpc, 1)
    resolver.queue.get_nowait()

    await monitor.process_event(make_event(CONDUCTORS, 'ConductorUpdated', {
        'conductorId': 1,
        'uri': 'https://gateway.example/ipfs/QmNewProfile',
    }))

    conductor = await store.load(Conductor, '0x01')
    assert conductor.uri == 'https://gateway.example/ipfs/QmNewProfile'
    assert conductor.metadata == 'QmNewProfile'
    assert resolver.queue.get_nowait() == ('QmNewProfile', ContentKind.BASE_METADATA)

@pytest.mark.asyncio
async def test_review_submitted(store, rpc, monitor):
    await register_conductor(monitor, rpc, 1)
    set_review(rpc, 7, reactions=usages((1, 2)))
    set_reviewer(rpc, WALLET_B)
    rpc.set(CONDUCTORS, 'getConductor', [1], conductor_result(1, reviewCount=1, totalReviewScore=4,
                                                             averageReviewScore=4))

    await monitor.process_event(review_submitted(7, conductor_id=1, score=4, block_timestamp=1700000500))

    review = await store.load(Review, '0x07')
    assert review.reviewer == WALLET_B
    assert review.conductor == '0x01'
    assert review.review_score == 4
    assert review.timestamp == 1700000500
    assert review.metadata == 'QmReview'
    assert review.reactions == [reaction_usage_id(1, 2)]

    reviewer = await store.load(Reviewer, WALLET_B)
    assert reviewer.wallet == WALLET_B
    assert reviewer.reviews == ['0x07']
    assert (reviewer.review_count, reviewer.total_score, reviewer.last_review_timestamp) == (1, 4, 1700000000)

    conductor = await store.load(Conductor, '0x01')
    assert conductor.reviews == ['0x07']
    assert conductor.review_count == 1
    assert conductor.average_review_score == 4

@pytest.mark.asyncio
async def test_review_of_unindexed_conductor(store, rpc, monitor):
    set_review(rpc, 8)
    set_reviewer(rpc, WALLET_B)

    assert await monitor.process_event(review_submitted(8, conductor_id=6))

    assert (await store.load(Review, '0x08')).conductor == '0x06'
    assert (await store.load(Reviewer, WALLET_B)).reviews == ['0x08']
    assert await store.load(Conductor, '0x06') is None
    assert rpc.count('getConductor') == 0

@pytest.mark.asyncio
async def test_reviewer_accumulates_reviews(store, rpc, monitor):
    set_review(rpc, 1)
    set_review(rpc, 2)
    set_reviewer(rpc, WALLET_B, review_count=2)

    await monitor.process_event(review_submitted(1, conductor_id=6))
    await monitor.process_event(review_submitted(2, conductor_id=6))
    await monitor.process_event(review_submitted(2, conductor_id=6))

    reviewer = await store.load(Reviewer, WALLET_B)
    assert reviewer.reviews == ['0x01', '0x02']
    assert reviewer.review_count == 2

@pytest.mark.asyncio
async def test_reviewer_uri_updated_creates_reviewer(store, rpc, monitor, resolver):
    await monitor.process_event(make_event(CONDUCTORS, 'ReviewerURIUpdated', {
        'reviewer': WALLET_B.upper().replace('0X', '0x'),
        'uri': 'ipfs://QmReviewer',
    }))

    reviewer = await store.load(Reviewer, WALLET_B)
    assert reviewer.uri == 'ipfs://QmReviewer'
    assert reviewer.metadata == 'QmReviewer'
    assert reviewer.reviews == []
    assert resolver.queue.get_nowait() == ('QmReviewer', ContentKind.BASE_METADATA)
