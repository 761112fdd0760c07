"""Tests for IonicDesigners event handling."""

import pytest

from content import ContentKind
from models import REGISTRY_ID, Conductor, ConductorRegistry, Designer
from event_utils import (
    CONDUCTORS,
    DESIGNERS,
    WALLET_A,
    WALLET_C,
    conductor_result,
    designer_invited,
    designer_result,
    make_event,
    register_conductor,
)

def set_invite(rpc, designer_id, conductor_id, inviter=WALLET_A, **stats):
    rpc.set(DESIGNERS, 'getDesigner', [designer_id],
            designer_result(designer_id, uri='ipfs://QmDesigner', pack_ids=[3, 3, 5]))
    rpc.set(DESIGNERS, 'conductors', [], CONDUCTORS)
    rpc.set(CONDUCTORS, 'getConductorByWallet', [inviter], conductor_result(conductor_id, **stats))

@pytest.mark.asyncio
async def test_invite_creates_missing_conductor(store, rpc, monitor, resolver):
    set_invite(rpc, 4, conductor_id=9, inviteCount=1, availableInvites=2)

    assert await monitor.process_event(designer_invited(4, inviter=WALLET_A, block_timestamp=1700000900))

    designer = await store.load(Designer, '0x04')
    assert designer.designer_id == 4
    assert designer.wallet == WALLET_C
    assert designer.invite_timestamp == 1700000900
    assert designer.invited_by == '0x09'
    assert designer.uri == 'ipfs://QmDesigner'
    assert designer.metadata == 'QmDesigner'
    assert designer.reaction_packs == ['0x03', '0x05']
    assert designer.active is True

    conductor = await store.load(Conductor, '0x09')
    assert conductor.conductor_id == 9
    assert conductor.wallet == WALLET_A
    assert conductor.invited_designers == ['0x04']
    assert (conductor.invite_count, conductor.available_invites) == (1, 2)

    # A conductor created for an invite is not a registration
    assert await store.load(ConductorRegistry, REGISTRY_ID) is None
    assert resolver.queue.get_nowait() == ('QmDesigner', ContentKind.BASE_METADATA)

@pytest.mark.asyncio
async def test_invite_links_registered_conductor(store, rpc, monitor, resolver):
    await register_conductor(monitor, rpc, 1)
    await store.save((await store.load(Conductor, '0x01')).model_copy(update={'reviews': ['0x07']}))
    set_invite(rpc, 4, conductor_id=1, inviteCount=1)
    set_invite(rpc, 5, conductor_id=1, inviteCount=2)

    await monitor.process_event(designer_invited(4))
    await monitor.process_event(designer_invited(5))
    await monitor.process_event(designer_invited(5))

    conductor = await store.load(Conductor, '0x01')
    assert conductor.invited_designers == ['0x04', '0x05']
    assert conductor.reviews == ['0x07']
    assert conductor.uri == 'ipfs://QmConductor'
    assert conductor.invite_count == 2

@pytest.mark.asyncio
async def test_designer_deactivated(store, rpc, monitor):
    set_invite(rpc, 4, conductor_id=1)
    set_invite(rpc, 5, conductor_id=1)
    await monitor.process_event(designer_invited(4))
    await monitor.process_event(designer_invited(5))

    assert await monitor.process_event(make_event(DESIGNERS, 'DesignerDeactivated', {'designerId': 4}))

    assert await store.load(Designer, '0x04') is None
    assert await store.load(Designer, '0x05') is not None
    assert (await store.load(Conductor, '0x01')).invited_designers == ['0x05']

@pytest.mark.asyncio
async def test_deactivating_unindexed_designer(store, rpc, monitor):
    assert await monitor.process_event(make_event(DESIGNERS, 'DesignerDeactivated', {'designerId': 4}))
    assert store.count(Designer) == 0

@pytest.mark.asyncio
async def test_designer_uri(store, rpc, monitor, resolver):
    set_invite(rpc, 4, conductor_id=1)
    await monitor.process_event(designer_invited(4))
    resolver.queue.get_nowait()

    await monitor.process_event(make_event(DESIGNERS, 'DesignerURI', {
        'designerId': 4,
        'uri': 'ipfs://QmRebrand',
    }))

    designer = await store.load(Designer, '0x04')
    assert designer.uri == 'ipfs://QmRebrand'
    assert designer.metadata == 'QmRebrand'
    assert resolver.queue.get_nowait() == ('QmRebrand', ContentKind.BASE_METADATA)

@pytest.mark.asyncio
async def test_designer_uri_for_unindexed_designer(store, rpc, monitor, resolver):
    await monitor.process_event(make_event(DESIGNERS, 'DesignerURI', {'designerId': 4, 'uri': 'ipfs://QmX'}))

    assert store.count(Designer) == 0
    assert resolver.queue.empty()
