"""Builders for test events and canned contract results."""
import itertools

from models import ChainEvent

APPRAISALS = '0x' + 'a1' * 20
CONDUCTORS = '0x' + 'c1' * 20
DESIGNERS = '0x' + 'd1' * 20
REACTION_PACKS = '0x' + 'e1' * 20
IONIC_NFT = '0x' + 'f1' * 20
ACCESS_CONTROL = '0x' + '0a' * 20

SOURCES = {
    APPRAISALS: 'IonicAppraisals',
    CONDUCTORS: 'IonicConductors',
    DESIGNERS: 'IonicDesigners',
    REACTION_PACKS: 'IonicReactionPacks',
    IONIC_NFT: 'IonicNFT',
    ACCESS_CONTROL: 'AccessControl',
}

NFT_CONTRACT = '0x' + '77' * 20
WALLET_A = '0x' + '1a' * 20
WALLET_B = '0x' + '2b' * 20
WALLET_C = '0x' + '3c' * 20

_tx_counter = itertools.count(1)

def make_event(contract, name, params, block_number=100, block_timestamp=1700000000,
               log_index=0, transaction_hash=None):
    if transaction_hash is None:
        transaction_hash = '0x' + f"{next(_tx_counter):064x}"
    return ChainEvent(
        contract_address=contract,
        event_name=name,
        block_number=block_number,
        block_timestamp=block_timestamp,
        transaction_hash=transaction_hash,
        log_index=log_index,
        params=params
    )

# Event builders (params use the decoded ABI names)

def appraisal_created(appraisal_id, nft_id, conductor_id, appraiser=WALLET_A, score=80, **kw):
    return make_event(APPRAISALS, 'AppraisalCreated', {
        'appraiser': appraiser,
        'nftId': nft_id,
        'conductorId': conductor_id,
        'appraisalId': appraisal_id,
        'overallScore': score,
    }, **kw)

def nft_submitted(nft_id, token_id=1, submitter=WALLET_B, token_type=1, **kw):
    return make_event(APPRAISALS, 'NFTSubmitted', {
        'nftId': nft_id,
        'tokenId': token_id,
        'submitter': submitter,
        'tokenType': token_type,
    }, **kw)

def nft_removed(nft_id, submitter=WALLET_B, **kw):
    return make_event(APPRAISALS, 'NFTRemoved', {'nftId': nft_id, 'submitter': submitter}, **kw)

def conductor_registered(conductor_id, wallet=WALLET_A, uri='ipfs://QmConductor', **kw):
    return make_event(CONDUCTORS, 'ConductorRegistered', {
        'conductorId': conductor_id,
        'wallet': wallet,
        'uri': uri,
    }, **kw)

def conductor_deleted(conductor_id, **kw):
    return make_event(CONDUCTORS, 'ConductorDeleted', {'conductorId': conductor_id}, **kw)

def review_submitted(review_id, conductor_id, reviewer=WALLET_B, score=4, **kw):
    return make_event(CONDUCTORS, 'ReviewSubmitted', {
        'reviewer': reviewer,
        'conductorId': conductor_id,
        'reviewId': review_id,
        'reviewScore': score,
    }, **kw)

def designer_invited(designer_id, designer=WALLET_C, inviter=WALLET_A, **kw):
    return make_event(DESIGNERS, 'DesignerInvited', {
        'designer': designer,
        'designerId': designer_id,
        'inviter': inviter,
    }, **kw)

def reaction_pack_created(pack_id, designer=WALLET_C, base_price=100, max_editions=10,
                          reserved=2, **kw):
    return make_event(REACTION_PACKS, 'ReactionPackCreated', {
        'designer': designer,
        'packId': pack_id,
        'basePrice': base_price,
        'maxEditions': max_editions,
        'conductorReservedSpots': reserved,
    }, **kw)

def pack_purchased(purchase_id, pack_id, buyer=WALLET_B, price=100, edition=1, **kw):
    return make_event(REACTION_PACKS, 'PackPurchased', {
        'buyer': buyer,
        'packId': pack_id,
        'price': price,
        'purchaseId': purchase_id,
        'editionNumber': edition,
    }, **kw)

# Decoded contract results

def conductor_stats(**overrides):
    stats = {
        'appraisalCount': 0,
        'totalScore': 0,
        'averageScore': 0,
        'reviewCount': 0,
        'totalReviewScore': 0,
        'averageReviewScore': 0,
        'inviteCount': 0,
        'availableInvites': 0,
    }
    stats.update(overrides)
    return stats

def conductor_result(conductor_id, wallet=None, **stats):
    result = {'conductorId': conductor_id, 'stats': conductor_stats(**stats)}
    if wallet:
        result['wallet'] = wallet
    return result

def nft_result(active=True, appraisal_count=0, total_score=0, average_score=0):
    return {
        'nftContract': NFT_CONTRACT,
        'active': active,
        'appraisalCount': appraisal_count,
        'totalScore': total_score,
        'averageScore': average_score,
    }

def designer_result(designer_id, active=True, pack_count=0, uri='', pack_ids=()):
    return {
        'designerId': designer_id,
        'active': active,
        'packCount': pack_count,
        'uri': uri,
        'reactionPackIds': list(pack_ids),
    }

def pack_result(current_price=100, max_editions=10, sold_count=0, reserved=2,
                active=True, pack_uri='', reaction_ids=()):
    return {
        'currentPrice': current_price,
        'maxEditions': max_editions,
        'soldCount': sold_count,
        'conductorReservedSpots': reserved,
        'active': active,
        'packUri': pack_uri,
        'reactionIds': list(reaction_ids),
    }

def usages(*pairs):
    return [{'count': count, 'reactionId': reaction_id} for count, reaction_id in pairs]

# Common setup through the monitor

async def register_conductor(monitor, rpc, conductor_id, wallet=WALLET_A, **stats):
    rpc.set(CONDUCTORS, 'getConductor', [conductor_id], conductor_result(conductor_id, **stats))
    await monitor.process_event(conductor_registered(conductor_id, wallet=wallet))

async def submit_nft(monitor, rpc, nft_id, **kw):
    rpc.set(APPRAISALS, 'getNFT', [nft_id], nft_result())
    await monitor.process_event(nft_submitted(nft_id, **kw))
