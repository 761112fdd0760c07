"""IonicAppraisals event handlers."""
import logging

from content import ContentKind
from models import NFT, REGISTRY_ID, Appraisal, ChainEvent, Conductor, ConductorRegistry, id_from_int
from models.events import AppraisalCreatedParams, NFTRemovedParams, NFTSubmittedParams
from rpc import IonicAppraisals
from .lib.aggregates import refresh_nft, sync_nft
from .lib.context import HandlerContext
from .lib.relations import append_unique, remove

logger = logging.getLogger(__name__)

async def handle_appraisal_created(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(AppraisalCreatedParams)
    contract = IonicAppraisals.bind(ctx.rpc, event.contract_address)
    data = contract.get_appraisal(params.appraisal_id)

    appraisal_id = id_from_int(params.appraisal_id)
    conductor_id = id_from_int(params.conductor_id)
    nft_id = id_from_int(params.nft_id)

    appraisal = await ctx.load_or_create(
        Appraisal,
        appraisal_id,
        appraisal_id=params.appraisal_id,
        appraiser=params.appraiser,
        nft_id=params.nft_id,
        nft_contract=data.nft_contract,
        conductor_id=params.conductor_id,
        overall_score=params.overall_score,
        uri=data.uri,
        conductor=conductor_id,
        nft=nft_id,
        block_number=event.block_number,
        block_timestamp=event.block_timestamp,
        transaction_hash=event.transaction_hash
    )

    content_id = ctx.link_content(data.uri, ContentKind.METADATA)
    if content_id:
        appraisal.metadata = content_id

    appraisal.reactions = await ctx.save_reaction_usages(data.reactions)

    conductor = await ctx.session.load(Conductor, conductor_id)
    if conductor:
        append_unique(conductor, 'appraisals', appraisal_id)
        remove(conductor, 'not_appraised', nft_id)
        await ctx.session.save(conductor)
    else:
        logger.debug(f"Conductor {conductor_id} not indexed, skipping appraisal link")

    nft = await ctx.session.load(NFT, nft_id)
    if nft:
        append_unique(nft, 'appraisals', appraisal_id)
        refresh_nft(nft, contract)
        await ctx.session.save(nft)
        appraisal.token_type = nft.token_type
    else:
        logger.debug(f"NFT {nft_id} not indexed, appraisal {appraisal_id} left without token type")

    await ctx.session.save(appraisal)
    logger.info(f"Indexed appraisal {params.appraisal_id} of NFT {params.nft_id}")

async def _registered_conductors(ctx: HandlerContext):
    """Yield every conductor listed in the registry that is still indexed."""
    registry = await ctx.session.load(ConductorRegistry, REGISTRY_ID)
    if registry is None:
        return
    for conductor_id in registry.conductor_ids:
        conductor = await ctx.session.load(Conductor, id_from_int(conductor_id))
        if conductor:
            yield conductor

async def handle_nft_removed(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(NFTRemovedParams)
    nft_id = id_from_int(params.nft_id)

    nft = await ctx.session.load(NFT, nft_id)
    if nft is None:
        logger.debug(f"NFT {params.nft_id} was never indexed, nothing to remove")
        return

    async for conductor in _registered_conductors(ctx):
        remove(conductor, 'not_appraised', nft_id)
        await ctx.session.save(conductor)

    await ctx.session.remove(NFT, nft_id)
    logger.info(f"Removed NFT {params.nft_id}")

async def handle_nft_submitted(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(NFTSubmittedParams)
    contract = IonicAppraisals.bind(ctx.rpc, event.contract_address)
    data = contract.get_nft(params.nft_id)
    nft_id = id_from_int(params.nft_id)

    nft = await ctx.load_or_create(
        NFT,
        nft_id,
        nft_id=params.nft_id,
        nft_contract=data.nft_contract,
        token_id=params.token_id,
        submitter=params.submitter,
        token_type=params.token_type,
        block_number=event.block_number,
        block_timestamp=event.block_timestamp,
        transaction_hash=event.transaction_hash
    )
    sync_nft(nft, data)
    await ctx.session.save(nft)

    # Every conductor can appraise a newly submitted NFT
    async for conductor in _registered_conductors(ctx):
        append_unique(conductor, 'not_appraised', nft_id)
        await ctx.session.save(conductor)

    logger.info(f"Indexed NFT {params.nft_id} (token {params.token_id})")
