"""IonicConductors event handlers."""
import logging

from content import ContentKind
from models import REGISTRY_ID, ChainEvent, Conductor, ConductorRegistry, Review, Reviewer, id_from_int
from models.events import (
    ConductorDeletedParams,
    ConductorRegisteredParams,
    ConductorStatsUpdatedParams,
    ConductorUpdatedParams,
    ReviewerURIUpdatedParams,
    ReviewSubmittedParams,
)
from rpc import IonicConductors
from .lib.aggregates import refresh_conductor, refresh_reviewer, sync_conductor
from .lib.context import HandlerContext
from .lib.relations import append_unique, remove

logger = logging.getLogger(__name__)

async def handle_conductor_registered(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ConductorRegisteredParams)
    contract = IonicConductors.bind(ctx.rpc, event.contract_address)
    data = contract.get_conductor(params.conductor_id)
    conductor_id = id_from_int(params.conductor_id)

    conductor = await ctx.load_or_create(
        Conductor,
        conductor_id,
        conductor_id=params.conductor_id,
        wallet=params.wallet,
        uri=params.uri,
        block_number=event.block_number,
        block_timestamp=event.block_timestamp,
        transaction_hash=event.transaction_hash
    )
    content_id = ctx.link_content(params.uri, ContentKind.BASE_METADATA)
    if content_id:
        conductor.metadata = content_id

    sync_conductor(conductor, data.stats)
    await ctx.session.save(conductor)

    registry = await ctx.load_or_create(ConductorRegistry, REGISTRY_ID)
    append_unique(registry, 'conductor_ids', params.conductor_id)
    await ctx.session.save(registry)

    logger.info(f"Registered conductor {params.conductor_id} ({params.wallet})")

async def handle_conductor_deleted(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ConductorDeletedParams)
    conductor_id = id_from_int(params.conductor_id)

    if await ctx.session.load(Conductor, conductor_id):
        await ctx.session.remove(Conductor, conductor_id)
    else:
        logger.debug(f"Conductor {params.conductor_id} was never indexed")

    registry = await ctx.session.load(ConductorRegistry, REGISTRY_ID)
    if registry:
        remove(registry, 'conductor_ids', params.conductor_id)
        await ctx.session.save(registry)

    logger.info(f"Deleted conductor {params.conductor_id}")

async def handle_conductor_stats_updated(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ConductorStatsUpdatedParams)
    conductor = await ctx.session.load(Conductor, id_from_int(params.conductor_id))
    if conductor is None:
        logger.debug(f"Conductor {params.conductor_id} not indexed, skipping stats update")
        return

    refresh_conductor(conductor, IonicConductors.bind(ctx.rpc, event.contract_address))
    await ctx.session.save(conductor)

async def handle_conductor_updated(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ConductorUpdatedParams)
    conductor = await ctx.session.load(Conductor, id_from_int(params.conductor_id))
    if conductor is None:
        logger.debug(f"Conductor {params.conductor_id} not indexed, skipping uri update")
        return

    conductor.uri = params.uri
    content_id = ctx.link_content(params.uri, ContentKind.BASE_METADATA)
    if content_id:
        conductor.metadata = content_id
    await ctx.session.save(conductor)

async def handle_review_submitted(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ReviewSubmittedParams)
    contract = IonicConductors.bind(ctx.rpc, event.contract_address)
    data = contract.get_review(params.review_id)

    review_id = id_from_int(params.review_id)
    conductor_id = id_from_int(params.conductor_id)

    review = await ctx.load_or_create(
        Review,
        review_id,
        review_id=params.review_id,
        reviewer=params.reviewer,
        conductor_id=params.conductor_id,
        review_score=params.review_score,
        timestamp=event.block_timestamp,
        uri=data.uri,
        conductor=conductor_id
    )
    content_id = ctx.link_content(data.uri, ContentKind.METADATA)
    if content_id:
        review.metadata = content_id

    review.reactions = await ctx.save_reaction_usages(data.reactions)
    await ctx.session.save(review)

    reviewer = await ctx.load_or_create(Reviewer, params.reviewer, wallet=params.reviewer)
    append_unique(reviewer, 'reviews', review_id)
    refresh_reviewer(reviewer, contract)
    await ctx.session.save(reviewer)

    conductor = await ctx.session.load(Conductor, conductor_id)
    if conductor:
        append_unique(conductor, 'reviews', review_id)
        refresh_conductor(conductor, contract)
        await ctx.session.save(conductor)
    else:
        logger.debug(f"Conductor {params.conductor_id} not indexed, skipping review link")

    logger.info(f"Indexed review {params.review_id} of conductor {params.conductor_id}")

async def handle_reviewer_uri_updated(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ReviewerURIUpdatedParams)
    reviewer = await ctx.load_or_create(
        Reviewer,
        params.reviewer,
        wallet=params.reviewer,
        uri=params.uri
    )
    content_id = ctx.link_content(params.uri, ContentKind.BASE_METADATA)
    if content_id:
        reviewer.metadata = content_id
    await ctx.session.save(reviewer)
