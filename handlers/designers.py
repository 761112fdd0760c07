"""IonicDesigners event handlers."""
import logging

from content import ContentKind
from models import ChainEvent, Conductor, Designer, id_from_int
from models.events import DesignerDeactivatedParams, DesignerInvitedParams, DesignerURIParams
from rpc import IonicConductors, IonicDesigners
from .lib.aggregates import sync_conductor, sync_designer
from .lib.context import HandlerContext
from .lib.relations import append_unique, remove, unique

logger = logging.getLogger(__name__)

async def handle_designer_invited(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(DesignerInvitedParams)
    designers = IonicDesigners.bind(ctx.rpc, event.contract_address)
    data = designers.get_designer(params.designer_id)

    # Reverse lookup of the inviting wallet on the conductors contract
    conductors = IonicConductors.bind(ctx.rpc, designers.conductors())
    inviter = conductors.get_conductor_by_wallet(params.inviter)
    conductor_id = id_from_int(inviter.conductor_id)
    designer_id = id_from_int(params.designer_id)

    designer = await ctx.load_or_create(
        Designer,
        designer_id,
        designer_id=params.designer_id,
        wallet=params.designer,
        invite_timestamp=event.block_timestamp,
        uri=data.uri,
        invited_by=conductor_id,
        reaction_packs=unique([id_from_int(pack_id) for pack_id in data.reaction_pack_ids])
    )
    content_id = ctx.link_content(data.uri, ContentKind.BASE_METADATA)
    if content_id:
        designer.metadata = content_id
    sync_designer(designer, data)
    await ctx.session.save(designer)

    # The invite can arrive before the conductor's registration is indexed
    conductor = await ctx.session.load(Conductor, conductor_id)
    if conductor is None:
        logger.debug(f"Conductor {inviter.conductor_id} not indexed yet, creating it for invite")
        conductor = Conductor(
            id=conductor_id,
            conductor_id=inviter.conductor_id,
            wallet=inviter.wallet or params.inviter
        )

    append_unique(conductor, 'invited_designers', designer_id)
    sync_conductor(conductor, inviter.stats)
    await ctx.session.save(conductor)

    logger.info(f"Indexed designer {params.designer_id} invited by conductor {inviter.conductor_id}")

async def handle_designer_deactivated(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(DesignerDeactivatedParams)
    designer_id = id_from_int(params.designer_id)

    designer = await ctx.session.load(Designer, designer_id)
    if designer is None:
        logger.debug(f"Designer {params.designer_id} was never indexed")
        return

    await ctx.session.remove(Designer, designer_id)

    if designer.invited_by:
        conductor = await ctx.session.load(Conductor, designer.invited_by)
        if conductor:
            remove(conductor, 'invited_designers', designer_id)
            await ctx.session.save(conductor)

    logger.info(f"Deactivated designer {params.designer_id}")

async def handle_designer_uri(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(DesignerURIParams)
    designer = await ctx.session.load(Designer, id_from_int(params.designer_id))
    if designer is None:
        logger.debug(f"Designer {params.designer_id} not indexed, skipping uri update")
        return

    designer.uri = params.uri
    content_id = ctx.link_content(params.uri, ContentKind.BASE_METADATA)
    if content_id:
        designer.metadata = content_id
    await ctx.session.save(designer)
