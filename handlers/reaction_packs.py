"""IonicReactionPacks event handlers."""
import logging

from content import ContentKind
from models import ChainEvent, Designer, Purchase, Reaction, ReactionPack, TokenReaction, id_from_int
from models.events import PackPurchasedParams, ReactionAddedParams, ReactionPackCreatedParams
from rpc import IonicDesigners, IonicReactionPacks
from .lib.aggregates import refresh_designer, sync_pack
from .lib.context import HandlerContext
from .lib.relations import append_unique, unique

logger = logging.getLogger(__name__)

async def handle_reaction_pack_created(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ReactionPackCreatedParams)
    packs = IonicReactionPacks.bind(ctx.rpc, event.contract_address)
    data = packs.get_reaction_pack(params.pack_id)

    designers = IonicDesigners.bind(ctx.rpc, packs.designers())
    designer_data = designers.get_designer_by_wallet(params.designer)
    designer_id = id_from_int(designer_data.designer_id)
    pack_id = id_from_int(params.pack_id)

    # max_editions and reserved spots come from the contract, not the event
    pack = await ctx.load_or_create(
        ReactionPack,
        pack_id,
        pack_id=params.pack_id,
        designer=params.designer,
        designer_profile=designer_id,
        base_price=params.base_price,
        max_editions=data.max_editions,
        conductor_reserved_spots=data.conductor_reserved_spots,
        price_increment=packs.default_price_increment(),
        pack_uri=data.pack_uri
    )
    sync_pack(pack, data)

    content_id = ctx.link_content(data.pack_uri, ContentKind.BASE_METADATA)
    if content_id:
        pack.pack_metadata = content_id

    for reaction_id in data.reaction_ids:
        append_unique(pack, 'reactions', id_from_int(reaction_id))
        reaction = await ctx.load_or_create(
            Reaction,
            id_from_int(reaction_id),
            reaction_id=reaction_id,
            pack_id=params.pack_id,
            pack=pack_id
        )
        await ctx.session.save(reaction)

    await ctx.session.save(pack)

    designer = await ctx.session.load(Designer, designer_id)
    if designer:
        append_unique(designer, 'reaction_packs', pack_id)
        refresh_designer(designer, designers)
        await ctx.session.save(designer)
    else:
        logger.debug(f"Designer {designer_data.designer_id} not indexed, skipping pack link")

    logger.info(f"Indexed reaction pack {params.pack_id} by designer {designer_data.designer_id}")

async def handle_reaction_added(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(ReactionAddedParams)
    reaction_id = id_from_int(params.reaction_id)
    pack_id = id_from_int(params.pack_id)

    reaction = await ctx.load_or_create(
        Reaction,
        reaction_id,
        reaction_id=params.reaction_id,
        pack_id=params.pack_id,
        reaction_uri=params.reaction_uri,
        pack=pack_id
    )
    content_id = ctx.link_content(params.reaction_uri, ContentKind.REACTION_METADATA)
    if content_id:
        reaction.reaction_metadata = content_id
    await ctx.session.save(reaction)

    pack = await ctx.session.load(ReactionPack, pack_id)
    if pack:
        append_unique(pack, 'reactions', reaction_id)
        await ctx.session.save(pack)
    else:
        logger.debug(f"Reaction pack {params.pack_id} not indexed, skipping reaction link")

async def _rebuild_token_reactions(ctx: HandlerContext, packs: IonicReactionPacks, reaction: Reaction) -> None:
    """Replace a reaction's token bindings with the authoritative list.

    Bindings are keyed by token id alone, so a token bound by two reactions
    belongs to whichever reaction was rebuilt last.
    """
    data = packs.get_reaction(reaction.reaction_id)
    token_ids = unique(data.token_ids)
    binding_ids = [id_from_int(token_id) for token_id in token_ids]

    for token_id, binding_id in zip(token_ids, binding_ids):
        await ctx.session.save(
            TokenReaction(id=binding_id, token_id=token_id, reaction=reaction.id)
        )

    for stale_id in reaction.token_reactions:
        if stale_id in binding_ids:
            continue
        binding = await ctx.session.load(TokenReaction, stale_id)
        if binding and binding.reaction == reaction.id:
            await ctx.session.remove(TokenReaction, stale_id)

    reaction.token_ids = token_ids
    reaction.token_reactions = binding_ids
    await ctx.session.save(reaction)

async def handle_pack_purchased(event: ChainEvent, ctx: HandlerContext) -> None:
    params = event.parse(PackPurchasedParams)
    packs = IonicReactionPacks.bind(ctx.rpc, event.contract_address)
    # Purchases are keyed by purchaseId; deployed indexers passed packId here
    purchase_data = packs.get_purchase(params.purchase_id)

    purchase_id = id_from_int(params.purchase_id)
    pack_id = id_from_int(params.pack_id)

    purchase = await ctx.load_or_create(
        Purchase,
        purchase_id,
        purchase_id=params.purchase_id,
        pack_id=params.pack_id,
        buyer=params.buyer,
        price=params.price,
        edition_number=params.edition_number,
        share_weight=purchase_data.share_weight,
        timestamp=event.block_timestamp,
        transaction_hash=event.transaction_hash,
        pack=pack_id
    )
    await ctx.session.save(purchase)

    pack = await ctx.session.load(ReactionPack, pack_id)
    if pack is None:
        logger.debug(f"Reaction pack {params.pack_id} not indexed, skipping purchase link")
        return

    sync_pack(pack, packs.get_reaction_pack(params.pack_id))
    purchase_ids = [id_from_int(p) for p in packs.get_pack_purchases(params.pack_id)]
    pack.purchases = unique(purchase_ids + [purchase_id])
    await ctx.session.save(pack)

    for reaction_ref in pack.reactions:
        reaction = await ctx.session.load(Reaction, reaction_ref)
        if reaction is None:
            logger.debug(f"Reaction {reaction_ref} of pack {params.pack_id} not indexed")
            continue
        await _rebuild_token_reactions(ctx, packs, reaction)

    logger.info(f"Indexed purchase {params.purchase_id} of pack {params.pack_id}")
