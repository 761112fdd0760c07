"""Decoders turning fetched documents into metadata records.

A document whose top level is not a JSON object produces no record at all.
Otherwise only the fields that pass extraction are populated and every record
built from one document is saved in a single store transaction.
"""
import json
import logging
from enum import Enum
from typing import Any, Dict, Optional

from database import EntityStore
from models import (
    BaseMetadata,
    Metadata,
    ReactionMetadata,
    ResponseMetadata,
    response_metadata_id,
)
from .extract import extract_number, extract_string

logger = logging.getLogger(__name__)

class ContentKind(str, Enum):
    """Target shape of a content resolution job."""
    METADATA = "Metadata"
    BASE_METADATA = "BaseMetadata"
    REACTION_METADATA = "ReactionMetadata"

def content_id_from_uri(uri: Optional[str]) -> Optional[str]:
    """Trailing path segment of ``uri``, or None when there is none."""
    if not uri:
        return None
    content_id = uri.split('/')[-1]
    return content_id or None

def _parse_object(content_id: str, payload: bytes, kind: ContentKind) -> Optional[Dict[str, Any]]:
    try:
        obj = json.loads(payload)
    except ValueError:
        obj = None

    if not isinstance(obj, dict):
        logger.error(f"Failed to parse JSON for {kind.value}: {content_id}")
        return None
    return obj

async def handle_metadata(store: EntityStore, content_id: str, payload: bytes) -> Optional[Metadata]:
    """Build a Metadata record and one ResponseMetadata per reaction object."""
    obj = _parse_object(content_id, payload, ContentKind.METADATA)
    if obj is None:
        return None

    metadata = Metadata(id=content_id)
    responses = []

    comment = extract_string(obj.get('comment'), 'comment')
    if comment:
        metadata.comment = comment

    reactions = obj.get('reactions')
    if isinstance(reactions, list):
        reaction_ids = []
        for index, item in enumerate(reactions):
            if not isinstance(item, dict):
                continue

            response = ResponseMetadata(
                id=response_metadata_id(content_id, index),
                count=extract_number(item.get('count'))
            )
            emoji = extract_string(item.get('emoji'), 'emoji')
            if emoji:
                response.emoji = emoji

            responses.append(response)
            reaction_ids.append(response.id)
        metadata.reactions = reaction_ids

    async with store.transaction() as session:
        for response in responses:
            await session.save(response)
        await session.save(metadata)

    return metadata

async def handle_base_metadata(
    store: EntityStore,
    content_id: str,
    payload: bytes,
    description_from_title: bool = True
) -> Optional[BaseMetadata]:
    """Build a BaseMetadata record (title, description, image).

    With ``description_from_title`` set, a valid description is stored as the
    title value, which is what deployed indexers have always served.
    """
    obj = _parse_object(content_id, payload, ContentKind.BASE_METADATA)
    if obj is None:
        return None

    metadata = BaseMetadata(id=content_id)

    title = extract_string(obj.get('title'), 'title')
    if title:
        metadata.title = title
    description = extract_string(obj.get('description'), 'description')
    if description:
        metadata.description = title if description_from_title else description
    image = extract_string(obj.get('image'), 'image')
    if image:
        metadata.image = image

    async with store.transaction() as session:
        await session.save(metadata)

    return metadata

async def handle_reaction_metadata(store: EntityStore, content_id: str, payload: bytes) -> Optional[ReactionMetadata]:
    obj = _parse_object(content_id, payload, ContentKind.REACTION_METADATA)
    if obj is None:
        return None

    metadata = ReactionMetadata(id=content_id)
    for field in ('title', 'description', 'image', 'model', 'workflow', 'prompt'):
        value = extract_string(obj.get(field), field)
        if value:
            setattr(metadata, field, value)

    async with store.transaction() as session:
        await session.save(metadata)

    return metadata
