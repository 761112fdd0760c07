"""Read-modify-write helpers for list-valued relationship fields.

Lists are never patched in place: each helper reads the whole list, builds a
new one and assigns it back to the record. An unset list counts as empty.
"""
from typing import Any, List

from models import Entity

def _current(entity: Entity, field: str) -> List[Any]:
    return list(getattr(entity, field) or [])

def append(entity: Entity, field: str, value: Any) -> Entity:
    """Append ``value`` to ``entity.field``. Does not de-duplicate."""
    values = _current(entity, field)
    values.append(value)
    setattr(entity, field, values)
    return entity

def append_unique(entity: Entity, field: str, value: Any) -> Entity:
    """Append ``value`` unless it is already present."""
    values = _current(entity, field)
    if value not in values:
        values.append(value)
    setattr(entity, field, values)
    return entity

def remove(entity: Entity, field: str, value: Any) -> Entity:
    """Rebuild ``entity.field`` without any entry equal to ``value``."""
    setattr(entity, field, [v for v in _current(entity, field) if v != value])
    return entity

def unique(values: List[Any]) -> List[Any]:
    """Drop repeated entries, keeping first occurrences in order."""
    result = []
    for value in values:
        if value not in result:
            result.append(value)
    return result
