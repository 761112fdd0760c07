"""Schema v1 - Entity store.

Every materialized entity is one row keyed by (kind, id) with its record
serialized as JSONB.
"""

schema = {
    'version': 1,
    'tables': [
        {
            'name': 'entities',
            'columns': [
                {'name': 'kind', 'type': 'TEXT', 'nullable': False},
                {'name': 'id', 'type': 'TEXT', 'nullable': False},
                {'name': 'data', 'type': 'JSONB', 'nullable': False},
                {'name': 'created_at', 'type': 'TIMESTAMP', 'nullable': False, 'default': 'now()'},
                {'name': 'updated_at', 'type': 'TIMESTAMP', 'nullable': False, 'default': 'now()'}
            ],
            'primary_key': ['kind', 'id'],
            'indexes': [
                {'name': 'idx_entities_kind', 'columns': ['kind']}
            ]
        }
    ],
    'migrations': []
}
