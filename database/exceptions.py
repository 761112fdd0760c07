"""Database exceptions."""

class DatabaseError(Exception):
    """Base exception for database operations."""
    pass

class DatabaseSchemaError(DatabaseError):
    """Raised when schema loading or migration fails."""
    pass

class StoreError(DatabaseError):
    """Raised when an entity record cannot be loaded or saved."""
    pass
