"""Content resolution exceptions."""

class ContentError(Exception):
    """Base exception for content resolution errors"""
    pass

class ContentUnavailableError(ContentError):
    """Raised when a content id cannot be fetched from the gateway"""
    def __init__(self, content_id: str, reason: str):
        self.content_id = content_id
        super().__init__(f"Content {content_id} unavailable: {reason}")
