"""HTTP gateway client for content-addressed documents."""
import logging

import backoff
import requests

from .exceptions import ContentUnavailableError

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.Timeout,
)

class IPFSClient:
    """Fetches raw bytes for a content id from an IPFS HTTP gateway."""

    def __init__(self, gateway: str = 'https://ipfs.io', timeout: float = 30, max_tries: int = 3):
        """Initialize the client.

        Args:
            gateway: Gateway base URL
            timeout: Request timeout in seconds
            max_tries: Attempts per fetch for connection errors and timeouts
        """
        self.gateway = gateway.rstrip('/')
        self.timeout = timeout
        self.max_tries = max_tries
        self.session = requests.Session()

    def url_for(self, content_id: str) -> str:
        return f"{self.gateway}/ipfs/{content_id}"

    def _get(self, content_id: str) -> bytes:
        response = self.session.get(self.url_for(content_id), timeout=self.timeout)
        response.raise_for_status()
        return response.content

    def fetch(self, content_id: str) -> bytes:
        """Fetch a document.

        Raises:
            ContentUnavailableError: If the gateway cannot serve the content
        """
        get = backoff.on_exception(
            backoff.expo,
            RETRYABLE_ERRORS,
            max_tries=self.max_tries,
            logger=logger
        )(self._get)

        try:
            return get(content_id)
        except requests.exceptions.RequestException as e:
            raise ContentUnavailableError(content_id, str(e)) from e
