"""RPC module for reading authoritative contract state.

Reads go through a JSON-RPC endpoint that executes view functions and returns
ABI-decoded results as JSON. Calls are synchronous and always observe the
state as of the event currently being processed.
"""
import logging
import requests
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from models import normalize_address
from models.events import Address
from .snapshots import (
    Snapshot,
    ReactionUsageData,
    AppraisalData,
    NFTData,
    ConductorStats,
    ConductorData,
    ReviewData,
    ReviewerStats,
    ReviewerData,
    DesignerData,
    ReactionPackData,
    PurchaseData,
    ReactionData,
)

logger = logging.getLogger(__name__)

class RPCError(Exception):
    """Base exception for RPC errors"""
    def __init__(self, message: str, code: Optional[int] = None, method: Optional[str] = None):
        self.code = code
        self.method = method
        super().__init__(f"RPC Error [{code}] in {method}: {message}" if code else message)

class NodeConnectionError(RPCError):
    """Raised when connection to the endpoint fails"""
    pass

class NodeAuthError(RPCError):
    """Raised when authentication failed"""
    pass

class ContractCallError(RPCError):
    """Raised when a contract read reverts or returns a malformed result

    Common error codes:
    -32000 - Execution reverted
    -32601 - Method not found
    -32602 - Invalid params
    -32603 - Internal error
    """
    ERROR_MESSAGES = {
        -32000: "Execution reverted",
        -32601: "Method not found",
        -32602: "Invalid params",
        -32603: "Internal error",
    }

    def __init__(self, message: str, code: int, method: str):
        standard_msg = self.ERROR_MESSAGES.get(code, "Unknown error")
        full_msg = f"{standard_msg} - {message}" if message != standard_msg else message
        super().__init__(full_msg, code, method)

class ContractRPC:
    """JSON-RPC client for decoded contract reads"""

    def __init__(self, url: str, timeout: float = 10, auth: Optional[tuple] = None):
        """Initialize RPC client.

        Args:
            url: Endpoint URL
            timeout: Request timeout in seconds
            auth: Optional (user, password) for basic auth
        """
        self.url = url
        self.timeout = timeout

        self.session = requests.Session()
        if auth:
            self.session.auth = auth
        self.session.headers['content-type'] = 'application/json'

        # Request ID counter
        self._request_id = 0

    def _get_request_id(self) -> int:
        """Get unique request ID"""
        self._request_id += 1
        return self._request_id

    def _call_method(self, method: str, *args) -> Any:
        """Make RPC call to the endpoint

        Args:
            method: RPC method name
            *args: Method arguments

        Returns:
            Response result

        Raises:
            NodeConnectionError: Connection to endpoint failed
            NodeAuthError: Authentication failed
            ContractCallError: Endpoint returned an error
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": list(args),
            "id": self._get_request_id()
        }

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)

            if response.status_code == 401:
                raise NodeAuthError("Authentication failed - check rpc credentials")

            # Try to parse response even if status code is error
            result = response.json()

            if 'error' in result and result['error'] is not None:
                error = result['error']
                raise ContractCallError(
                    error.get('message', 'Unknown error'),
                    error.get('code', -32603),
                    method
                )

            response.raise_for_status()

            return result['result']

        except requests.exceptions.Timeout as e:
            raise NodeConnectionError(
                f"Request timed out after {self.timeout} seconds"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise NodeConnectionError(
                f"Failed to connect to contract state endpoint at {self.url}"
            ) from e
        except requests.exceptions.HTTPError as e:
            raise NodeConnectionError(
                f"HTTP error occurred: {str(e)}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise NodeConnectionError(
                f"Request failed: {str(e)}"
            ) from e
        except (KeyError, ValueError) as e:
            raise NodeConnectionError(
                f"Invalid response format: {str(e)}"
            ) from e

    def call_contract(self, address: str, function: str, args: List[Any]) -> Any:
        """Execute a view function and return its decoded result."""
        logger.debug(f"contract_read {address}.{function}{tuple(args)}")
        return self._call_method('contract_read', address, function, args)

class ContractFunction:
    """Descriptor class for contract view functions"""
    def __init__(self, function_name: str, result_type: Any = None):
        self.function_name = function_name
        self._adapter = TypeAdapter(result_type) if result_type is not None else None

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self

        def caller(*args) -> Any:
            result = obj.rpc.call_contract(obj.address, self.function_name, list(args))
            if self._adapter is None:
                return result
            try:
                return self._adapter.validate_python(result)
            except ValidationError as e:
                raise ContractCallError(
                    f"Malformed result from {self.function_name}: {e}",
                    -32603,
                    self.function_name
                ) from e

        return caller

class Contract:
    """A contract bound to an address on a ContractRPC client"""

    def __init__(self, rpc: ContractRPC, address: str):
        self.rpc = rpc
        self.address = normalize_address(address)

    @classmethod
    def bind(cls, rpc: ContractRPC, address: str) -> 'Contract':
        return cls(rpc, address)

class IonicAppraisals(Contract):
    get_appraisal = ContractFunction('getAppraisal', AppraisalData)
    get_nft = ContractFunction('getNFT', NFTData)

class IonicConductors(Contract):
    get_conductor = ContractFunction('getConductor', ConductorData)
    get_conductor_by_wallet = ContractFunction('getConductorByWallet', ConductorData)
    get_review = ContractFunction('getReview', ReviewData)
    get_reviewer = ContractFunction('getReviewer', ReviewerData)

class IonicDesigners(Contract):
    get_designer = ContractFunction('getDesigner', DesignerData)
    get_designer_by_wallet = ContractFunction('getDesignerByWallet', DesignerData)
    conductors = ContractFunction('conductors', Address)

class IonicReactionPacks(Contract):
    get_reaction_pack = ContractFunction('getReactionPack', ReactionPackData)
    get_purchase = ContractFunction('getPurchase', PurchaseData)
    get_pack_purchases = ContractFunction('getPackPurchases', List[int])
    get_reaction = ContractFunction('getReaction', ReactionData)
    default_price_increment = ContractFunction('defaultPriceIncrement', int)
    designers = ContractFunction('designers', Address)

def create_client(settings: Dict[str, Any]) -> ContractRPC:
    """Build the RPC client from validated settings."""
    auth = None
    if settings.get('rpc_user'):
        auth = (settings['rpc_user'], settings.get('rpc_password', ''))
    return ContractRPC(settings['rpc_url'], timeout=settings.get('rpc_timeout', 10), auth=auth)

# Export public interface
__all__ = [
    'RPCError',
    'NodeConnectionError',
    'NodeAuthError',
    'ContractCallError',
    'ContractRPC',
    'ContractFunction',
    'Contract',
    'IonicAppraisals',
    'IonicConductors',
    'IonicDesigners',
    'IonicReactionPacks',
    'create_client',
    'Snapshot',
    'ReactionUsageData',
    'AppraisalData',
    'NFTData',
    'ConductorStats',
    'ConductorData',
    'ReviewData',
    'ReviewerStats',
    'ReviewerData',
    'DesignerData',
    'ReactionPackData',
    'PurchaseData',
    'ReactionData',
]
