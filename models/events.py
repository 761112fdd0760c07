"""Decoded chain events and their typed parameters."""
from typing import Annotated, Any, Dict, List, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .ids import event_id, normalize_address

P = TypeVar('P', bound='EventParams')

Address = Annotated[str, AfterValidator(normalize_address)]


class InvalidEventError(Exception):
    """Raised when an event's parameters do not match the expected shape."""
    pass


class ChainEvent(BaseModel):
    """One decoded log, as delivered by the event feed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contract_address: str
    event_name: str
    block_number: int
    block_timestamp: int
    transaction_hash: str
    log_index: int
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('contract_address', 'transaction_hash')
    @classmethod
    def _lowercase(cls, value: str) -> str:
        return normalize_address(value)

    @property
    def id(self) -> str:
        """Deterministic id of this log (transaction hash + log index)."""
        return event_id(self.transaction_hash, self.log_index)

    def parse(self, params_model: Type[P]) -> P:
        """Validate ``params`` against a typed parameter model.

        Raises:
            InvalidEventError: If the parameters are missing or malformed
        """
        try:
            return params_model.model_validate(self.params)
        except ValidationError as e:
            raise InvalidEventError(
                f"Invalid parameters for {self.event_name} in tx {self.transaction_hash}: {e}"
            ) from e


class EventParams(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# IonicAppraisals

class AppraisalCreatedParams(EventParams):
    appraiser: Address
    nft_id: int
    conductor_id: int
    appraisal_id: int
    overall_score: int


class NFTRemovedParams(EventParams):
    nft_id: int
    submitter: Address = ''


class NFTSubmittedParams(EventParams):
    nft_id: int
    token_id: int
    submitter: Address
    token_type: int = 0


# IonicConductors

class ConductorRegisteredParams(EventParams):
    conductor_id: int
    wallet: Address
    uri: str = ''


class ConductorDeletedParams(EventParams):
    conductor_id: int


class ConductorStatsUpdatedParams(EventParams):
    conductor_id: int


class ConductorUpdatedParams(EventParams):
    conductor_id: int
    uri: str = ''


class ReviewSubmittedParams(EventParams):
    reviewer: Address
    conductor_id: int
    review_id: int
    review_score: int


class ReviewerURIUpdatedParams(EventParams):
    reviewer: Address
    uri: str = ''


# IonicDesigners

class DesignerInvitedParams(EventParams):
    designer: Address
    designer_id: int
    inviter: Address


class DesignerDeactivatedParams(EventParams):
    designer_id: int


class DesignerURIParams(EventParams):
    designer_id: int
    uri: str = ''


# IonicReactionPacks

class ReactionPackCreatedParams(EventParams):
    designer: Address
    pack_id: int
    base_price: int
    max_editions: int
    conductor_reserved_spots: int


class ReactionAddedParams(EventParams):
    pack_id: int
    reaction_id: int
    reaction_uri: str = ''


class PackPurchasedParams(EventParams):
    buyer: Address
    pack_id: int
    price: int
    purchase_id: int
    edition_number: int


# IonicNFT

class ApprovalParams(EventParams):
    owner: Address
    approved: Address
    token_id: int


class ApprovalForAllParams(EventParams):
    owner: Address
    operator: Address
    approved: bool


class MintersAuthorizedParams(EventParams):
    minters: List[Address] = Field(default_factory=list)


class TokenMintedParams(EventParams):
    minter: Address
    token_id: int


class TokenURIUpdatedParams(EventParams):
    reason: str
    uri: str


class TransferParams(EventParams):
    from_: Address = Field(alias="from")
    to: Address
    token_id: int


# AccessControl

class AdminAddedParams(EventParams):
    admin: Address


class AdminRemovedParams(EventParams):
    admin: Address


class AdminRevokedParams(EventParams):
    pass


class MonaTokenUpdatedParams(EventParams):
    new_token: Address


class PodeTokenUpdatedParams(EventParams):
    new_token: Address


__all__: List[str] = [
    'InvalidEventError',
    'ChainEvent',
    'EventParams',
    'AppraisalCreatedParams',
    'NFTRemovedParams',
    'NFTSubmittedParams',
    'ConductorRegisteredParams',
    'ConductorDeletedParams',
    'ConductorStatsUpdatedParams',
    'ConductorUpdatedParams',
    'ReviewSubmittedParams',
    'ReviewerURIUpdatedParams',
    'DesignerInvitedParams',
    'DesignerDeactivatedParams',
    'DesignerURIParams',
    'ReactionPackCreatedParams',
    'ReactionAddedParams',
    'PackPurchasedParams',
    'ApprovalParams',
    'ApprovalForAllParams',
    'MintersAuthorizedParams',
    'TokenMintedParams',
    'TokenURIUpdatedParams',
    'TransferParams',
    'AdminAddedParams',
    'AdminRemovedParams',
    'AdminRevokedParams',
    'MonaTokenUpdatedParams',
    'PodeTokenUpdatedParams',
]
