"""Deterministic entity identifiers.

Every id is a ``0x``-prefixed lowercase hex string of a byte string derived
only from chain data, so re-processing an event always lands on the same
record.
"""

def normalize_address(address: str) -> str:
    """Lowercase a hex address, adding the 0x prefix when missing."""
    address = address.strip().lower()
    if not address.startswith('0x'):
        address = '0x' + address
    return address

def int_to_bytes(value: int) -> bytes:
    """Minimal little-endian two's-complement encoding of ``value``."""
    if value >= 0:
        length = (value.bit_length() + 8) // 8
    else:
        length = ((-value - 1).bit_length() + 8) // 8
    return value.to_bytes(length, 'little', signed=True)

def id_from_int(value: int) -> str:
    """Entity id for a numeric on-chain id (conductor, nft, pack, ...)."""
    return '0x' + int_to_bytes(value).hex()

def event_id(transaction_hash: str, log_index: int) -> str:
    """Entity id for a single log: transaction hash followed by the log index as i32."""
    tx_bytes = bytes.fromhex(normalize_address(transaction_hash)[2:])
    return '0x' + (tx_bytes + log_index.to_bytes(4, 'little', signed=True)).hex()

def reaction_usage_id(count: int, reaction_id: int) -> str:
    """Entity id shared by every appraisal or review citing the same usage."""
    key = f"count-{hex(count)}-reaction-{hex(reaction_id)}"
    return '0x' + key.encode('utf-8').hex()

def response_metadata_id(content_id: str, index: int) -> str:
    return f"{content_id}-reaction-{index}"

REGISTRY_ID = 'main'
