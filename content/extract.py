"""Field extraction for partially trusted JSON documents.

Each helper looks at one decoded JSON value and either accepts it or returns
a neutral value; a bad field never fails the whole document.
"""
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"-?[0-9]+")

def extract_string(value: Any, field: str) -> Optional[str]:
    """Return ``value`` if it is a string without embedded base64 data."""
    if not isinstance(value, str):
        return None
    if 'base64' in value:
        logger.warning(f"Skipping base64 encoded field: {field}")
        return None
    return value

def extract_number(value: Any) -> int:
    """Return ``value`` as an int, or 0 when it is not numeric.

    Accepts JSON integers, integral floats and plain decimal strings
    (an optional minus sign followed by ASCII digits).
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str):
        value = value.strip()
        return int(value) if INTEGER_PATTERN.fullmatch(value) else 0
    return 0
