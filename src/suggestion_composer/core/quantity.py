"""Resource quantity validation.

Quantities are validated with the Kubernetes client's parser but kept as the
original strings, so composed manifests carry exactly what the config said.
"""

import re
from decimal import Decimal

from kubernetes.utils import parse_quantity

# sign, number, then an optional decimal exponent or binary/decimal SI suffix
QUANTITY_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+|[numkMGTPE]|[KMGTPE]i)?")


def to_quantity(value: object) -> Decimal:
    """Parse a Kubernetes resource quantity.

    Args:
        value: Quantity string (e.g. "500m", "4Gi") or a bare number.

    Returns:
        The quantity as a Decimal in base units.

    Raises:
        ValueError: If the value is not a valid, finite quantity.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"Invalid quantity type: {type(value).__name__}")
    if isinstance(value, str) and QUANTITY_PATTERN.fullmatch(value) is None:
        raise ValueError(f"Invalid quantity: {value!r}")
    parsed = parse_quantity(value)
    if not parsed.is_finite():
        raise ValueError(f"Invalid quantity: {value}")
    return parsed


def validate_quantity(value: object) -> str:
    """Validate a quantity and return it as a string.

    Bare JSON numbers are accepted and rendered as strings.

    Raises:
        ValueError: If the value is not a valid quantity.
    """
    to_quantity(value)
    return value if isinstance(value, str) else str(value)


def is_negative(value: str) -> bool:
    """Return True if a valid quantity string is below zero."""
    return to_quantity(value) < 0
