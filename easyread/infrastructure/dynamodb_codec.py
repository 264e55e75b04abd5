"""Conversions between plain Python values and DynamoDB attribute values.

DynamoDB stores every number as ``Decimal`` and rejects ``float``.
"""

import json
from decimal import Decimal
from typing import Any


def to_dynamodb(value: Any) -> Any:
    """Convert JSON-compatible data so floats become ``Decimal``."""
    return json.loads(json.dumps(value), parse_float=Decimal)


def from_dynamodb(value: Any) -> Any:
    """Convert ``Decimal`` values back to ``int`` or ``float``."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_dynamodb(item) for key, item in value.items()}
    if isinstance(value, list):
        return [from_dynamodb(item) for item in value]
    return value
