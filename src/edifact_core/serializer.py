"""
Serializer Module
Renders handler results to JSON. Knows nothing about EDIFACT.
"""
import dataclasses
import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel


def to_jsonable(value: Any) -> Any:
    """Convert models, dataclasses and containers to plain JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_jsonable(v) for v in value]
    return value


def to_json(value: Any, indent: Optional[int] = 2) -> str:
    """
    Serialize a handler result to a JSON string.

    Args:
        value: Pydantic model, dataclass, mapping, sequence or scalar
        indent: Indentation, None for compact output

    Returns:
        JSON text
    """
    return json.dumps(to_jsonable(value), indent=indent, ensure_ascii=False)
