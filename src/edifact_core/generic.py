"""
Generic Converter Module

Structure-agnostic fallback used when no business handler claims a message.

FLAT:   BGM+220+ORD123456'  ->  ["BGM", "220", "ORD123456"]
        Composite elements stay joined with the component separator
        (INVOIC:D:93A:UN is one entry, never four).
NESTED: {"BGM": [["220", "ORD123456"]], "DTM": [[["4", "20231201", "102"]]]}
"""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .config import OutputShape
from .logger import get_logger
from .models import Element, Message

ElementValue = Union[str, List[str]]


class FlatResult(BaseModel):
    """Every tag and element value of a message in one ordered list."""

    message_type: str = ""
    message_ref: str = ""
    elements: List[str] = Field(default_factory=list)

    def get_element(self, position: int) -> str:
        """Entry at a 1-based position; empty string when out of range."""
        if position <= 0 or position > len(self.elements):
            return ""
        return self.elements[position - 1]

    def get_element_range(self, start: int, end: int) -> Optional[List[str]]:
        """Entries start..end inclusive (1-based); None when the range is invalid."""
        if start <= 0 or end > len(self.elements) or start > end:
            return None
        return self.elements[start - 1:end]

    def __str__(self) -> str:
        lines = [
            f"Message Type: {self.message_type}",
            f"Message Ref: {self.message_ref}",
            "Elements:",
        ]
        lines.extend(f"{i}. {value}" for i, value in enumerate(self.elements, 1))
        return "\n".join(lines)


class NestedResult(BaseModel):
    """Element values grouped by segment tag, one list per occurrence."""

    message_type: str = ""
    message_ref: str = ""
    segments: Dict[str, List[List[ElementValue]]] = Field(default_factory=dict)

    def get_occurrences(self, tag: str) -> List[List[ElementValue]]:
        return self.segments.get(tag, [])


GenericResult = Union[FlatResult, NestedResult]


class GenericConverter:
    """Default handler: converts any message, never fails."""

    def __init__(self, shape: OutputShape = OutputShape.FLAT, header_tag: str = "UNH"):
        self.shape = OutputShape(shape)
        self.header_tag = header_tag
        self.logger = get_logger()

    def can_handle(self, message_type: str) -> bool:
        return True

    def handle(self, message: Message) -> GenericResult:
        return self.convert(message)

    def convert(self, message: Message) -> GenericResult:
        if self.shape == OutputShape.NESTED:
            return self.to_nested(message)
        return self.to_flat(message)

    def _message_ref(self, message: Message) -> str:
        header = message.get_segment_by_tag(self.header_tag)
        return header.get_element_value(1) if header else ""

    def to_flat(self, message: Message) -> FlatResult:
        separator = message.delimiters.component_separator
        values: List[str] = []
        for segment in message.segments:
            values.append(segment.tag)
            values.extend(element.text(separator) for element in segment.elements)

        self.logger.debug(f"Flat conversion of {message.message_type or 'unknown'}: {len(values)} entries")
        return FlatResult(
            message_type=message.message_type,
            message_ref=self._message_ref(message),
            elements=values,
        )

    def to_nested(self, message: Message) -> NestedResult:
        grouped: Dict[str, List[List[ElementValue]]] = {}
        for segment in message.segments:
            occurrence = [_element_value(element) for element in segment.elements]
            grouped.setdefault(segment.tag, []).append(occurrence)

        self.logger.debug(f"Nested conversion of {message.message_type or 'unknown'}: {len(grouped)} segment tags")
        return NestedResult(
            message_type=message.message_type,
            message_ref=self._message_ref(message),
            segments=grouped,
        )


def _element_value(element: Element) -> ElementValue:
    if element.is_composite:
        return list(element.components)
    return element.value
