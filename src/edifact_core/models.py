"""
Canonical data model for a parsed EDIFACT message.

Message owns Segments, Segments own Elements, Elements own components
(plain strings). All models are frozen once built, and their child
collections are tuples so the tree cannot be changed in place.
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import DelimiterConfig
from .tokenizer import escape


class Element(BaseModel):
    """A data element: simple (value) or composite (components). Position is 1-based."""
    model_config = ConfigDict(frozen=True)

    position: int
    value: str = ""
    components: Tuple[str, ...] = ()
    is_composite: bool = False

    def get_component(self, position: int) -> str:
        """Component at a 1-based position; a simple element is its own first component."""
        if not self.is_composite:
            return self.value if position == 1 else ""
        if 1 <= position <= len(self.components):
            return self.components[position - 1]
        return ""

    @property
    def component_count(self) -> int:
        return len(self.components) if self.is_composite else 1

    def text(self, component_separator: str = ":") -> str:
        """Element value with components joined, no escaping."""
        if self.is_composite:
            return component_separator.join(self.components)
        return self.value

    def to_edifact(self, delimiters: DelimiterConfig) -> str:
        if self.is_composite:
            return delimiters.component_separator.join(escape(c, delimiters) for c in self.components)
        return escape(self.value, delimiters)

    def __str__(self) -> str:
        return self.text()


class Segment(BaseModel):
    """A tagged group of elements."""
    model_config = ConfigDict(frozen=True)

    tag: str
    elements: Tuple[Element, ...] = ()
    position: int = 0

    def get_element(self, position: int) -> Optional[Element]:
        """Element at a 1-based position, or None."""
        if 1 <= position <= len(self.elements):
            return self.elements[position - 1]
        return None

    def get_element_value(self, position: int, component_separator: str = ":") -> str:
        """
        Text of the element at a 1-based position; empty string if absent.

        A Segment does not know its message's delimiters, so composites are
        joined with ":" unless the caller passes message.delimiters.component_separator.
        """
        element = self.get_element(position)
        return element.text(component_separator) if element else ""

    @property
    def element_count(self) -> int:
        return len(self.elements)

    def to_edifact(self, delimiters: DelimiterConfig) -> str:
        parts = [self.tag] + [e.to_edifact(delimiters) for e in self.elements]
        return delimiters.element_separator.join(parts) + delimiters.segment_terminator


class Message(BaseModel):
    """
    A parsed EDIFACT message.

    message_type is empty when the header could not be detected; the tree
    is still usable in that case.
    """
    model_config = ConfigDict(frozen=True)

    message_type: str = ""
    segments: Tuple[Segment, ...] = ()
    raw: str = Field(default="", repr=False)
    delimiters: DelimiterConfig = Field(default_factory=DelimiterConfig)

    def get_segment_by_tag(self, tag: str) -> Optional[Segment]:
        return next((s for s in self.segments if s.tag == tag), None)

    def get_segments_by_tag(self, tag: str) -> List[Segment]:
        return [s for s in self.segments if s.tag == tag]

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    def tags(self) -> List[str]:
        return [s.tag for s in self.segments]

    def to_edifact(self, delimiters: Optional[DelimiterConfig] = None) -> str:
        """
        Re-serialize the tree.

        Args:
            delimiters: Delimiters to write with (defaults to the ones parsed with)

        Returns:
            EDIFACT text, one terminator per segment, no line breaks
        """
        cfg = delimiters or self.delimiters
        return "".join(s.to_edifact(cfg) for s in self.segments)


class MessageTypeInfo(BaseModel):
    """Message identifier read from the UNH header."""
    model_config = ConfigDict(frozen=True)

    message_type: str
    release: str = ""
    version: str = ""
    controlling_agency: str = ""
    association_code: str = ""
    reference: str = ""

    def __str__(self) -> str:
        text = self.message_type
        if self.release or self.version:
            text += f" {self.release}:{self.version}"
        if self.controlling_agency:
            text += f" ({self.controlling_agency})"
        return text


class InterchangeInfo(BaseModel):
    """Informational view of a UNB interchange header."""
    model_config = ConfigDict(frozen=True)

    syntax_identifier: str = ""
    syntax_version: str = ""
    sender: str = ""
    recipient: str = ""
    preparation_date: str = ""
    preparation_time: str = ""
    control_reference: str = ""
