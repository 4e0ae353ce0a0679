"""
Message Builder Module

Assembles tokenizer output into the Message tree, and provides the Reader
entry point that runs tokenize -> build -> type detection in one call.
"""
import re
from typing import List, Optional

from .config import ConverterConfig, DelimiterConfig
from .detector import MessageTypeDetector
from .errors import BuildError, DetectionError
from .logger import get_logger
from .models import Element, Message, Segment
from .tokenizer import has_unescaped, split_components, split_elements, split_una, tokenize, unescape

TAG_PATTERN = re.compile(r"^[A-Za-z0-9]{2,3}$")


class MessageBuilder:
    """Builds Segment and Message models from raw tokenizer output."""

    def __init__(self, delimiters: DelimiterConfig):
        if delimiters is None:
            raise TypeError("MessageBuilder requires a DelimiterConfig")
        self.delimiters = delimiters

    def build_element(self, raw: str, position: int) -> Element:
        cfg = self.delimiters
        if has_unescaped(raw, cfg.component_separator, cfg):
            return Element(position=position, components=split_components(raw, cfg), is_composite=True)
        return Element(position=position, value=unescape(raw, cfg))

    def build_segment(self, raw: str, position: int = 0) -> Segment:
        """
        Build one Segment from its raw text (without terminator).

        Unknown tags are kept as-is; only malformed tags are rejected.
        """
        tag, raw_elements = split_elements(raw, self.delimiters)
        if not TAG_PATTERN.match(tag):
            if not tag:
                raise BuildError(f"segment {position} has no tag")
            raise BuildError(f"invalid segment tag {tag!r} at segment {position}")

        elements = [self.build_element(value, i) for i, value in enumerate(raw_elements, 1)]
        return Segment(tag=tag, elements=elements, position=position)

    def build(self, raw_segments: List[str], raw: str = "", message_type: str = "") -> Message:
        """
        Build a Message from raw segment strings.

        Args:
            raw_segments: Output of tokenize()
            raw: Original text, kept for diagnostics
            message_type: Detected type, if already known

        Returns:
            Message with segments in input order
        """
        segments = [self.build_segment(s, i) for i, s in enumerate(raw_segments, 1)]
        return Message(
            message_type=message_type,
            segments=segments,
            raw=raw,
            delimiters=self.delimiters,
        )


class Reader:
    """
    Reads EDIFACT text into Message trees.

    A Reader holds only immutable configuration, so one instance can be
    shared across threads.
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()
        self.detector = MessageTypeDetector(self.config.header_tag)
        self.logger = get_logger()

    def read_string(self, raw: str) -> Message:
        """
        Parse raw EDIFACT text.

        Detection failures do not fail the parse: the returned Message has an
        empty message_type and can still be inspected or converted generically.
        """
        delimiters = self.config.delimiters
        text = raw
        if self.config.honor_una and raw:
            una, text = split_una(raw)
            if una is not None:
                self.logger.debug(f"Using delimiters from UNA: {una.to_una()}")
                delimiters = una

        builder = MessageBuilder(delimiters)
        message = builder.build(tokenize(text, delimiters), raw=raw)

        try:
            info = self.detector.detect(message)
        except DetectionError as e:
            self.logger.debug(f"Message type not detected: {e}")
            return message

        return message.model_copy(update={"message_type": info.message_type})

    def read_segment(self, raw: str) -> Segment:
        """Parse a single segment; the trailing terminator is optional."""
        cfg = self.config.delimiters
        segments = tokenize(raw, cfg)
        if len(segments) != 1:
            raise BuildError(f"expected one segment, found {len(segments)}")
        return MessageBuilder(cfg).build_segment(segments[0], 1)
