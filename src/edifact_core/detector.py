"""
Message Type Detector Module

Reads the message identifier from the header segment (UNH by default):

    UNH+1+INVOIC:D:97A:UN'
          type:release:version:agency
"""
from typing import Optional

from .errors import DetectionError
from .models import InterchangeInfo, Message, MessageTypeInfo

DEFAULT_HEADER_TAG = "UNH"
INTERCHANGE_TAG = "UNB"


class MessageTypeDetector:
    """Pure, stateless detection of message type and interchange details."""

    def __init__(self, header_tag: str = DEFAULT_HEADER_TAG):
        self.header_tag = header_tag

    def detect(self, message: Message) -> MessageTypeInfo:
        """
        Detect the message type from the first header segment.

        Args:
            message: Parsed message

        Returns:
            MessageTypeInfo with type, release, version and controlling agency

        Raises:
            DetectionError: header missing, or its type descriptor malformed
        """
        header = message.get_segment_by_tag(self.header_tag)
        if header is None:
            raise DetectionError("no header segment")

        descriptor = header.get_element(2)
        if descriptor is None or not descriptor.is_composite or not descriptor.get_component(1):
            raise DetectionError("malformed type descriptor")

        return MessageTypeInfo(
            message_type=descriptor.get_component(1),
            release=descriptor.get_component(2),
            version=descriptor.get_component(3),
            controlling_agency=descriptor.get_component(4),
            association_code=descriptor.get_component(5),
            reference=header.get_element_value(1),
        )

    def detect_message_type(self, message: Message) -> str:
        """Return only the message type string."""
        return self.detect(message).message_type

    def detect_interchange(self, message: Message) -> Optional[InterchangeInfo]:
        """
        Extract UNB interchange header details, for information only.

        UNB+UNOA:2+SENDER+RECEIVER+231201:1430+12345'

        Returns:
            InterchangeInfo, or None when the message has no UNB segment
        """
        unb = message.get_segment_by_tag(INTERCHANGE_TAG)
        if unb is None:
            return None

        def component(position: int, index: int) -> str:
            element = unb.get_element(position)
            return element.get_component(index) if element else ""

        return InterchangeInfo(
            syntax_identifier=component(1, 1),
            syntax_version=component(1, 2),
            sender=component(2, 1),
            recipient=component(3, 1),
            preparation_date=component(4, 1),
            preparation_time=component(4, 2),
            control_reference=component(5, 1),
        )
