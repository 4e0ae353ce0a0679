"""
Converter Module
One object tying together reading, detection, dispatch and serialization.
"""
from typing import Any, List, Optional, Union

from .builder import Reader
from .config import ConverterConfig, DelimiterConfig
from .detector import MessageTypeDetector
from .errors import EdifactError
from .generic import GenericConverter
from .handlers import HandleFunc, HandlerRegistration, HandlerRegistry, MessageHandler, Predicate
from .logger import configure_logging, get_logger
from .models import Message, MessageTypeInfo
from .serializer import to_json


class Converter:
    """
    Parses EDIFACT text and converts it with registered handlers.

    Register handlers during setup; afterwards the converter is safe to use
    from several threads.

    When a registry is passed in it is used as-is: its own fallback decides
    the generic output, and config.output_shape and config.header_tag only
    affect parsing. Log output goes to files when config.log_dir is set.
    """

    def __init__(self, config: Optional[ConverterConfig] = None, registry: Optional[HandlerRegistry] = None):
        self.config = config or ConverterConfig()
        configure_logging(self.config)
        self.reader = Reader(self.config)
        self.registry = registry or HandlerRegistry(
            fallback=GenericConverter(self.config.output_shape, self.config.header_tag)
        )
        self.logger = get_logger()

    def register_handler(
        self,
        predicate_or_type: Union[str, Predicate],
        handler: Union[MessageHandler, HandleFunc],
    ) -> HandlerRegistration:
        return self.registry.register(predicate_or_type, handler)

    def supported_message_types(self) -> List[str]:
        return self.registry.supported_message_types()

    def parse(self, raw: str) -> Message:
        return self.reader.read_string(raw)

    def dispatch(self, message: Message) -> Any:
        return self.registry.dispatch(message)

    def convert_to_structured(self, raw: str) -> Any:
        """Parse raw text and return the selected handler's result."""
        return self.dispatch(self.parse(raw))

    def convert_to_json(self, raw: str) -> str:
        """Parse raw text, dispatch, and render the result as JSON."""
        return to_json(self.convert_to_structured(raw), indent=self.config.json_indent)


def parse(raw: str, delimiters: Optional[DelimiterConfig] = None) -> Message:
    """Parse raw EDIFACT text with default settings (or the given delimiters)."""
    config = ConverterConfig(delimiters=delimiters) if delimiters else ConverterConfig()
    return Reader(config).read_string(raw)


def get_message_info(raw: str) -> MessageTypeInfo:
    """Parse raw text and return its header information (raises DetectionError)."""
    return MessageTypeDetector().detect(parse(raw))


def get_element_value(raw: str, tag: str, position: int) -> str:
    """
    Value of an element in the first segment with the given tag.

    Args:
        raw: Raw EDIFACT text
        tag: Segment tag, e.g. "BGM"
        position: 1-based element position

    Returns:
        Element text (composites joined with the message's component
        separator), or empty string when the segment or element is missing
    """
    message = parse(raw)
    segment = message.get_segment_by_tag(tag)
    return segment.get_element_value(position, message.delimiters.component_separator) if segment else ""


def is_valid(raw: str) -> bool:
    """True when raw text tokenizes, builds and has a detectable header."""
    try:
        get_message_info(raw)
    except EdifactError as e:
        get_logger().debug(f"Invalid EDIFACT message: {e}")
        return False
    return True
