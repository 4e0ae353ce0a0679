"""
edifact_core - UN/EDIFACT parsing and handler dispatch.

    from edifact_core import Converter

    converter = Converter()
    converter.register_handler("IFTMBF", BookingHandler())
    booking = converter.convert_to_structured(text)
"""
from .builder import MessageBuilder, Reader
from .config import ConverterConfig, DelimiterConfig, OutputShape, load_config
from .converter import Converter, get_element_value, get_message_info, is_valid, parse
from .detector import MessageTypeDetector
from .errors import (
    BuildError,
    DetectionError,
    EdifactError,
    EdifactSyntaxError,
    HandlerError,
    RegistrationError,
)
from .generic import FlatResult, GenericConverter, NestedResult
from .handlers import HandlerRegistration, HandlerRegistry, MessageHandler
from .logger import configure_logging, get_logger, setup_logger
from .models import Element, InterchangeInfo, Message, MessageTypeInfo, Segment
from .parallel_executor import ParallelExecutor
from .serializer import to_json, to_jsonable
from .tokenizer import escape, tokenize, unescape

__version__ = "0.1.0"

__all__ = [
    "BuildError",
    "Converter",
    "ConverterConfig",
    "DelimiterConfig",
    "DetectionError",
    "EdifactError",
    "EdifactSyntaxError",
    "Element",
    "FlatResult",
    "GenericConverter",
    "HandlerError",
    "HandlerRegistration",
    "HandlerRegistry",
    "InterchangeInfo",
    "Message",
    "MessageBuilder",
    "MessageHandler",
    "MessageTypeDetector",
    "MessageTypeInfo",
    "NestedResult",
    "OutputShape",
    "ParallelExecutor",
    "Reader",
    "RegistrationError",
    "Segment",
    "configure_logging",
    "escape",
    "get_element_value",
    "get_logger",
    "get_message_info",
    "is_valid",
    "load_config",
    "parse",
    "setup_logger",
    "to_json",
    "to_jsonable",
    "tokenize",
    "unescape",
]
