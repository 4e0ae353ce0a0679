"""
Handler Registry Module

Routes a parsed Message to the first registered handler whose predicate
accepts the detected message type, falling back to the GenericConverter.

Registration is serialized with a lock and publishes a new immutable tuple,
so dispatch can read the current tuple without locking.
"""
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from .errors import RegistrationError
from .generic import GenericConverter
from .logger import get_logger
from .models import Message

Predicate = Callable[[str], bool]
HandleFunc = Callable[[Message], Any]


class MessageHandler(ABC):
    """Capability interface for business adapters."""

    @abstractmethod
    def can_handle(self, message_type: str) -> bool:
        """Return True if this handler converts messages of message_type."""

    @abstractmethod
    def handle(self, message: Message) -> Any:
        """
        Convert the message into a business result.

        Raise HandlerError (or any exception) to reject the message; the
        error reaches the dispatch caller unchanged.
        """


@dataclass(frozen=True)
class HandlerRegistration:
    can_handle: Predicate
    handle: HandleFunc
    name: str
    message_type: Optional[str] = None


def _handler_name(handler: Any) -> str:
    if isinstance(handler, MessageHandler) or not hasattr(handler, "__name__"):
        return type(handler).__name__
    return handler.__name__


class HandlerRegistry:
    """Ordered, read-mostly collection of handler registrations."""

    def __init__(self, fallback: Optional[GenericConverter] = None):
        self.fallback = fallback or GenericConverter()
        self.logger = get_logger()
        self._lock = threading.Lock()
        self._registrations: Tuple[HandlerRegistration, ...] = ()
        self._frozen = False

    def register(
        self,
        predicate_or_type: Union[str, Predicate],
        handler: Union[MessageHandler, HandleFunc],
    ) -> HandlerRegistration:
        """
        Register a handler for a message type or a type predicate.

        Args:
            predicate_or_type: Exact message type (e.g. "ORDERS") or callable(type) -> bool
            handler: MessageHandler instance or callable(Message) -> result

        Returns:
            The stored registration
        """
        if isinstance(predicate_or_type, str):
            message_type = predicate_or_type

            def predicate(candidate: str) -> bool:
                return candidate == message_type
        elif callable(predicate_or_type):
            message_type = None
            predicate = predicate_or_type
        else:
            raise RegistrationError(f"expected a message type or predicate, got {predicate_or_type!r}")

        if isinstance(handler, MessageHandler):
            handle = handler.handle
        elif callable(handler):
            handle = handler
        else:
            raise RegistrationError(f"handler must be a MessageHandler or callable, got {handler!r}")

        registration = HandlerRegistration(
            can_handle=predicate,
            handle=handle,
            name=_handler_name(handler),
            message_type=message_type,
        )
        self._add(registration)
        return registration

    def register_handler(self, handler: MessageHandler) -> HandlerRegistration:
        """Register a MessageHandler using its own can_handle()."""
        if not isinstance(handler, MessageHandler):
            raise RegistrationError(f"register_handler() needs a MessageHandler, got {handler!r}")
        return self.register(handler.can_handle, handler)

    def _add(self, registration: HandlerRegistration) -> None:
        with self._lock:
            if self._frozen:
                raise RegistrationError("registry is frozen")
            self._registrations = self._registrations + (registration,)
        self.logger.debug(
            f"Registered handler {registration.name} "
            f"({registration.message_type or 'predicate'}), total {len(self._registrations)}"
        )

    def freeze(self) -> None:
        """Forbid further registration."""
        with self._lock:
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def registrations(self) -> Tuple[HandlerRegistration, ...]:
        return self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def supported_message_types(self) -> List[str]:
        """Message types registered by name, in registration order, without duplicates."""
        types: List[str] = []
        for registration in self._registrations:
            if registration.message_type and registration.message_type not in types:
                types.append(registration.message_type)
        return types

    def find(self, message_type: str) -> Optional[HandlerRegistration]:
        """First registration accepting message_type, or None."""
        if not message_type:
            return None
        for registration in self._registrations:
            if registration.can_handle(message_type):
                return registration
        return None

    def dispatch(self, message: Message) -> Any:
        """
        Convert a message with the first matching handler.

        Messages with no detected type, or with no matching handler, go to the
        generic fallback, which always succeeds. Errors from the selected
        handler propagate unchanged and are never retried elsewhere.
        """
        registration = self.find(message.message_type)
        if registration is None:
            self.logger.info(
                f"No specific handler for {message.message_type or 'undetected type'}, using generic fallback"
            )
            return self.fallback.convert(message)

        self.logger.info(f"Routing {message.message_type} message to {registration.name}")
        try:
            return registration.handle(message)
        except Exception as e:
            self.logger.warning(f"Handler {registration.name} rejected {message.message_type}: {e}")
            raise
