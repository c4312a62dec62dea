"""
Message Bus

Routes commands and queries to their handlers.
Implements the Mediator pattern so views never construct handlers directly.
"""

from typing import Dict, Callable, Type, Any
import logging

from shared.domain.exceptions import DomainError

logger = logging.getLogger(__name__)


class MessageBus:
    """
    Message bus for commands and queries

    Every message type has exactly one handler (1:1). A bus is cheap to
    build, so each request gets its own with freshly wired repositories.
    """

    def __init__(self):
        self._handlers: Dict[Type, Callable[[Any], Any]] = {}

    def register(self, message_type: Type, handler: Callable[[Any], Any]):
        """
        Register a handler

        Only one handler can be registered per message type.
        """
        if message_type in self._handlers:
            raise ValueError(
                f"Handler for {message_type.__name__} is already registered. "
                "Messages can have only one handler."
            )
        self._handlers[message_type] = handler
        logger.debug(f"Registered handler for {message_type.__name__}")

    def handle(self, message: Any) -> Any:
        """
        Handle a command or query

        Returns the result from the handler.
        Raises ValueError if no handler is registered.
        """
        message_type = type(message)
        handler = self._handlers.get(message_type)

        if not handler:
            raise ValueError(
                f"No handler registered for {message_type.__name__}"
            )

        logger.debug(f"Handling {message_type.__name__}")
        try:
            result = handler(message)
            logger.debug(f"{message_type.__name__} handled successfully")
            return result
        except DomainError as e:
            logger.info(f"{message_type.__name__} rejected: {e}")
            raise
        except Exception as e:
            logger.error(f"Error handling {message_type.__name__}: {e}")
            raise
