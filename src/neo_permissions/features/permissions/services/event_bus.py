"""In-process event bus for permission change notifications.

Handlers are looked up in a dispatch table keyed by event type and awaited
in subscription order. ``publish`` returns only after every handler ran, and
the first handler exception propagates to the publisher.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[None]]


class PermissionEventBus:
    """Type-indexed dispatch table of async event handlers."""
    
    def __init__(self):
        self._handlers: Dict[Type, List[EventHandler]] = {}
    
    def subscribe(self, event_type: Type, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)
    
    def unsubscribe(self, event_type: Type, handler: EventHandler) -> bool:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False
    
    def handlers_for(self, event_type: Type) -> List[EventHandler]:
        return list(self._handlers.get(event_type, []))
    
    async def publish(self, event: Any) -> int:
        """Dispatch ``event`` to its handlers and return how many ran."""
        handlers = self.handlers_for(type(event))
        if not handlers:
            logger.debug(f"No handlers registered for {type(event).__name__}")
            return 0
        
        for handler in handlers:
            await handler(event)
        
        return len(handlers)
