from typing import Any, Callable, Dict, List
from loguru import logger
import asyncio


class EventSystem:
    """Publish/subscribe hub the client stores use to announce state changes"""

    def __init__(self):
        self.handlers: Dict[str, List[Callable[[Any], Any]]] = {}

    async def emit(self, event_type: str, data: Any = None):
        """Emit an event to all registered handlers"""
        for handler in list(self.handlers.get(event_type, [])):
            try:
                if asyncio.iscoroutinefunction(handler):
                    await handler(data)
                else:
                    handler(data)
            except Exception as e:
                logger.error(f"Error in event handler for {event_type}: {str(e)}")
                logger.debug(f"Handler: {getattr(handler, '__name__', handler)}, Data: {data}")

    def on(self, event_type: str, handler: Callable[[Any], Any]):
        """Register an event handler"""
        if event_type not in self.handlers:
            self.handlers[event_type] = []
        if handler not in self.handlers[event_type]:
            self.handlers[event_type].append(handler)

    def off(self, event_type: str, handler: Callable[[Any], Any]):
        """Remove an event handler"""
        if event_type in self.handlers and handler in self.handlers[event_type]:
            self.handlers[event_type].remove(handler)
