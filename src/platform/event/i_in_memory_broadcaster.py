"""
In-memory Event Broadcaster Interface

Pub/sub for attendee updates within one process, one topic per event id.
"""

from typing import Protocol

from anyio.streams.memory import MemoryObjectReceiveStream


class IInMemoryEventBroadcaster(Protocol):
    async def subscribe(self, *, event_id: int) -> MemoryObjectReceiveStream[dict]:
        """
        Subscribe to attendee updates of one event

        Returns:
            MemoryObjectReceiveStream that receives message dictionaries
        """
        ...

    async def broadcast(self, *, event_id: int, message: dict) -> None:
        """
        Best-effort fan-out to current subscribers

        Note:
            - Silently ignores if no subscribers exist
            - Drops the message for a subscriber whose stream is full
        """
        ...

    async def unsubscribe(self, *, event_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        """Close the stream and forget it; safe to call twice"""
        ...
