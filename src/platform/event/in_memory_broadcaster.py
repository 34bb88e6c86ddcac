"""
In-memory Attendee Update Broadcaster

Topic pub/sub keyed by event id. Booking/cancel use cases publish after commit;
WebSocket and SSE endpoints subscribe per connection.
"""

from typing import Dict, List

from anyio import BrokenResourceError, ClosedResourceError, WouldBlock, create_memory_object_stream
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics


class InMemoryEventBroadcasterImpl:
    """
    In-memory pub/sub for attendee updates

    Architecture:
    - Use Case -> broadcast() -> subscriber streams -> WebSocket / SSE endpoint
    - Each event_id has a list of (send_stream, receive_stream) tuples

    Memory Management:
    - Stream max buffer: buffer_size messages
    - Drop policy: drop the message for a subscriber whose buffer is full or closed
    - Cleanup: empty topics are removed on unsubscribe
    """

    def __init__(self, *, buffer_size: int = 10) -> None:
        self.buffer_size = buffer_size
        self._subscribers: Dict[
            int, List[tuple[MemoryObjectSendStream[dict], MemoryObjectReceiveStream[dict]]]
        ] = {}

    async def subscribe(self, *, event_id: int) -> MemoryObjectReceiveStream[dict]:
        send_stream, receive_stream = create_memory_object_stream[dict](
            max_buffer_size=self.buffer_size
        )
        self._subscribers.setdefault(event_id, []).append((send_stream, receive_stream))
        metrics.broadcast_subscribers.inc()

        Logger.base.debug(
            f'📡 [BROADCASTER] Subscribed to event {event_id} '
            f'(total subscribers: {len(self._subscribers[event_id])})'
        )
        return receive_stream

    async def broadcast(self, *, event_id: int, message: dict) -> None:
        """
        Deliver message to every subscriber of this event

        Never raises and never waits: a slow or gone subscriber loses the message.
        """
        subscribers = self._subscribers.get(event_id)
        if not subscribers:
            Logger.base.debug(f'📡 [BROADCASTER] No subscribers for event {event_id}')
            return

        delivered = 0
        dropped = 0
        for send_stream, _ in list(subscribers):
            try:
                send_stream.send_nowait(message)
                delivered += 1
            except WouldBlock:
                dropped += 1
                Logger.base.warning(
                    f'⚠️ [BROADCASTER] Stream full for event {event_id}, '
                    f'dropping message (type={message.get("type")})'
                )
            except (BrokenResourceError, ClosedResourceError):
                dropped += 1

        metrics.record_broadcast(delivered=delivered, dropped=dropped)
        Logger.base.info(
            f'📡 [BROADCASTER] Broadcast to event {event_id}: '
            f'delivered={delivered}, dropped={dropped}'
        )

    async def unsubscribe(self, *, event_id: int, stream: MemoryObjectReceiveStream[dict]) -> None:
        subscribers = self._subscribers.get(event_id)
        if not subscribers:
            return

        for i, (send_stream, receive_stream) in enumerate(subscribers):
            if receive_stream is stream:
                await send_stream.aclose()
                await receive_stream.aclose()
                subscribers.pop(i)
                metrics.broadcast_subscribers.dec()
                Logger.base.debug(
                    f'📡 [BROADCASTER] Unsubscribed from event {event_id} '
                    f'(remaining: {len(subscribers)})'
                )
                break

        if not subscribers:
            del self._subscribers[event_id]

    def subscriber_count(self, *, event_id: int) -> int:
        return len(self._subscribers.get(event_id, []))
