"""
Change stream.

The data store publishes one ChangeEvent per committed write. Consumers
subscribe through the ChangeStream protocol and never see the transport, so
the in-process and NATS implementations are interchangeable.
"""
import json
import logging
from dataclasses import asdict, dataclass
from typing import Awaitable, Callable, List, Protocol

logger = logging.getLogger("response-core.change-stream")

ChangeHandler = Callable[["ChangeEvent"], Awaitable[None]]
Unsubscribe = Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class ChangeEvent:
    table: str       # incident_reports, incident_response_routes, notifications, zones
    operation: str   # insert, update
    record_id: str

    def to_json(self) -> bytes:
        return json.dumps(asdict(self)).encode()

    @classmethod
    def from_json(cls, data: bytes) -> "ChangeEvent":
        payload = json.loads(data.decode())
        return cls(table=payload["table"], operation=payload["operation"], record_id=payload["record_id"])


class ChangeStream(Protocol):
    async def publish(self, event: ChangeEvent) -> None:
        ...

    async def subscribe(self, handler: ChangeHandler) -> Unsubscribe:
        ...


async def _deliver(handler: ChangeHandler, event: ChangeEvent):
    try:
        await handler(event)
    except Exception as e:
        logger.error(f"Change handler failed for {event.table}/{event.record_id}: {e}", exc_info=True)


class LocalChangeStream:
    """In-process fan-out to async handlers."""

    def __init__(self):
        self._handlers: List[ChangeHandler] = []

    async def publish(self, event: ChangeEvent) -> None:
        for handler in list(self._handlers):
            await _deliver(handler, event)

    async def subscribe(self, handler: ChangeHandler) -> Unsubscribe:
        self._handlers.append(handler)

        async def unsubscribe():
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)


class NatsChangeStream:
    """Change stream over NATS subjects ``<prefix>.<table>``."""

    def __init__(self, client, prefix: str = "response.changes"):
        self._client = client
        self._prefix = prefix

    async def publish(self, event: ChangeEvent) -> None:
        if not self._client.is_connected:
            logger.warning(f"NATS not connected, dropping change event for {event.table}/{event.record_id}")
            return
        await self._client.nc.publish(f"{self._prefix}.{event.table}", event.to_json())

    async def subscribe(self, handler: ChangeHandler) -> Unsubscribe:
        async def on_message(msg):
            try:
                event = ChangeEvent.from_json(msg.data)
            except (ValueError, KeyError) as e:
                logger.warning(f"Malformed change event on {msg.subject}: {e}")
                return
            await _deliver(handler, event)

        subscription = await self._client.nc.subscribe(f"{self._prefix}.>", cb=on_message)
        logger.info(f"Subscribed to {self._prefix}.>")

        async def unsubscribe():
            await subscription.unsubscribe()

        return unsubscribe
