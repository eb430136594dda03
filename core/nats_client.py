"""
NATS JetStream Client for Python Microservices

Event bus for the order lifecycle. One JetStream stream (ORDERS) carries the five
order subjects; every subscriber binds a durable, queue-grouped consumer to a single
subject so that several instances of a service compete for the same messages.

Delivery is at-least-once: messages are acked only after the handler returns and
nak'ed for delayed redelivery when it raises. Each consumer caps delivery attempts
with max_deliver, after which the server stops redelivering the message.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

import nats
from nats.aio.client import Client as NATS
from nats.aio.msg import Msg
from nats.js import JetStreamContext
from nats.js.api import ConsumerConfig
from nats.js.errors import NotFoundError

if TYPE_CHECKING:
    from core.config_manager import ConfigManager


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that keeps Decimal amounts exact (serialised as strings)"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


logger = logging.getLogger(__name__)


class EventType(Enum):
    """Order lifecycle routing keys"""

    ORDER_CREATED = "order.created"
    ORDER_CONFIRMED = "order.confirmed"
    ORDER_PAID = "order.paid"
    ORDER_SHIPPED = "order.shipped"
    ORDER_DELIVERED = "order.delivered"


class ServiceSource(Enum):
    """Services that publish onto the bus"""

    ORDER_SERVICE = "order_service"
    PAYMENT_SERVICE = "payment_service"
    NOTIFICATION_SERVICE = "notification_service"


# Stream bound to exactly the order routing keys
ORDER_STREAM = "ORDERS"
ORDER_SUBJECTS: List[str] = [event_type.value for event_type in EventType]

# One durable queue per routing key
ORDER_QUEUES: Dict[EventType, str] = {
    EventType.ORDER_CREATED: "order-created-queue",
    EventType.ORDER_CONFIRMED: "order-confirmed-queue",
    EventType.ORDER_PAID: "order-paid-queue",
    EventType.ORDER_SHIPPED: "order-shipped-queue",
    EventType.ORDER_DELIVERED: "order-delivered-queue",
}

EventHandler = Callable[["Event"], Awaitable[None]]


class Event:
    """
    Event model.

    The message body on the wire is ``data`` only; id, type, source and timestamp
    travel as message headers.
    """

    def __init__(
        self,
        event_type: EventType,
        source: ServiceSource,
        data: Dict[str, Any],
        subject: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ):
        self.id = str(uuid.uuid4())
        self.type = event_type.value
        self.source = source.value
        self.data = data
        self.subject = subject or event_type.value
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.metadata = metadata or {}
        self.version = "1.0.0"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "source": self.source,
            "subject": self.subject,
            "timestamp": self.timestamp,
            "data": self.data,
            "metadata": self.metadata,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        event = cls.__new__(cls)
        event.id = data.get("id")
        event.type = data.get("type")
        event.source = data.get("source")
        event.subject = data.get("subject") or data.get("type")
        event.timestamp = data.get("timestamp")
        event.data = data.get("data", {})
        event.metadata = data.get("metadata", {})
        event.version = data.get("version", "1.0.0")
        return event

    def encode(self) -> bytes:
        """Wire body"""
        return json.dumps(self.data, cls=DecimalEncoder).encode()

    def headers(self) -> Dict[str, str]:
        return {
            "event-id": self.id,
            "event-type": self.type,
            "event-source": self.source,
            "event-timestamp": self.timestamp,
            "event-version": self.version,
        }

    @classmethod
    def from_message(
        cls, subject: str, body: bytes, headers: Optional[Dict[str, str]] = None
    ) -> "Event":
        """Rebuild an event from a delivered message. Raises ValueError on a non-JSON body."""
        headers = headers or {}
        data = json.loads(body.decode()) if body else {}
        if not isinstance(data, dict):
            raise ValueError(f"Event body must be a JSON object, got {type(data).__name__}")
        return cls.from_dict({
            "id": headers.get("event-id") or str(uuid.uuid4()),
            "type": headers.get("event-type") or subject,
            "source": headers.get("event-source"),
            "subject": subject,
            "timestamp": headers.get("event-timestamp") or data.get("timestamp"),
            "data": data,
            "version": headers.get("event-version", "1.0.0"),
        })


class NATSEventBus:
    """
    NATS JetStream event bus.

    Publishing waits only for the server's PubAck and never raises: a failure is
    logged and counted in ``publish_failures`` and reported as ``False``.
    """

    def __init__(
        self,
        service_name: str,
        config: Optional["ConfigManager"] = None,
        servers: Optional[str] = None,
        stream_name: Optional[str] = None,
        max_deliver: Optional[int] = None,
        redelivery_delay: Optional[float] = None,
    ):
        """
        Initialize NATS Event Bus.

        Args:
            service_name: Name of the service (used as the connection name)
            config: Optional ConfigManager used to resolve the server URL
            servers: Explicit server URL (overrides config)
            stream_name: JetStream stream holding the order subjects
            max_deliver: Delivery attempts per message before the consumer gives up
            redelivery_delay: Seconds before a nak'ed message is redelivered
        """
        from core.config_manager import ConfigManager

        self.service_name = service_name

        if config is None:
            config = ConfigManager(service_name)

        self.servers = servers or config.get_service_config().nats_url
        self.stream_name = stream_name or config.settings.infrastructure.order_stream or ORDER_STREAM
        infra = config.settings.infrastructure
        self.max_deliver = max_deliver if max_deliver is not None else infra.nats_max_deliver
        self.redelivery_delay = redelivery_delay if redelivery_delay is not None else infra.nats_redelivery_delay

        self._nc: Optional[NATS] = None
        self._js: Optional[JetStreamContext] = None
        self._subscriptions: Dict[str, JetStreamContext.PushSubscription] = {}
        self._is_connected = False
        self.publish_failures = 0

        logger.info(f"NATS EventBus initialized: {self.servers} stream={self.stream_name}")

    async def connect(self):
        """Connect to NATS and make sure the order stream exists"""
        try:
            self._nc = await nats.connect(servers=[self.servers], name=self.service_name)
            self._js = self._nc.jetstream()
            await self.ensure_stream()
            self._is_connected = True
            logger.info(f"Connected to NATS as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS at {self.servers}: {e}")
            raise

    async def ensure_stream(self):
        """Create the order stream, or rebind it to exactly the order subjects"""
        try:
            await self._js.stream_info(self.stream_name)
            await self._js.update_stream(name=self.stream_name, subjects=ORDER_SUBJECTS)
            logger.debug(f"Stream '{self.stream_name}' updated")
        except NotFoundError:
            await self._js.add_stream(name=self.stream_name, subjects=ORDER_SUBJECTS)
            logger.info(f"Stream '{self.stream_name}' created for {ORDER_SUBJECTS}")

    def _record_publish_failure(self, event: Event, reason: Any):
        self.publish_failures += 1
        logger.error(
            f"❌ Failed to publish event {event.type} [{event.id}]: {reason} "
            f"(publish failures: {self.publish_failures})"
        )

    async def publish_event(self, event: Event) -> bool:
        """
        Publish an event with its type as routing key.

        Returns:
            True once the stream acknowledged the message, False otherwise
        """
        if not self._is_connected or not self._js:
            self._record_publish_failure(event, "not connected to NATS")
            return False

        try:
            ack = await self._js.publish(
                event.subject,
                event.encode(),
                stream=self.stream_name,
                headers=event.headers(),
            )
            logger.info(f"Published event {event.type} [{event.id}] to stream {ack.stream}, seq={ack.seq}")
            return True
        except Exception as e:
            self._record_publish_failure(event, e)
            return False

    def _make_callback(self, pattern: str, handler: EventHandler):
        async def _callback(msg: Msg):
            try:
                event = Event.from_message(msg.subject, msg.data, msg.headers)
            except ValueError as e:
                logger.error(f"Dropping undecodable message on {msg.subject}: {e}")
                await msg.term()
                return

            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    f"Handler for {pattern} failed on event {event.id}, "
                    f"redelivery in {self.redelivery_delay}s: {e}"
                )
                await msg.nak(delay=self.redelivery_delay)
                return

            await msg.ack()

        return _callback

    async def subscribe_to_events(
        self, pattern: str, handler: EventHandler, durable: Optional[str] = None
    ) -> Optional[str]:
        """
        Subscribe to a routing key.

        Args:
            pattern: Subject to consume (e.g. "order.paid")
            handler: Async callback receiving the decoded Event
            durable: Durable queue name; instances sharing it compete for messages

        Returns:
            The consumer name, or None when not connected
        """
        if not self._is_connected or not self._js:
            logger.error("Not connected to NATS")
            return None

        sub = await self._js.subscribe(
            pattern,
            queue=durable,
            cb=self._make_callback(pattern, handler),
            manual_ack=True,
            stream=self.stream_name,
            config=ConsumerConfig(max_deliver=self.max_deliver),
        )
        name = durable or pattern
        self._subscriptions[name] = sub
        logger.info(f"Subscribed to {pattern} (JetStream consumer {name})")
        return name

    async def unsubscribe(self, name: str) -> bool:
        sub = self._subscriptions.pop(name, None)
        if sub is None:
            return False
        await sub.unsubscribe()
        logger.info(f"Unsubscribed from {name}")
        return True

    async def close(self):
        """Drain subscriptions and close the connection"""
        for name in list(self._subscriptions):
            try:
                await self.unsubscribe(name)
            except Exception as e:
                logger.warning(f"Error unsubscribing {name}: {e}")

        if self._nc:
            await self._nc.drain()
            self._nc = None
            self._js = None

        self._is_connected = False
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(
    service_name: str,
    config: Optional["ConfigManager"] = None,
) -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        config: Optional ConfigManager instance

    Returns:
        Connected NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None:
        event_bus = NATSEventBus(service_name=service_name, config=config)
        await event_bus.connect()
        _event_bus = event_bus

    return _event_bus


def create_event(
    event_type: EventType,
    source: ServiceSource,
    data: Dict[str, Any],
    subject: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
) -> Event:
    """Create an Event instance"""
    return Event(
        event_type=event_type,
        source=source,
        data=data,
        subject=subject,
        metadata=metadata,
    )
