"""EventService for recording and browsing usage events"""
from datetime import timedelta

import structlog

from ..errors import InvalidArgumentError
from ..metrics import Metrics
from ..models import Event
from ..store import InMemoryResourceStore, Page, ResourceStore

log = structlog.get_logger()

EVENTS_COLLECTION = "events"


class EventService:
    """
    Service for usage events

    Provides:
    - Event creation with required-field validation
    - Lookup and deletion by resource name
    - Newest-first cursor pagination
    """

    def __init__(self, store: ResourceStore[Event] | None = None, metrics: Metrics | None = None):
        """
        Initialize EventService

        Args:
            store: Backing store (creates an in-memory one if not provided)
            metrics: Optional Prometheus metrics to record into
        """
        self.store = store if store is not None else InMemoryResourceStore[Event](EVENTS_COLLECTION)
        self.metrics = metrics

    def create_event(
        self,
        subject: str,
        source: str,
        action: str,
        execution_duration: timedelta | None,
    ) -> Event:
        """
        Create a usage event

        Args:
            subject: Actor that triggered the action
            source: Component that emitted the event
            action: Performed action
            execution_duration: How long the action took (zero is allowed)

        Returns:
            The stored event with its name and create_time

        Raises:
            InvalidArgumentError: If a required field is missing
        """
        if not subject:
            raise InvalidArgumentError("subject is required")
        if not source:
            raise InvalidArgumentError("source is required")
        if not action:
            raise InvalidArgumentError("action is required")
        if execution_duration is None:
            raise InvalidArgumentError("execution_duration is required")

        event = self.store.insert(
            Event(subject=subject, source=source, action=action, execution_duration=execution_duration)
        )
        if self.metrics:
            self.metrics.record_created(EVENTS_COLLECTION, self.store.count())

        log.info("event.created", name=event.name, source=source, action=action)
        return event

    def get_event(self, name: str) -> Event:
        return self.store.get(name)

    def list_events(self, page_size: int = 0, page_token: str = "") -> Page[Event]:
        return self.store.list(page_size=page_size, page_token=page_token)

    def delete_event(self, name: str) -> None:
        self.store.delete(name)
        if self.metrics:
            self.metrics.record_deleted(EVENTS_COLLECTION, self.store.count())
