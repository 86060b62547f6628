"""Tests for EventService."""
from datetime import timedelta

import pytest
from prometheus_client import CollectorRegistry

from app.errors import InvalidArgumentError, NotFoundError
from app.metrics import Metrics
from app.services import EventService


def create_sample(service: EventService, **overrides):
    fields = dict(
        subject="users/anonymous",
        source="animal-classifier",
        action="classify",
        execution_duration=timedelta(milliseconds=1500),
    )
    fields.update(overrides)
    return service.create_event(**fields)


class TestCreateEvent:
    """Test event creation"""

    def test_create_and_list(self, event_service):
        """Test a new event is the only entry of the listing"""
        event = create_sample(event_service)

        assert event.name.startswith("events/")
        assert event.create_time is not None
        assert event.execution_duration == timedelta(milliseconds=1500)

        page = event_service.list_events(page_size=10)
        assert page.items == [event]
        assert page.next_page_token == ""

    def test_zero_duration_allowed(self, event_service):
        """Test a zero execution duration is present, not missing"""
        event = create_sample(event_service, execution_duration=timedelta(0))
        assert event.execution_duration == timedelta(0)

    @pytest.mark.parametrize(
        "field,value,message",
        [
            ("subject", "", "subject is required"),
            ("source", "", "source is required"),
            ("action", "", "action is required"),
            ("execution_duration", None, "execution_duration is required"),
        ],
    )
    def test_required_fields(self, event_service, field, value, message):
        """Test missing fields are rejected and nothing is stored"""
        with pytest.raises(InvalidArgumentError, match=message):
            create_sample(event_service, **{field: value})
        assert event_service.store.count() == 0


class TestGetDeleteEvent:
    """Test lookup and deletion"""

    def test_get(self, event_service):
        """Test get returns the created event"""
        event = create_sample(event_service)
        assert event_service.get_event(event.name) == event

    def test_get_missing(self, event_service):
        """Test get of an unknown event"""
        with pytest.raises(NotFoundError):
            event_service.get_event("events/does-not-exist")

    def test_delete(self, event_service):
        """Test delete removes the event"""
        event = create_sample(event_service)
        event_service.delete_event(event.name)

        with pytest.raises(NotFoundError):
            event_service.get_event(event.name)


class TestListEvents:
    """Test pagination through the service"""

    def test_25_events(self, event_service):
        """Test 25 events page as 20 + 5"""
        for _ in range(25):
            create_sample(event_service)

        first = event_service.list_events(page_size=20)
        assert len(first.items) == 20
        assert first.next_page_token != ""

        second = event_service.list_events(page_size=20, page_token=first.next_page_token)
        assert len(second.items) == 5
        assert second.next_page_token == ""


def test_metrics_recorded():
    """Test creations and deletions are counted"""
    metrics = Metrics(registry=CollectorRegistry())
    service = EventService(metrics=metrics)

    event = create_sample(service)
    create_sample(service)
    service.delete_event(event.name)

    registry = metrics.registry
    assert registry.get_sample_value("apidemo_resources_created_total", {"collection": "events"}) == 2
    assert registry.get_sample_value("apidemo_resources_deleted_total", {"collection": "events"}) == 1
    assert registry.get_sample_value("apidemo_resources_stored", {"collection": "events"}) == 1
