import json
from datetime import datetime, timezone

import httpx
import pytest

from week_planner.calendar_sync import (
    DEMO_ACCOUNT_SUFFIX, GOOGLE_EVENTS_URL, CalendarEvent, DemoCalendarClient,
    GoogleCalendarClient, build_tactic_event, is_demo_account,
)
from week_planner.exceptions import CalendarError
from week_planner.models import Tactic

NOW = datetime(2026, 3, 4, 15, 45, tzinfo=timezone.utc)


def _event():
    tactic = Tactic(id="t1", title="Sales calls", linked_goal_id="g1", duration_minutes=90)
    return build_tactic_event(tactic, now=NOW)


def test_build_tactic_event_next_morning():
    event = _event()
    assert event.start == datetime(2026, 3, 5, 9, 0, tzinfo=timezone.utc)
    assert event.end == datetime(2026, 3, 5, 10, 30, tzinfo=timezone.utc)
    assert event.summary == "Strategy time: Sales calls"
    assert "Sales calls" in event.description
    assert event.color_id == "11"


def test_google_body():
    body = _event().to_google_body()
    assert body["start"] == {"dateTime": "2026-03-05T09:00:00+00:00"}
    assert body["colorId"] == "11"


def test_google_body_without_color():
    event = CalendarEvent("s", "d", NOW, NOW, color_id=None)
    assert "colorId" not in event.to_google_body()


def test_google_client_posts_event():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "evt1"})

    client = GoogleCalendarClient("token-123", transport=httpx.MockTransport(handler))
    assert client.create_event(_event()) is True
    assert seen["url"] == GOOGLE_EVENTS_URL
    assert seen["auth"] == "Bearer token-123"
    assert seen["body"]["summary"] == "Strategy time: Sales calls"


def test_google_client_http_failure_returns_false():
    transport = httpx.MockTransport(lambda request: httpx.Response(401, json={}))
    assert GoogleCalendarClient("bad", transport=transport).create_event(_event()) is False


def test_google_client_network_failure_returns_false():
    def handler(request):
        raise httpx.ConnectTimeout("timeout", request=request)

    assert GoogleCalendarClient("t", transport=httpx.MockTransport(handler)).create_event(_event()) is False


def test_google_client_requires_token():
    with pytest.raises(CalendarError):
        GoogleCalendarClient("")


def test_demo_client_records_events():
    demo = DemoCalendarClient()
    assert demo.create_event(_event()) is True
    assert len(demo.created) == 1


def test_is_demo_account():
    assert is_demo_account("demo@example.com" + DEMO_ACCOUNT_SUFFIX)
    assert not is_demo_account("me@example.com")
    assert not is_demo_account(None)
