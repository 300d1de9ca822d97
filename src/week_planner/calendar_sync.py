"""Time-blocking tactics on an external calendar."""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import httpx

from week_planner.exceptions import CalendarError
from week_planner.models import Tactic

logger = logging.getLogger(__name__)

GOOGLE_EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/primary/events"
STRATEGY_COLOR_ID = "11"  # red in Google Calendar
DEMO_ACCOUNT_SUFFIX = " (demo account)"
DEFAULT_START_HOUR = 9
TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CalendarEvent:
    summary: str
    description: str
    start: datetime
    end: datetime
    color_id: Optional[str] = STRATEGY_COLOR_ID

    def to_google_body(self) -> dict:
        body = {
            "summary": self.summary,
            "description": self.description,
            "start": {"dateTime": self.start.isoformat()},
            "end": {"dateTime": self.end.isoformat()},
        }
        if self.color_id:
            body["colorId"] = self.color_id
        return body


def build_tactic_event(tactic: Tactic, now: Optional[datetime] = None) -> CalendarEvent:
    """Block time for a tactic at 09:00 on the following day."""
    now = now or datetime.now().astimezone()
    start = (now + timedelta(days=1)).replace(hour=DEFAULT_START_HOUR, minute=0, second=0, microsecond=0)
    return CalendarEvent(
        summary=f"Strategy time: {tactic.title}",
        description=f"12 Week Year execution block.\n\nTask: {tactic.title}",
        start=start,
        end=start + timedelta(minutes=tactic.duration_minutes),
    )


def is_demo_account(email: Optional[str]) -> bool:
    return bool(email) and email.endswith(DEMO_ACCOUNT_SUFFIX)


class GoogleCalendarClient:
    """Writes events to the user's primary Google calendar.

    Needs an OAuth access token obtained outside the planner.
    """

    def __init__(self, access_token: str, transport: Optional[httpx.BaseTransport] = None):
        if not access_token:
            raise CalendarError(
                "A calendar access token is required.",
                hint="Use the demo connection if you only want to try the feature.",
            )
        self.access_token = access_token
        self._transport = transport

    def create_event(self, event: CalendarEvent) -> bool:
        headers = {"Authorization": f"Bearer {self.access_token}"}
        try:
            with httpx.Client(timeout=TIMEOUT_SECONDS, transport=self._transport) as client:
                response = client.post(GOOGLE_EVENTS_URL, headers=headers, json=event.to_google_body())
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Calendar rejected event %r: HTTP %s", event.summary, e.response.status_code)
            return False
        except httpx.HTTPError as e:
            logger.error("Calendar request for %r failed: %s", event.summary, e)
            return False
        logger.info("Created calendar event %r at %s", event.summary, event.start.isoformat())
        return True


class DemoCalendarClient:
    """Pretends to create events; nothing leaves the machine."""

    def __init__(self):
        self.created: list[CalendarEvent] = []

    def create_event(self, event: CalendarEvent) -> bool:
        self.created.append(event)
        logger.info("Simulated calendar event %r", event.summary)
        return True
