"""Luma calendar service for the events pages."""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


class LumaError(Exception):
    """Raised when the Luma API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def to_iso(moment: datetime) -> str:
    """Format an aware datetime the way Luma expects (UTC, trailing Z)."""
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def event_start(entry: Dict[str, Any]) -> Optional[datetime]:
    """Parse an entry's event.start_at, None if missing or malformed."""
    start_at = (entry.get('event') or {}).get('start_at')
    if not start_at:
        return None
    try:
        start = date_parser.isoparse(start_at)
    except (ValueError, TypeError):
        logger.warning(f"Skipping event with unparseable start_at: {start_at!r}")
        return None
    if start.tzinfo is None:
        start = start.replace(tzinfo=timezone.utc)
    return start


class LumaService:
    """Fetches past and upcoming events of one Luma calendar."""

    BASE_URL = 'https://public-api.luma.com'
    # Luma caps one page; later events are not fetched
    PAGINATION_LIMIT = 50
    PAST_WINDOW_MONTHS = 18
    UPCOMING_WINDOW_MONTHS = 12
    TIMEOUT = 30

    def __init__(self, api_key: str, calendar_id: str, base_url: str = None, timeout: float = None):
        self.api_key = api_key
        self.calendar_id = calendar_id
        self.base_url = (base_url or self.BASE_URL).rstrip('/')
        self.timeout = timeout or self.TIMEOUT

    def list_events(self, after: datetime, before: datetime) -> Dict[str, Any]:
        """Fetch the first page of calendar events between two moments."""
        logger.info(f"Fetching Luma events after {to_iso(after)} before {to_iso(before)}")

        response = requests.get(
            f"{self.base_url}/v1/calendar/list-events",
            params={
                'calendar_id': self.calendar_id,
                'after': to_iso(after),
                'before': to_iso(before),
                'pagination_limit': self.PAGINATION_LIMIT,
            },
            headers={
                'accept': 'application/json',
                'x-luma-api-key': self.api_key,
            },
            timeout=self.timeout
        )

        if not response.ok:
            logger.error(f"Luma API error: {response.status_code} {response.text[:500]}")
            raise LumaError(f"Luma API error: {response.status_code}", status_code=response.status_code)

        return response.json()

    @staticmethod
    def _filter(data: Dict[str, Any], keep) -> List[Dict[str, Any]]:
        entries = []
        for entry in data.get('entries') or []:
            start = event_start(entry)
            if start is not None and keep(start):
                entries.append(entry)
        return entries

    def past_events(self, now: datetime = None) -> Dict[str, Any]:
        """Get events of the last 18 months that started strictly before now."""
        now = now or datetime.now(timezone.utc)
        data = self.list_events(now - relativedelta(months=self.PAST_WINDOW_MONTHS), now)

        entries = self._filter(data, lambda start: start < now)
        logger.info(f"Total events in range: {len(data.get('entries') or [])}, past events: {len(entries)}")
        return {**data, 'entries': entries}

    def upcoming_events(self, now: datetime = None) -> Dict[str, Any]:
        """Get events of the next 12 months starting at or after now."""
        now = now or datetime.now(timezone.utc)
        data = self.list_events(now, now + relativedelta(months=self.UPCOMING_WINDOW_MONTHS))

        entries = self._filter(data, lambda start: start >= now)
        logger.info(f"Total events in range: {len(data.get('entries') or [])}, upcoming events: {len(entries)}")
        return {**data, 'entries': entries}
