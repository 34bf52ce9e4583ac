"""HTTP gateway to the MOCO time tracking API."""
import logging
from datetime import date, timedelta
from typing import List, Optional

import requests

from config import Config
from models import Project, TimeEntry

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed call to the backend.

    ``status`` is the HTTP status code, or None when the request never got a
    response (connection refused, timeout, ...).
    """

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    @classmethod
    def from_response(cls, response: requests.Response) -> 'ApiError':
        body = response.text or ""
        return cls(f"status {response.status_code}: {body}", response.status_code, body)


class MocoClient:
    """
    Talks to the MOCO REST API.

    All requests go through one ``requests.Session`` carrying the
    ``Authorization: Token <key>`` header. Every failure surfaces as ApiError.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.base_url
        self.timeout = config.request_timeout
        self.history_days = config.history_days
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Token {config.api_key}"
        self.session.headers["Accept"] = "application/json"

    def _request(self, method: str, path: str, payload: Optional[dict] = None,
                 params: Optional[dict] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("REQUEST: %s %s params=%s body=%s", method, url, params, payload)
        try:
            response = self.session.request(
                method, url, json=payload, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise ApiError(f"request failed: {e}") from e

        logger.debug("RESPONSE: status %s body=%s", response.status_code, response.text)
        if not 200 <= response.status_code < 300:
            logger.warning("%s %s returned status %s", method, url, response.status_code)
            raise ApiError.from_response(response)
        return response

    def _json(self, response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            logger.error("Undecodable response body: %r", response.text[:200])
            raise ApiError(f"invalid JSON in response: {e}", response.status_code, response.text) from e

    def fetch_projects(self) -> List[Project]:
        """Projects assigned to the API key's user, with their tasks."""
        response = self._request("GET", "/projects/assigned")
        try:
            return [Project.from_api(item) for item in self._json(response)]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"unexpected project data: {e}", response.status_code, response.text) from e

    def fetch_time_entries(self, reference_date: date) -> List[TimeEntry]:
        """
        Time entries for the trailing window ending at ``reference_date``.

        The window starts ``history_days`` days before the reference date, so
        the default covers a week.
        """
        start = reference_date - timedelta(days=self.history_days)
        params = {"from": start.isoformat(), "to": reference_date.isoformat()}
        response = self._request("GET", "/activities", params=params)
        try:
            return [TimeEntry.from_api(item) for item in self._json(response)]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"unexpected time entry data: {e}", response.status_code, response.text) from e

    def create_time_entry(self, entry: TimeEntry) -> Optional[int]:
        """Book a new entry. Returns the id assigned by the backend."""
        response = self._request("POST", "/activities", payload=entry.to_payload())
        if not response.content:
            return None
        data = self._json(response)
        return data.get("id") if isinstance(data, dict) else None

    def delete_time_entry(self, entry_id: int) -> None:
        self._request("DELETE", f"/activities/{entry_id}")
