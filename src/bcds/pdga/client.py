"""
PDGA API and website client.

The PDGA JSON API needs a login; the session it returns is sent back as a
cookie on every call. The login is held in a PdgaCredentials object with
an expiry time and refreshed when it runs out, rather than being kept in
loose fields on the client.

Event rosters are not available from the API, so they are scraped from
the public event page (see roster.py).

Usage:
    client = PdgaClient()
    event = client.get_tournament_data("71234")
    roster = client.get_tournament_players("71234")
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import requests

from bcds.config import Settings, settings as default_settings
from bcds.pdga.roster import parse_tournament_roster
from bcds.players.records import ExternalPlayerRef

logger = logging.getLogger(__name__)


class PdgaApiError(RuntimeError):
    """Raised when the PDGA API cannot be reached or rejects a request."""
    pass


@dataclass(frozen=True)
class PdgaCredentials:
    """A logged-in PDGA API session."""
    session_name: str
    session_id: str
    token: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def cookie_header(self) -> str:
        return f"{self.session_name}={self.session_id}"


class PdgaClient:
    """
    Client for the PDGA API and event pages.

    Args:
        http: requests.Session to use (a new one by default)
        config: Settings with PDGA URLs, credentials and timeouts
    """

    def __init__(
        self,
        http: Optional[requests.Session] = None,
        config: Optional[Settings] = None,
    ):
        self.http = http or requests.Session()
        self.config = config or default_settings
        self._credentials: Optional[PdgaCredentials] = None

    # =========================================================================
    # Authentication
    # =========================================================================

    def login(self) -> PdgaCredentials:
        """
        Log into the PDGA API.

        Raises:
            PdgaApiError: If no credentials are configured or login fails
        """
        if not self.config.pdga_api_user or not self.config.pdga_api_password:
            raise PdgaApiError("PDGA API credentials are not configured")

        logger.info("Logging into PDGA API")
        data = self._request_json(
            "POST",
            f"{self.config.pdga_api_url}/user/login",
            json={
                "username": self.config.pdga_api_user,
                "password": self.config.pdga_api_password,
            },
        )
        try:
            credentials = PdgaCredentials(
                session_name=data["session_name"],
                session_id=data["sessid"],
                token=data["token"],
                expires_at=datetime.now(timezone.utc)
                + timedelta(seconds=self.config.pdga_session_ttl_seconds),
            )
        except (KeyError, TypeError) as e:
            raise PdgaApiError(f"Unexpected PDGA login response: {data!r}") from e

        self._credentials = credentials
        return credentials

    def credentials(self, now: Optional[datetime] = None) -> PdgaCredentials:
        """Current credentials, logging in again if missing or expired."""
        if self._credentials is None or self._credentials.is_expired(now):
            return self.login()
        return self._credentials

    # =========================================================================
    # API Calls
    # =========================================================================

    def get_tournament_data(self, tournament_id: str) -> Optional[dict[str, Any]]:
        """
        Event details from the PDGA API.

        Returns:
            The event dict (name, start_date, end_date, ...) or None if the
            PDGA does not know the event
        """
        data = self._api_get("event", {"tournament_id": str(tournament_id)})
        events = (data or {}).get("events") or []
        if not events:
            return None
        return events[0]

    def get_tournament_players(self, tournament_id: str) -> list[ExternalPlayerRef]:
        """Everyone on an event's results page."""
        url = f"{self.config.pdga_site_url}/tour/event/{tournament_id}"
        try:
            response = self.http.get(url, timeout=self.config.pdga_timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            raise PdgaApiError(f"Could not load event page {url}: {e}") from e
        return parse_tournament_roster(response.text)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _api_get(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        credentials = self.credentials()
        return self._request_json(
            "GET",
            f"{self.config.pdga_api_url}/{path}",
            params=params,
            headers={"Cookie": credentials.cookie_header()},
        )

    def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            response = self.http.request(
                method, url, timeout=self.config.pdga_timeout_seconds, **kwargs
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise PdgaApiError(f"PDGA request failed: {method} {url}: {e}") from e
        except ValueError as e:
            raise PdgaApiError(f"PDGA returned invalid JSON: {method} {url}") from e
