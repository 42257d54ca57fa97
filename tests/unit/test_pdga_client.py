"""
Unit tests for the PDGA client and event roster parsing.

No network: the requests.Session is a MagicMock.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
import requests

from bcds.config import Settings
from bcds.pdga.client import PdgaApiError, PdgaClient, PdgaCredentials
from bcds.pdga.roster import parse_tournament_roster
from bcds.players.records import ExternalPlayerRef

EVENT_PAGE = """
<html><body>
<table class="results">
  <thead><tr><th class="player">Name</th><th class="pdga-number">PDGA#</th></tr></thead>
  <tbody>
    <tr><td class="player"><a href="/player/89924" class="tooltip">Ted  Moens</a></td></tr>
    <tr><td class="player">Maria Jacobs</td></tr>
    <tr><td class="player"><a href="https://www.pdga.com/player/4242">Sam Green</a></td></tr>
    <tr><td class="player">   </td></tr>
  </tbody>
</table>
</body></html>
"""

LOGIN_RESPONSE = {"session_name": "SSESS1", "sessid": "abc123", "token": "tok"}


def _response(payload=None, text=""):
    response = MagicMock()
    response.json.return_value = payload
    response.text = text
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def config():
    return Settings(pdga_api_user="club", pdga_api_password="secret")


def test_parse_tournament_roster():
    roster = parse_tournament_roster(EVENT_PAGE)

    assert roster == [
        ExternalPlayerRef(name="ted moens", registry_number="89924"),
        ExternalPlayerRef(name="maria jacobs", registry_number=None),
        ExternalPlayerRef(name="sam green", registry_number="4242"),
    ]


def test_parse_empty_page():
    assert parse_tournament_roster("<html><body></body></html>") == []


def test_login_then_reuse_session(config):
    http = MagicMock()
    http.request.side_effect = [
        _response(LOGIN_RESPONSE),
        _response({"events": [{"tournament_name": "Fall Classic"}]}),
        _response({"events": [{"tournament_name": "Fall Classic"}]}),
    ]
    client = PdgaClient(http=http, config=config)

    assert client.get_tournament_data("71234") == {"tournament_name": "Fall Classic"}
    client.get_tournament_data("71234")

    # One login, two API calls
    assert http.request.call_count == 3
    login_call = http.request.call_args_list[0]
    assert login_call.args == ("POST", "https://api.pdga.com/services/json/user/login")
    assert login_call.kwargs["json"] == {"username": "club", "password": "secret"}

    event_call = http.request.call_args_list[1]
    assert event_call.kwargs["params"] == {"tournament_id": "71234"}
    assert event_call.kwargs["headers"] == {"Cookie": "SSESS1=abc123"}


def test_expired_credentials_log_in_again(config):
    http = MagicMock()
    http.request.side_effect = [_response(LOGIN_RESPONSE), _response({"events": []})]
    client = PdgaClient(http=http, config=config)
    client._credentials = PdgaCredentials(
        session_name="OLD",
        session_id="old",
        token="old",
        expires_at=datetime.now(timezone.utc) - timedelta(seconds=1),
    )

    assert client.get_tournament_data("1") is None
    assert http.request.call_count == 2
    assert client.credentials().session_id == "abc123"


def test_credentials_expiry():
    expires = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    credentials = PdgaCredentials("S", "id", "tok", expires)

    assert not credentials.is_expired(expires - timedelta(seconds=1))
    assert credentials.is_expired(expires)
    assert credentials.cookie_header() == "S=id"


def test_missing_credentials():
    client = PdgaClient(
        http=MagicMock(),
        config=Settings(pdga_api_user=None, pdga_api_password=None),
    )
    with pytest.raises(PdgaApiError, match="not configured"):
        client.login()


def test_network_failure_is_wrapped(config):
    http = MagicMock()
    http.request.side_effect = requests.ConnectionError("connection refused")
    client = PdgaClient(http=http, config=config)

    with pytest.raises(PdgaApiError):
        client.login()


def test_bad_login_response(config):
    http = MagicMock()
    http.request.return_value = _response({"error": "wrong password"})
    client = PdgaClient(http=http, config=config)

    with pytest.raises(PdgaApiError, match="Unexpected PDGA login response"):
        client.login()


def test_get_tournament_players(config):
    http = MagicMock()
    http.get.return_value = _response(text=EVENT_PAGE)
    client = PdgaClient(http=http, config=config)

    roster = client.get_tournament_players("71234")

    http.get.assert_called_once_with("https://www.pdga.com/tour/event/71234", timeout=30.0)
    assert [ref.name for ref in roster] == ["ted moens", "maria jacobs", "sam green"]
    # The event page needs no login
    http.request.assert_not_called()

