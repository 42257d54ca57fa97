"""PDGA API client and event roster scraping."""

from bcds.pdga.client import PdgaApiError, PdgaClient, PdgaCredentials
from bcds.pdga.roster import parse_tournament_roster

__all__ = [
    "PdgaApiError",
    "PdgaClient",
    "PdgaCredentials",
    "parse_tournament_roster",
]
