"""
PDGA event page roster parsing.

Every player on an event results page sits in a table cell with class
"player" (header cells are ignored).
PDGA members are links to their profile, non-members are plain text:

    <td class="player">
      <a href="/player/89924" class="tooltip">Ted Moens</a>
    </td>
    <td class="player">Maria Jacobs</td>
"""

import re

from bs4 import BeautifulSoup

from bcds.players.aliases import normalize_name
from bcds.players.records import ExternalPlayerRef

PLAYER_HREF_RE = re.compile(r"/player/(\d+)")


def parse_tournament_roster(html: str) -> list[ExternalPlayerRef]:
    """
    Extract the roster from an event page.

    Returns:
        One ExternalPlayerRef per player cell, in page order. Names are
        lower-cased; the PDGA number is set for linked players only.
    """
    soup = BeautifulSoup(html, "lxml")
    roster: list[ExternalPlayerRef] = []

    for cell in soup.select("td.player"):
        link = cell.find("a", href=PLAYER_HREF_RE)
        if link is not None:
            number = PLAYER_HREF_RE.search(link["href"]).group(1)
            name = normalize_name(link.get_text(" ", strip=True))
        else:
            number = None
            name = normalize_name(cell.get_text(" ", strip=True))

        if not name:
            continue
        roster.append(ExternalPlayerRef(name=name, registry_number=number))

    return roster
