"""http:BL reputation result models.

A lookup produces exactly one of four records:

- ``NotListed``: the resolver reported NXDOMAIN.
- ``SearchEngine``: a verified crawler (127.0.<serial>.0).
- ``Listed``: a listed visitor (127.<days>.<threat>.<type>).
- ``LookupFailure``: the lookup or the decoding failed.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Union


class VisitorType(IntFlag):
    """Visitor type bits carried in the fourth response octet."""

    SUSPICIOUS = 1
    HARVESTER = 2
    COMMENT_SPAMMER = 4


# Serial numbers published by Project Honey Pot for known crawlers
SEARCH_ENGINES = {
    0: "Undocumented",
    1: "AltaVista",
    2: "Ask",
    3: "Baidu",
    4: "Excite",
    5: "Google",
    6: "Looksmart",
    7: "Lycos",
    8: "MSN",
    9: "Yahoo",
    10: "Cuil",
    11: "InfoSeek",
    12: "Miscellaneous",
}


@dataclass(frozen=True)
class NotListed:
    """Host is not present in the blocklist."""

    status = "not_listed"


@dataclass(frozen=True)
class SearchEngine:
    """Verified search engine crawler.

    Attributes:
        serial: Crawler serial number (third response octet). Informational
            only, it is not a threat score.
    """

    serial: int

    status = "search_engine"

    @property
    def name(self) -> str:
        return SEARCH_ENGINES.get(self.serial, "Unknown")


@dataclass(frozen=True)
class Listed:
    """Visitor listed by http:BL.

    Attributes:
        days_since_last_activity: Days since the visitor was last seen (0-255).
        threat_score: Severity score (0-255).
        type_mask: VisitorType bitfield.
    """

    days_since_last_activity: int
    threat_score: int
    type_mask: int

    status = "listed"

    @property
    def visitor_types(self) -> List[VisitorType]:
        """Return the VisitorType flags set in type_mask, lowest bit first."""
        return [flag for flag in VisitorType if self.type_mask & flag]


@dataclass(frozen=True)
class LookupFailure:
    """Lookup or response decoding failed for a reason other than NXDOMAIN."""

    message: str

    status = "error"


ReputationRecord = Union[NotListed, SearchEngine, Listed, LookupFailure]
