"""Blocking policy model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Policy:
    """Blocking policy applied to http:BL results.

    Built once at startup and shared read-only by every request.

    Attributes:
        block_min_threat_score: Block listed visitors with threat_score >= this.
        block_type_mask: Block listed visitors whose type_mask shares a bit
            with this mask (1=Suspicious, 2=Harvester, 4=Comment Spammer).
        allow_search_engines: Allow verified crawlers when True.
    """

    block_min_threat_score: int
    block_type_mask: int
    allow_search_engines: bool

    def __post_init__(self) -> None:
        if not 0 <= self.block_min_threat_score <= 255:
            raise ValueError("block_min_threat_score must be between 0 and 255")
        if not 0 <= self.block_type_mask <= 255:
            raise ValueError("block_type_mask must be between 0 and 255")
