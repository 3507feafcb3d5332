"""Query result model."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class QueryResult:
    """Outcome of the single query a client instance performs.

    Attributes:
        queried: Whether a network attempt has been made, success or failure.
        succeeded: Overall outcome of that attempt.
        raw_response: JSON text (API mode), or the resolved address or the
            literal 'NXDOMAIN' (DNSBL mode).
        appears: True if the service reports at least one sighting.
        confidence: Service-assigned spam likelihood score.
        frequency: Number of reports.
        last_seen: Epoch seconds of the most recent report, 0 if none.
        asn: Autonomous system number (API mode only).
        country: ISO country code (API mode only).
        error: Last recorded failure description.
    """

    queried: bool = False
    succeeded: bool = False
    raw_response: Optional[str] = None
    appears: bool = False
    confidence: float = 0.0
    frequency: int = 0
    last_seen: int = 0
    asn: int = 0
    country: Optional[str] = None
    error: Optional[str] = None

    def update(self, fields: Dict[str, Any]) -> None:
        """Assign parsed fields; unknown names are a programming error."""
        for name, value in fields.items():
            if not hasattr(self, name):
                raise AttributeError(f"QueryResult has no field {name!r}")
            setattr(self, name, value)

    def as_dict(self) -> Dict[str, Any]:
        """Return the result as a plain dictionary."""
        return asdict(self)
