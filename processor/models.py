"""Data models for content records and event queries."""
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Tuple


EVENT_KIND = 'event'
PUBLISHED = 1


@dataclass
class ContentRecord:
    """Content record as held by the record store."""
    record_id: str
    kind: str
    title: str
    body: Optional[str]
    date: Optional[str]
    status: int
    language: str

    def to_dict(self) -> Dict[str, Any]:
        """Full default representation of the record."""
        return asdict(self)


@dataclass
class DateRange:
    """Validated start/end window for an event query."""
    start: date
    end: Optional[date] = None


@dataclass
class QueryCondition:
    """Single filter condition handed to the record store."""
    field: str
    value: Any
    operator: str = '='


@dataclass
class EventRequest:
    """Incoming request as seen by the event resource."""
    query_params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str) -> Optional[str]:
        return self.query_params.get(name)


@dataclass
class ResourceResponse:
    """Resource result plus the cache contexts it varies by."""
    data: List[ContentRecord]
    language: str
    status_code: int = 200
    cache_contexts: List[str] = field(default_factory=list)


class RecordStore(Protocol):
    """Read-only store the event resource queries."""

    def query(
        self,
        conditions: List[QueryCondition],
        sort: Optional[Tuple[str, str]] = None
    ) -> List[str]:
        ...

    def load(self, record_ids: List[str]) -> List[ContentRecord]:
        ...
