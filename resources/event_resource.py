"""REST resource returning events within a date range."""
from datetime import date
from typing import Callable, List, Optional

from processor.date_range import DATE_FORMAT, resolve_date_range
from processor.models import (
    EVENT_KIND,
    PUBLISHED,
    EventRequest,
    QueryCondition,
    RecordStore,
    ResourceResponse,
)


class EventResource:
    """Resource for GET /event."""

    CACHE_CONTEXTS = ['url.query_args:start', 'url.query_args:end']
    SORT = ('date', 'ASC')

    def __init__(
        self,
        store: RecordStore,
        language_resolver: Callable[[EventRequest], str],
        today: Callable[[], date] = date.today
    ):
        """
        Initialize the resource with its collaborators.

        Args:
            store: Record store exposing query(conditions, sort) and load(ids)
            language_resolver: Returns the language of a request
            today: Clock returning the current date
        """
        self.store = store
        self.language_resolver = language_resolver
        self.today = today

    def get(self, request: EventRequest) -> ResourceResponse:
        """
        Respond to a GET request.

        Provides the published events in the request language that fall
        between the start and end dates. Without a start date the current
        date is used; without an end date the range is open-ended.

        Args:
            request: Current request

        Returns:
            ResourceResponse with the events sorted by date

        Raises:
            InvalidRequestError: If the start or end parameter is invalid
        """
        date_range = resolve_date_range(
            request.get('start'),
            request.get('end'),
            today=self.today
        )
        language = self.language_resolver(request)

        conditions = self.build_conditions(
            language, date_range.start, date_range.end
        )
        record_ids = self.store.query(conditions, self.SORT)
        records = self.store.load(record_ids)

        return ResourceResponse(
            data=list(records),
            language=language,
            status_code=200,
            cache_contexts=list(self.CACHE_CONTEXTS)
        )

    def build_conditions(
        self,
        language: str,
        start: date,
        end: Optional[date] = None
    ) -> List[QueryCondition]:
        """
        Build the store conditions for an event query.

        Args:
            language: Language the events must be in
            start: Earliest event date, inclusive
            end: Latest event date, inclusive, or None

        Returns:
            List of QueryCondition objects
        """
        conditions = [
            QueryCondition('kind', EVENT_KIND),
            QueryCondition('status', PUBLISHED),
            QueryCondition('language', language),
            QueryCondition('date', start.strftime(DATE_FORMAT), '>='),
        ]
        if end is not None:
            conditions.append(
                QueryCondition('date', end.strftime(DATE_FORMAT), '<=')
            )
        return conditions
