"""Resolver for the start/end query parameters of the event endpoint."""
import logging
import re
from datetime import date, datetime
from typing import Callable, Optional

from processor.errors import InvalidRequestError
from processor.models import DateRange

logger = logging.getLogger(__name__)

DATE_FORMAT = '%Y-%m-%d'
DATE_FORMAT_LABEL = 'YYYY-MM-DD'

# strptime alone accepts unpadded months and days
_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}')


def parse_date(raw: str) -> date:
    """
    Parse a date strictly against YYYY-MM-DD.

    Args:
        raw: Date string from the request

    Returns:
        Parsed date

    Raises:
        ValueError: If the string does not match the format or is not a
            valid calendar date
    """
    if not _DATE_PATTERN.fullmatch(raw):
        raise ValueError(f"'{raw}' does not match format {DATE_FORMAT_LABEL}")
    return datetime.strptime(raw, DATE_FORMAT).date()


def _resolve_date(raw: Optional[str], name: str) -> Optional[date]:
    if not raw:
        return None

    try:
        return parse_date(raw)
    except ValueError as e:
        logger.error(
            f"Invalid {name} date '{raw}': {e}",
            extra={'parameter': name, 'raw_value': raw},
            exc_info=True
        )
        raise InvalidRequestError(
            f"{name} date must use format {DATE_FORMAT_LABEL}"
        ) from e


def resolve_date_range(
    start_raw: Optional[str],
    end_raw: Optional[str],
    today: Callable[[], date] = date.today
) -> DateRange:
    """
    Resolve and validate the start and end dates of a request.

    A missing start defaults to the current date; a missing end leaves the
    range open-ended. Both dates are parsed before the ordering check, so a
    malformed date is always reported first.

    Args:
        start_raw: Raw start parameter, may be None or empty
        end_raw: Raw end parameter, may be None or empty
        today: Clock returning the current date

    Returns:
        Validated DateRange

    Raises:
        InvalidRequestError: If a date is malformed or end precedes start
    """
    start = _resolve_date(start_raw, 'start')
    if start is None:
        start = today()

    end = _resolve_date(end_raw, 'end')

    if end is not None and start > end:
        raise InvalidRequestError('end date cannot be lower than start date')

    return DateRange(start=start, end=end)
