"""Normalizer for content records."""
from typing import Any, Dict

from processor.models import EVENT_KIND, ContentRecord


def normalize(record: ContentRecord) -> Dict[str, Any]:
    """
    Build the external representation of a record.

    Event records are reduced to title, body and date, taken as stored.
    Any other kind keeps its full default representation.

    Args:
        record: Record loaded from the store

    Returns:
        Dictionary ready for serialization
    """
    if record.kind == EVENT_KIND:
        return {
            'title': record.title,
            'body': record.body,
            'date': record.date,
        }
    return record.to_dict()
