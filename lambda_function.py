"""AWS Lambda handler for the event date-range API."""
import json
import logging
import os
import time
from typing import Dict, Any

from processor.errors import InvalidRequestError
from processor.event_normalizer import normalize
from processor.models import EventRequest, ResourceResponse
from resources.event_resource import EventResource
from resources.language import LanguageResolver
from storage.dynamodb_manager import DynamoDBManager


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def build_request(event: Dict[str, Any]) -> EventRequest:
    """
    Build an EventRequest from an API Gateway proxy event.

    Args:
        event: API Gateway proxy event

    Returns:
        EventRequest with query parameters and headers
    """
    return EventRequest(
        query_params=dict(event.get('queryStringParameters') or {}),
        headers=dict(event.get('headers') or {})
    )


def serialize_response(resource_response: ResourceResponse) -> Dict[str, Any]:
    """
    Serialize a resource response into an API Gateway response.

    Args:
        resource_response: Response produced by the resource

    Returns:
        Response dict with statusCode, headers and body
    """
    return {
        'statusCode': resource_response.status_code,
        'headers': {
            'Content-Type': 'application/json',
            'Content-Language': resource_response.language,
            'X-Cache-Contexts': ' '.join(resource_response.cache_contexts),
            'Vary': 'Accept-Language'
        },
        'body': json.dumps([normalize(record) for record in resource_response.data])
    }


def error_response(status_code: int, body: Dict[str, Any], headers: Dict[str, str] = None) -> Dict[str, Any]:
    """Build a JSON error response."""
    response_headers = {'Content-Type': 'application/json'}
    if headers:
        response_headers.update(headers)
    return {
        'statusCode': status_code,
        'headers': response_headers,
        'body': json.dumps(body)
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for GET /event.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        Response dict with statusCode, headers and body
    """
    # Read configuration from environment variables
    table_name = os.environ.get('TABLE_NAME', 'content-records')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    default_language = os.environ.get('DEFAULT_LANGUAGE', 'en')
    supported_languages = [
        lang.strip()
        for lang in os.environ.get('SUPPORTED_LANGUAGES', default_language).split(',')
        if lang.strip()
    ]

    # Initialize logging
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    method = (event.get('httpMethod') or 'GET').upper()
    logger.info(
        "Event request started",
        extra={
            'http_method': method,
            'query': event.get('queryStringParameters'),
            'table_name': table_name
        }
    )

    if method != 'GET':
        logger.warning(f"Method not allowed: {method}")
        return error_response(
            405,
            {'message': f'Method {method} not allowed'},
            headers={'Allow': 'GET'}
        )

    try:
        request = build_request(event)
        resource = EventResource(
            store=DynamoDBManager(table_name=table_name),
            language_resolver=LanguageResolver(default_language, supported_languages)
        )

        resource_response = resource.get(request)
        response = serialize_response(resource_response)

        duration = time.time() - start_time
        logger.info(
            "Event request completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_returned': len(resource_response.data)
            }
        )
        return response

    except InvalidRequestError as e:
        logger.warning(f"Rejected invalid request: {e.message}")
        return error_response(
            e.status_code,
            {'message': e.message, 'error_type': type(e).__name__}
        )

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Event request failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return error_response(
            500,
            {'message': 'Internal server error', 'error_type': type(e).__name__}
        )
