"""DynamoDB manager for content record lookups."""
import logging
import time
from functools import reduce
from typing import Dict, List, Optional, Tuple

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from processor.models import ContentRecord, QueryCondition

logger = logging.getLogger(__name__)


class UnprocessedKeysError(Exception):
    """Raised when DynamoDB keeps returning unprocessed keys."""


class DynamoDBManager:
    """Read-only record store backed by a DynamoDB table."""

    BATCH_GET_SIZE = 100  # DynamoDB batch_get_item limit
    MAX_BATCH_GET_ATTEMPTS = 5
    BASE_RETRY_DELAY = 0.1  # seconds
    KEY_NAME = 'record_id'

    OPERATORS = {
        '=': 'eq',
        '<>': 'ne',
        '<': 'lt',
        '<=': 'lte',
        '>': 'gt',
        '>=': 'gte',
    }

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB resource and table reference.

        Args:
            table_name: Name of the DynamoDB table
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized DynamoDBManager for table: {table_name}")

    def query(
        self,
        conditions: List[QueryCondition],
        sort: Optional[Tuple[str, str]] = None
    ) -> List[str]:
        """
        Find the ids of records matching all conditions.

        Args:
            conditions: Conditions combined with AND
            sort: Optional (field, 'ASC' | 'DESC') pair

        Returns:
            Record ids in sort order, ties broken by record id
        """
        scan_kwargs = {}
        if conditions:
            scan_kwargs['FilterExpression'] = self._build_filter(conditions)

        try:
            response = self.table.scan(**scan_kwargs)
            items = response.get('Items', [])

            while 'LastEvaluatedKey' in response:
                response = self.table.scan(
                    ExclusiveStartKey=response['LastEvaluatedKey'],
                    **scan_kwargs
                )
                items.extend(response.get('Items', []))

        except ClientError as e:
            logger.error(f"Error scanning DynamoDB table: {e}")
            raise

        items.sort(key=lambda item: item[self.KEY_NAME])
        if sort:
            field, direction = sort
            items.sort(
                key=lambda item: str(item.get(field, '')),
                reverse=direction.upper() == 'DESC'
            )

        logger.debug(f"Query matched {len(items)} records")
        return [item[self.KEY_NAME] for item in items]

    def load(self, record_ids: List[str]) -> List[ContentRecord]:
        """
        Load full records for the given ids.

        Args:
            record_ids: Ids to load

        Returns:
            ContentRecord objects in the order of record_ids; ids that no
            longer exist are skipped
        """
        if not record_ids:
            return []

        items: Dict[str, dict] = {}
        unique_ids = list(dict.fromkeys(record_ids))

        for i in range(0, len(unique_ids), self.BATCH_GET_SIZE):
            batch = unique_ids[i:i + self.BATCH_GET_SIZE]
            request_items = {
                self.table_name: {
                    'Keys': [{self.KEY_NAME: record_id} for record_id in batch]
                }
            }

            try:
                for item in self._batch_get(request_items, i // self.BATCH_GET_SIZE + 1):
                    items[item[self.KEY_NAME]] = item

            except ClientError as e:
                logger.error(
                    f"Error loading batch {i // self.BATCH_GET_SIZE + 1}: {e}"
                )
                raise

        records = []
        for record_id in record_ids:
            item = items.get(record_id)
            if item is None:
                continue
            record = self._item_to_record(item)
            if record:
                records.append(record)

        return records

    def _batch_get(self, request_items: dict, batch_number: int) -> List[dict]:
        """
        Fetch one batch of keys, retrying unprocessed keys with backoff.

        Args:
            request_items: RequestItems for batch_get_item
            batch_number: Batch position, used in log messages

        Returns:
            Items returned for the batch

        Raises:
            UnprocessedKeysError: If keys remain unprocessed after
                MAX_BATCH_GET_ATTEMPTS attempts
        """
        items = []

        for attempt in range(self.MAX_BATCH_GET_ATTEMPTS):
            response = self.dynamodb.batch_get_item(RequestItems=request_items)
            items.extend(response.get('Responses', {}).get(self.table_name, []))

            request_items = response.get('UnprocessedKeys') or {}
            if not request_items:
                return items

            if attempt < self.MAX_BATCH_GET_ATTEMPTS - 1:
                delay = self.BASE_RETRY_DELAY * (2 ** attempt)
                logger.warning(
                    f"Batch {batch_number} returned unprocessed keys "
                    f"(attempt {attempt + 1}/{self.MAX_BATCH_GET_ATTEMPTS}). "
                    f"Retrying in {delay} seconds..."
                )
                time.sleep(delay)

        remaining = len(request_items.get(self.table_name, {}).get('Keys', []))
        logger.error(
            f"Batch {batch_number} still had {remaining} unprocessed keys "
            f"after {self.MAX_BATCH_GET_ATTEMPTS} attempts"
        )
        raise UnprocessedKeysError(
            f"{remaining} keys left unprocessed in table {self.table_name}"
        )

    def _build_filter(self, conditions: List[QueryCondition]):
        """
        Combine conditions into a single filter expression.

        Args:
            conditions: Non-empty list of QueryCondition objects

        Returns:
            boto3 condition expression

        Raises:
            ValueError: If a condition uses an unsupported operator
        """
        expressions = []
        for condition in conditions:
            method = self.OPERATORS.get(condition.operator)
            if method is None:
                raise ValueError(
                    f"Unsupported operator '{condition.operator}' "
                    f"for field '{condition.field}'"
                )
            expressions.append(getattr(Attr(condition.field), method)(condition.value))

        return reduce(lambda left, right: left & right, expressions)

    def _item_to_record(self, item: dict) -> Optional[ContentRecord]:
        """
        Convert DynamoDB item to ContentRecord object.

        Args:
            item: DynamoDB item dictionary

        Returns:
            ContentRecord object or None if conversion fails
        """
        try:
            return ContentRecord(
                record_id=item['record_id'],
                kind=item['kind'],
                title=item['title'],
                body=item.get('body'),
                date=item.get('date'),
                status=int(item['status']),
                language=item['language']
            )
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to convert item to ContentRecord: {e}")
            return None
