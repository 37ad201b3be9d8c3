"""Shared fixtures for the test suite."""
import os

import boto3
import pytest
from moto import mock_aws

from processor.models import ContentRecord

TABLE_NAME = 'test-content-records'


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake AWS credentials so boto3 never reaches a real account."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def dynamodb_table(aws_credentials):
    """Create a mock DynamoDB table for testing."""
    with mock_aws():
        dynamodb = boto3.resource('dynamodb', region_name='us-east-1')

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[
                {'AttributeName': 'record_id', 'KeyType': 'HASH'}
            ],
            AttributeDefinitions=[
                {'AttributeName': 'record_id', 'AttributeType': 'S'}
            ],
            BillingMode='PAY_PER_REQUEST'
        )

        yield table


def make_record(record_id, date='2024-06-01', kind='event', status=1, language='en', title=None):
    """Build a ContentRecord with sensible defaults."""
    return ContentRecord(
        record_id=record_id,
        kind=kind,
        title=title or f'Title {record_id}',
        body=f'Body {record_id}',
        date=date,
        status=status,
        language=language
    )


def put_records(table, records):
    """Write records straight into the table."""
    with table.batch_writer() as writer:
        for record in records:
            item = {key: value for key, value in record.to_dict().items() if value is not None}
            writer.put_item(Item=item)
