"""
Test configuration and fixtures for the conference API.

Provides a test SiteConfig and moto-backed DynamoDB tables shaped like the
production ones (partitionKey HASH + rowKey RANGE).
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import conference_api
sys.path.insert(0, str(Path(__file__).parent.parent))

import boto3
import pytest
from moto import mock_aws

from conference_api import SiteConfig
from conference_api.api import reset_clients

from tests.helpers import create_key_table


@pytest.fixture
def site_config():
    """Site configuration for mocked testing."""
    return SiteConfig(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        storage_account_name="azcorestorage2026",
        environment="test",
        schedule_table="VideoSchedule",
        speakers_table="Speakers",
        site_timezone="America/New_York",
        youtube_api_key=None,
        youtube_api_url="https://youtube.test/v3",
        enable_debug_logging=False
    )


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def schedule_table(mock_dynamodb_resource, site_config):
    """Create the session table (azcorestorage2026_test_VideoSchedule)."""
    return create_key_table(mock_dynamodb_resource, site_config.get_table_name(site_config.schedule_table))


@pytest.fixture
def speakers_table(mock_dynamodb_resource, site_config):
    """Create the speaker table (azcorestorage2026_test_Speakers)."""
    return create_key_table(mock_dynamodb_resource, site_config.get_table_name(site_config.speakers_table))


@pytest.fixture
def api_context(site_config, schedule_table, speakers_table):
    """Point the Lambda handlers at the mocked tables."""
    reset_clients(site_config)
    yield site_config
    reset_clients()
