"""
Thin DynamoDB Table Gateway

This module provides a lightweight wrapper around boto3 DynamoDB operations for
the two-key (partitionKey + rowKey) tables behind the conference site.

The gateway focuses on:
- Creating boto3 Table handles lazily, once per gateway
- Scans that follow LastEvaluatedKey pagination
- Point reads, unconditional puts and deletes by composite key
- Transactions for moving a row between partitions
- Mapping botocore ClientErrors onto domain exceptions

Read/write APIs compose these operations; they never talk to boto3 directly.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config import SiteConfig
from ..exceptions import (
    ConnectionError,
    ConflictError,
    RetryableError,
    StorageError
)

logger = logging.getLogger(__name__)

PARTITION_KEY = "partitionKey"
ROW_KEY = "rowKey"


def map_dynamodb_error(
    error: ClientError,
    operation: str,
    table_name: str,
    resource_id: Optional[str] = None
) -> Exception:
    """Map DynamoDB ClientError to domain-specific exceptions.

    Args:
        error: The boto3 ClientError
        operation: The operation that failed (e.g., "GetItem", "PutItem")
        table_name: The DynamoDB table name
        resource_id: Optional row key for context

    Returns:
        Appropriate domain exception
    """
    error_code = error.response['Error']['Code']
    error_message = error.response['Error']['Message']

    context = f"{operation} on {table_name}"
    if resource_id:
        context += f" (resource: {resource_id})"

    full_message = f"{context}: {error_message}"

    if error_code == 'ConditionalCheckFailedException':
        return ConflictError(f"Conditional check failed - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceNotFoundException':
        # Raised for a missing table, never for a missing row
        return ConnectionError(f"Table not found - {full_message}", original_error=error)

    elif error_code == 'ValidationException':
        return StorageError(f"Validation failed - {full_message}", table_name, original_error=error)

    elif error_code in ['TransactionConflictException', 'DuplicateTransactionException']:
        return ConflictError(f"Transaction conflict - {full_message}", resource_id, original_error=error)

    elif error_code == 'ResourceInUseException':
        return ConflictError(f"Resource in use - {full_message}", resource_id, original_error=error)

    elif error_code in [
        'ProvisionedThroughputExceededException', 'RequestLimitExceeded', 'ThrottlingException',
        'TransactionCanceledException', 'TransactionInProgressException'
    ]:
        return RetryableError(f"Throttling - {full_message}", original_error=error)

    elif error_code in ['InternalServerError', 'ServiceUnavailable', 'ServiceUnavailableException']:
        return RetryableError(f"Service unavailable - {full_message}", original_error=error)

    elif error_code in [
        'UnrecognizedClientException', 'AccessDeniedException',
        'ExpiredTokenException', 'InvalidSignatureException'
    ]:
        return ConnectionError(f"Authentication/authorization failed - {full_message}", original_error=error)

    logger.warning(f"Unknown DynamoDB error code '{error_code}' mapped to ConnectionError")
    return ConnectionError(f"DynamoDB operation failed - {full_message}", original_error=error)


class TableGateway:
    """
    Thin gateway for one partitionKey/rowKey DynamoDB table.

    Designed to be used by the schedule and speaker read/write APIs rather
    than directly by request handlers.
    """

    def __init__(self, config: SiteConfig, table_name: str):
        """Initialize table gateway.

        Args:
            config: Site configuration
            table_name: Full name of the DynamoDB table
        """
        self.config = config
        self.table_name = table_name
        self._dynamodb = None
        self._table = None

    @property
    def dynamodb(self):
        """Lazy initialization of DynamoDB resource."""
        if self._dynamodb is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )

                dynamodb_config = {
                    'region_name': self.config.region_name
                }

                if self.config.endpoint_url:
                    dynamodb_config['endpoint_url'] = self.config.endpoint_url

                boto_config = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )
                dynamodb_config['config'] = boto_config

                self._dynamodb = session.resource('dynamodb', **dynamodb_config)
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    @property
    def table(self):
        """boto3 Table resource for this gateway."""
        if self._table is None:
            try:
                self._table = self.dynamodb.Table(self.table_name)
            except Exception as e:
                logger.error(f"Failed to access table '{self.table_name}': {e}")
                raise ConnectionError(f"Failed to access table '{self.table_name}': {e}", e) from e
        return self._table

    def scan(self, **kwargs) -> Dict[str, Any]:
        """
        Execute a single DynamoDB Scan page.

        Args:
            **kwargs: All boto3 scan parameters

        Returns:
            Raw DynamoDB response
        """
        try:
            return self.table.scan(**kwargs)
        except ClientError as e:
            raise map_dynamodb_error(e, "Scan", self.table_name) from e

    def scan_all(self, **kwargs) -> Iterator[Dict[str, Any]]:
        """
        Yield every item of a scan, following LastEvaluatedKey pagination.

        Args:
            **kwargs: boto3 scan parameters (FilterExpression, ProjectionExpression, ...)

        Yields:
            Raw DynamoDB items
        """
        scan_kwargs = dict(kwargs)
        pages = 0
        while True:
            response = self.scan(**scan_kwargs)
            pages += 1
            yield from response.get('Items', [])

            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_kwargs['ExclusiveStartKey'] = last_key
        logger.debug(f"Scanned {self.table_name} in {pages} page(s)")

    def find_by_row_key(self, row_key: str) -> Optional[Dict[str, Any]]:
        """
        Find an item by row key alone.

        The partition key cannot be derived from the row key, so this is a
        filtered scan over the whole table.

        Args:
            row_key: Row key to look for

        Returns:
            The first matching item, or None
        """
        for item in self.scan_all(FilterExpression=Attr(ROW_KEY).eq(row_key)):
            return item
        return None

    def get_item(self, partition_key: str, row_key: str) -> Optional[Dict[str, Any]]:
        """
        Point read by composite key.

        Args:
            partition_key: Partition key value
            row_key: Row key value

        Returns:
            The item, or None when absent
        """
        try:
            response = self.table.get_item(Key={PARTITION_KEY: partition_key, ROW_KEY: row_key})
        except ClientError as e:
            raise map_dynamodb_error(e, "GetItem", self.table_name, row_key) from e
        return response.get('Item')

    def put_item(self, item: Dict[str, Any], condition_expression=None) -> None:
        """
        Put item into the table (unconditional replace unless a condition is given).

        Args:
            item: Item to store, including partitionKey and rowKey
            condition_expression: Optional condition for put operation

        Example:
            gateway.put_item(
                item={'partitionKey': 'speaker', 'rowKey': 'jane-doe-x1y2', 'name': 'Jane Doe'},
                condition_expression=Attr('rowKey').not_exists()
            )
        """
        try:
            put_kwargs = {'Item': item}
            if condition_expression is not None:
                put_kwargs['ConditionExpression'] = condition_expression

            self.table.put_item(**put_kwargs)
            logger.info(f"Put item in {self.table_name}: {item.get(PARTITION_KEY)}/{item.get(ROW_KEY)}")
        except ClientError as e:
            raise map_dynamodb_error(e, "PutItem", self.table_name, item.get(ROW_KEY)) from e

    def delete_item(self, partition_key: str, row_key: str) -> None:
        """
        Delete item by composite key.

        Args:
            partition_key: Partition key value
            row_key: Row key value
        """
        try:
            self.table.delete_item(Key={PARTITION_KEY: partition_key, ROW_KEY: row_key})
            logger.info(f"Deleted item from {self.table_name}: {partition_key}/{row_key}")
        except ClientError as e:
            raise map_dynamodb_error(e, "DeleteItem", self.table_name, row_key) from e

    def move_item(self, item: Dict[str, Any], old_partition_key: str) -> None:
        """
        Move a row to a new partition in one transaction.

        The composite key cannot be changed in place, so the new item is put
        and the old key deleted together.

        Args:
            item: Item to write under its (new) partitionKey
            old_partition_key: Partition the row currently lives in
        """
        self.transact_write_items([
            {
                'Put': {
                    'TableName': self.table_name,
                    'Item': item
                }
            },
            {
                'Delete': {
                    'TableName': self.table_name,
                    'Key': {PARTITION_KEY: old_partition_key, ROW_KEY: item[ROW_KEY]}
                }
            }
        ])
        logger.info(
            f"Moved {item[ROW_KEY]} in {self.table_name} from partition "
            f"{old_partition_key} to {item[PARTITION_KEY]}"
        )

    def transact_write_items(self, transact_items: List[Dict[str, Any]]) -> None:
        """
        Execute transactional write operations.

        Args:
            transact_items: List of transaction items
        """
        try:
            self.dynamodb.meta.client.transact_write_items(
                TransactItems=transact_items
            )
        except ClientError as e:
            raise map_dynamodb_error(e, "TransactWriteItems", self.table_name) from e

    def ensure_table(self) -> bool:
        """
        Create the table with the partitionKey/rowKey schema if it is missing.

        Returns:
            True if the table was created, False if it already existed
        """
        try:
            table = self.dynamodb.create_table(
                TableName=self.table_name,
                KeySchema=[
                    {'AttributeName': PARTITION_KEY, 'KeyType': 'HASH'},
                    {'AttributeName': ROW_KEY, 'KeyType': 'RANGE'}
                ],
                AttributeDefinitions=[
                    {'AttributeName': PARTITION_KEY, 'AttributeType': 'S'},
                    {'AttributeName': ROW_KEY, 'AttributeType': 'S'}
                ],
                BillingMode='PAY_PER_REQUEST'
            )
            table.wait_until_exists()
            self._table = table
            logger.info(f"Created table {self.table_name}")
            return True
        except ClientError as e:
            if e.response['Error']['Code'] == 'ResourceInUseException':
                logger.info(f"Table {self.table_name} already exists")
                return False
            raise map_dynamodb_error(e, "CreateTable", self.table_name) from e


def create_table_gateway(config: SiteConfig, table_name: str) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: Site configuration
        table_name: Base table name (prefixed via config.get_table_name())

    Returns:
        Configured TableGateway instance
    """
    full_table_name = config.get_table_name(table_name)
    return TableGateway(config, full_table_name)
