"""
Core infrastructure components for table store operations.

- TableGateway: Thin wrapper over boto3 DynamoDB operations on partitionKey/rowKey tables
- Factory function for creating gateways
"""

from .table_gateway import PARTITION_KEY, ROW_KEY, TableGateway, create_table_gateway, map_dynamodb_error

__all__ = [
    "PARTITION_KEY",
    "ROW_KEY",
    "TableGateway",
    "create_table_gateway",
    "map_dynamodb_error",
]
