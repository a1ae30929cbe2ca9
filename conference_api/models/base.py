"""
Base Model Components and Mixins

Common functionality shared by the session and speaker models.

## Storage Boundary

Rows live in DynamoDB tables whose attributes are camelCase
(``partitionKey``, ``rowKey``, ``videoId``, ``startTime`` ...), while the
Python models use snake_case fields with camelCase aliases. TableEntityMixin
owns the conversion in both directions:

- ``to_table_item()`` dumps by alias, drops None values and serializes the
  fields listed in ``Meta.json_fields`` to JSON strings.
- ``from_table_item()`` turns DynamoDB Numbers (Decimal) back into int/float
  and parses ``Meta.json_fields``; a value that is not a JSON array reads back
  as an empty list.

## Components

- TableMeta: per-model storage conversion settings (JSON-encoded attributes)
- TableEntityMixin: canonical API for DynamoDB serialization/deserialization
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class TableMeta:
    """Base class for per-model storage settings; table names come from SiteConfig."""
    json_fields: Tuple[str, ...] = ()


def _from_dynamodb_number(value: Decimal):
    """DynamoDB Numbers come back as Decimal; integral values become int."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _parse_json_list(value: Any, field_name: str) -> List[Any]:
    """Parse a JSON array string stored in a single attribute."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparsable {field_name} value: {value!r}")
        return []
    if not isinstance(parsed, list):
        logger.warning(f"Ignoring non-list {field_name} value: {value!r}")
        return []
    return parsed


class TableEntityMixin(BaseModel):
    """
    Mixin providing DynamoDB serialization and deserialization functionality.

    Models using it declare camelCase aliases for their fields and may override
    the nested ``Meta`` to list JSON-encoded attributes.
    """

    class Meta(TableMeta):
        pass

    def to_table_item(self) -> Dict[str, Any]:
        """
        Convert model to a DynamoDB-compatible item.

        Returns:
            DynamoDB-compatible dictionary ready for storage

        Example:
            item = session.to_table_item()
            gateway.put_item(item)
        """
        item = self.model_dump(by_alias=True, exclude_none=True)
        for field_name in self.Meta.json_fields:
            if field_name in item:
                item[field_name] = json.dumps(item[field_name])
        return item

    @classmethod
    def from_table_item(cls, item: Dict[str, Any]):
        """
        Create model instance from a DynamoDB item.

        Args:
            item: DynamoDB item dictionary with DynamoDB-specific types

        Returns:
            Model instance with properly converted Python types

        Raises:
            StorageError: If the stored row does not convert to the model
        """
        try:
            converted = {
                key: _from_dynamodb_number(value) if isinstance(value, Decimal) else value
                for key, value in item.items()
            }
            for field_name in cls.Meta.json_fields:
                if field_name in converted:
                    converted[field_name] = _parse_json_list(converted[field_name], field_name)
            return cls.model_validate(converted)

        except Exception as e:
            logger.error(f"Failed to convert DynamoDB item to {cls.__name__}: {e}")
            raise StorageError(f"Failed to convert DynamoDB item to {cls.__name__}: {e}", original_error=e) from e
