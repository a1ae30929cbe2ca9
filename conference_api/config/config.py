import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


class SiteConfig(BaseModel):
    """Configuration for the table store, the YouTube client and the site itself."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    # Storage namespace: every table name is prefixed with the account name
    storage_account_name: str = Field(
        default_factory=lambda: os.getenv("STORAGE_ACCOUNT_NAME", "azcorestorage2026"),
        description="Storage account name used as the table name prefix"
    )

    schedule_table: str = Field(
        default_factory=lambda: os.getenv("SCHEDULE_TABLE", "VideoSchedule"),
        description="Base name of the session table"
    )

    speakers_table: str = Field(
        default_factory=lambda: os.getenv("SPEAKERS_TABLE", "Speakers"),
        description="Base name of the speaker table"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default=3,
        description="Number of retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default=10.0,
        description="Request timeout in seconds"
    )

    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, staging, prod, test)"
    )

    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("SITE_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for request handling and table scans"
    )

    # Site settings
    site_timezone: str = Field(
        default_factory=lambda: os.getenv("SITE_TIMEZONE", "America/New_York"),
        description="Timezone the public schedule is displayed in"
    )

    # YouTube Data API settings
    youtube_api_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("YOUTUBE_API_KEY"),
        description="Default API key for playlist imports"
    )

    youtube_api_url: str = Field(
        default_factory=lambda: os.getenv("YOUTUBE_API_URL", "https://www.googleapis.com/youtube/v3"),
        description="Base URL of the YouTube Data API"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('storage_account_name')
    @classmethod
    def validate_storage_account(cls, v):
        """Validate the storage account name is usable in a table name."""
        if not v or not v.replace('-', '').replace('_', '').replace('.', '').isalnum():
            raise ValueError("Storage account name must be non-empty and contain only letters, digits, '-', '_' or '.'")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'staging', 'prod', 'test']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('site_timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Validate timezone string."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid timezone: {v}. Please use a valid IANA timezone identifier.") from None
        return v

    def get_table_name(self, base_name: str) -> str:
        """Get the full table name with storage account prefix and environment.

        Args:
            base_name: Base table name

        Returns:
            Full table name, e.g. 'azcorestorage2026_dev_VideoSchedule'
        """
        parts = [self.storage_account_name]

        if self.environment != "prod":
            parts.append(self.environment)

        parts.append(base_name)

        return "_".join(parts)

    @classmethod
    def from_env(cls) -> 'SiteConfig':
        """Create configuration from environment variables.

        Returns:
            SiteConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls) -> 'SiteConfig':
        """Create configuration for DynamoDB Local.

        Returns:
            SiteConfig instance configured for local development
        """
        return cls(
            aws_access_key_id="local",
            aws_secret_access_key="local",
            region_name="us-east-1",
            endpoint_url="http://localhost:8000",
            environment="dev",
            enable_debug_logging=True
        )

    model_config = ConfigDict(
        validate_assignment=True
    )
