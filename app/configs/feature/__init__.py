from typing import Literal

from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings


class RunnerConfig(BaseSettings):
    """
    Configuration for batch request execution
    """

    REQUEST_TIMEOUT: PositiveInt = Field(
        description="Per-request timeout in seconds, measured from each request's own dispatch",
        default=30,
    )

    OUTPUT_FORMAT: Literal["pretty", "json"] = Field(
        description="Report rendering, 'pretty' for terminal output or 'json' for a single summary document",
        default="pretty",
    )

    MAX_CONCURRENCY: PositiveInt | None = Field(
        description="Maximum number of requests in flight at once, unbounded when not set",
        default=None,
    )

    DEFAULT_HEADERS: dict[str, str] = Field(
        description="Headers sent with every request, overridden by headers declared on the request",
        default_factory=dict,
    )

    FOLLOW_REDIRECTS: bool = Field(
        description="Whether redirect responses are followed",
        default=True,
    )

    BODY_PREVIEW_LIMIT: PositiveInt = Field(
        description="Number of characters of a response body shown in pretty output",
        default=500,
    )


class HttpPoolConfig(BaseSettings):
    """
    Connection pool settings for the shared HTTP client
    """

    POOL_MAX_KEEPALIVE: PositiveInt = Field(
        description="Maximum number of idle keep-alive connections kept in the pool",
        default=20,
    )

    POOL_KEEPALIVE_EXPIRY: PositiveFloat = Field(
        description="Seconds an idle keep-alive connection is kept before closing",
        default=30.0,
    )


class LoggingConfig(BaseSettings):
    """
    Configuration for application logging
    """

    LOG_LEVEL: str = Field(
        description="Logging level, default to WARNING so the report is not interleaved with log lines.",
        default="WARNING",
    )

    LOG_FILE: str | None = Field(
        description="File path for log output.",
        default=None,
    )

    LOG_FILE_MAX_SIZE: PositiveInt = Field(
        description="Maximum file size for file rotation retention, the unit is megabytes (MB)",
        default=20,
    )

    LOG_FILE_BACKUP_COUNT: PositiveInt = Field(
        description="Maximum file backup count file rotation retention",
        default=5,
    )

    LOG_FORMAT: str = Field(
        description="Format string for log messages",
        default=(
            "%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] "
            "[%(filename)s:%(lineno)d] %(request_name)s - %(message)s"
        ),
    )

    LOG_DATEFORMAT: str | None = Field(
        description="Date format string for log timestamps",
        default=None,
    )


class FeatureConfig(RunnerConfig, HttpPoolConfig, LoggingConfig):
    pass
