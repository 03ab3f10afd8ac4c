"""Schema for the optional YAML config file.

Every field is optional so a missing file (or a file covering only some
sections) is valid; CLI arguments and environment variables fill in the
rest at run time.

Usage:
    from s3_config_sync.config_schema import build_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SyncConfig(BaseModel):
    """What to publish and where."""

    bucket: str | None = Field(default=None, description="Target S3 bucket")
    source: str | None = Field(
        default=None, description="Local desired-state configuration file"
    )
    destination: str | None = Field(
        default=None, description="Object key of the published configuration"
    )
    dry_run: bool = Field(
        default=False, description="Report differences without publishing"
    )

    model_config = {"frozen": True}


class AwsConfig(BaseModel):
    """S3 connection settings.

    Keep credentials out of committed files; use ``${VAR}`` interpolation
    or environment variables instead.
    """

    access_key: str | None = Field(default=None, description="AWS access key id")
    secret_key: str | None = Field(
        default=None, description="AWS secret access key"
    )
    region: str | None = Field(default=None, description="AWS region")
    endpoint_url: str | None = Field(
        default=None, description="Endpoint for S3-compatible services"
    )

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
        format: ``text`` or ``json``.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    format: str = Field(default="text", pattern="^(text|json)$")

    model_config = {"frozen": True}


class UnifiedConfig(BaseModel):
    """Top-level config file model; ``UnifiedConfig()`` is always valid.

    Unknown top-level sections (including non-string keys) are rejected.
    """

    sync: SyncConfig = Field(default_factory=SyncConfig)
    aws: AwsConfig = Field(default_factory=AwsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True, "extra": "forbid"}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the merged raw config dict.

    Raises:
        pydantic.ValidationError: If a section has the wrong shape or the
            file has an unknown top-level key.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig.model_validate(raw_data)


def to_input_fallbacks(unified: UnifiedConfig) -> dict:
    """Flatten the ``sync`` and ``aws`` sections into ``load_inputs`` fallbacks.

    ``None`` values are dropped so they never shadow a built-in default.
    """
    flat = {**unified.sync.model_dump(), **unified.aws.model_dump()}
    return {k: v for k, v in flat.items() if v is not None}
