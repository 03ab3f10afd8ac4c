"""Run inputs for one reconciliation.

Each field is taken from, highest precedence first:
    CLI args > environment variables (.env loaded first) >
    GitHub Actions ``INPUT_*`` variables > YAML config > built-in default

Environment variables:
    S3_CONFIG_SYNC_BUCKET: Target bucket
    S3_CONFIG_SYNC_SOURCE: Local configuration file
    S3_CONFIG_SYNC_DESTINATION: Object key to publish to
    AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: Credentials
    AWS_REGION: Bucket region (default: us-east-1)
    S3_CONFIG_SYNC_DRY_RUN: Report only, never publish (default: false)
    S3_CONFIG_SYNC_ENDPOINT_URL: Endpoint for S3-compatible services

Missing values are left empty here; the engine rejects them before any
I/O so that the error names the field.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"

# Inputs that must be non-empty, in validation order
REQUIRED_FIELDS = ("bucket", "source", "destination", "access_key", "secret_key")

# field -> (environment variables, action input name)
_SOURCES: dict[str, tuple[tuple[str, ...], str]] = {
    "bucket": (("S3_CONFIG_SYNC_BUCKET",), "BUCKET"),
    "source": (("S3_CONFIG_SYNC_SOURCE",), "SOURCE"),
    "destination": (("S3_CONFIG_SYNC_DESTINATION",), "DESTINATION"),
    "access_key": (("AWS_ACCESS_KEY_ID",), "AWS_ACCESS_KEY"),
    "secret_key": (("AWS_SECRET_ACCESS_KEY",), "AWS_SECRET_KEY"),
    "region": (("AWS_REGION", "AWS_DEFAULT_REGION"), "AWS_REGION"),
    "dry_run": (("S3_CONFIG_SYNC_DRY_RUN",), "DRY_RUN"),
    "endpoint_url": (("S3_CONFIG_SYNC_ENDPOINT_URL",), ""),
}


@dataclass
class RunInputs:
    bucket: str
    source: str
    destination: str
    access_key: str
    secret_key: str
    region: str = DEFAULT_REGION
    dry_run: bool = False
    endpoint_url: str | None = None


def parse_bool(value: str | None) -> bool | None:
    """Return True/False for a textual flag, or None if unset."""
    if value is None or not value.strip():
        return None
    return value.strip().lower() in ("true", "1", "yes", "on")


def _from_environment(field: str) -> str | None:
    env_names, input_name = _SOURCES[field]
    for name in env_names:
        value = os.getenv(name)
        if value:
            return value
    if input_name:
        # GitHub Actions exposes `with:` inputs as INPUT_<NAME>
        value = os.getenv(f"INPUT_{input_name}")
        if value:
            return value
    return None


def load_inputs(
    bucket: str | None = None,
    source: str | None = None,
    destination: str | None = None,
    access_key: str | None = None,
    secret_key: str | None = None,
    region: str | None = None,
    dry_run: bool = False,
    endpoint_url: str | None = None,
    yaml_fallbacks: dict | None = None,
) -> RunInputs:
    """Resolve run inputs from all configuration sources.

    The caller is responsible for calling ``load_dotenv()`` first.

    Args:
        bucket, source, destination, access_key, secret_key, region,
            endpoint_url: CLI overrides; ``None`` means "not given".
        dry_run: CLI ``--dry-run`` flag. When ``False`` the environment
            and config file still get a say.
        yaml_fallbacks: Flat dict of values from the config file, keyed
            by ``RunInputs`` field name.

    Returns:
        A ``RunInputs``. Required fields may be empty strings.
    """
    fb = yaml_fallbacks or {}
    cli = {
        "bucket": bucket,
        "source": source,
        "destination": destination,
        "access_key": access_key,
        "secret_key": secret_key,
        "region": region,
        "endpoint_url": endpoint_url,
    }

    resolved: dict[str, str | None] = {}
    for field, override in cli.items():
        value = override or _from_environment(field) or fb.get(field)
        resolved[field] = value.strip() if isinstance(value, str) else value

    if dry_run:
        final_dry_run = True
    else:
        env_dry_run = parse_bool(_from_environment("dry_run"))
        if env_dry_run is not None:
            final_dry_run = env_dry_run
        else:
            final_dry_run = bool(fb.get("dry_run", False))

    inputs = RunInputs(
        bucket=resolved["bucket"] or "",
        source=resolved["source"] or "",
        destination=resolved["destination"] or "",
        access_key=resolved["access_key"] or "",
        secret_key=resolved["secret_key"] or "",
        region=resolved["region"] or DEFAULT_REGION,
        dry_run=final_dry_run,
        endpoint_url=resolved["endpoint_url"] or None,
    )
    logger.debug(
        "Resolved inputs: bucket=%s source=%s destination=%s region=%s dry_run=%s",
        inputs.bucket,
        inputs.source,
        inputs.destination,
        inputs.region,
        inputs.dry_run,
    )
    return inputs
