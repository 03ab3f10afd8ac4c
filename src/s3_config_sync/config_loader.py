"""
Config file discovery and loading for s3_config_sync.

Finds YAML config files by convention, merges them with "nearest wins"
semantics and expands ``${VAR}`` references from the environment.

Usage:
    from s3_config_sync.config_loader import load_hierarchical_config

    raw = load_hierarchical_config()
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "S3_CONFIG_SYNC_CONFIG"
PROJECT_CONFIG = Path(".s3_config_sync") / "config.yml"
GLOBAL_CONFIG = Path(".config") / "s3_config_sync" / "config.yml"

# ---------------------------------------------------------------------------
# Env var interpolation
# ---------------------------------------------------------------------------

# Matches ${VAR} and ${VAR:-default}
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+?)(?::-(.*?))?\}")


def interpolate_env_vars(value: str) -> str:
    """Replace ``${VAR}`` and ``${VAR:-default}`` with environment values.

    An unset or empty variable becomes *default* when one is given and
    the empty string otherwise. A ``${`` without a closing brace is kept.
    """

    def _replace(match: re.Match) -> str:
        env_val = os.environ.get(match.group(1))
        if env_val:
            return env_val
        return match.group(2) or ""

    return _ENV_VAR_PATTERN.sub(_replace, value)


def interpolate_tree(obj: Any) -> Any:
    """Apply ``interpolate_env_vars`` to every string in a nested structure."""
    if isinstance(obj, str):
        return interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: interpolate_tree(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [interpolate_tree(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def discover_config_files() -> list[Path]:
    """Return existing config files, highest precedence first.

    Search order:
        1. ``S3_CONFIG_SYNC_CONFIG`` env var (explicit path)
        2. ``.s3_config_sync/config.yml`` in CWD
        3. ``~/.config/s3_config_sync/config.yml``
    """
    candidates: list[Path] = []

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser().resolve())

    candidates.append(Path.cwd() / PROJECT_CONFIG)
    candidates.append(Path.home() / GLOBAL_CONFIG)

    return [p for p in candidates if p.exists()]


def load_yaml_file(path: Path) -> Any:
    """Parse one YAML config file with the safe loader."""
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def load_hierarchical_config() -> dict[str, Any]:
    """Load and merge all discovered config files.

    Files are applied from lowest precedence to highest; each file's
    top-level sections replace (not deep-merge) earlier ones. Interpolation
    runs after the merge.

    Returns an empty dict when no config file exists.
    """
    paths = discover_config_files()

    if not paths:
        logger.debug("No config files found, using defaults")
        return {}

    merged: dict[str, Any] = {}
    for path in reversed(paths):
        logger.debug("Loading config: %s", path)
        try:
            data = load_yaml_file(path)
        except Exception:
            logger.exception("Failed to load config file %s", path)
            raise

        if isinstance(data, dict):
            merged.update(data)
        elif data is not None:
            logger.warning(
                "Config file %s has non-dict root (%s), skipping",
                path,
                type(data).__name__,
            )

    return interpolate_tree(merged)
