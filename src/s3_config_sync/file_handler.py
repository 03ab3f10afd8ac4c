"""Local source access: path checks and encoding-aware reads.

The desired configuration lives on the local filesystem. Sync functions
do the work; ``read_source_async`` composes them through ``run_sync`` so
the engine can await the read.
"""

import logging
from pathlib import Path

from charset_normalizer import from_bytes

from s3_config_sync.core.async_utils import run_sync
from s3_config_sync.errors import SourceNotFoundError

logger = logging.getLogger(__name__)


def validate_source_path(path_str: str) -> Path:
    """Resolve *path_str* and make sure it points at a regular file.

    Relative paths are resolved against the current working directory,
    which in CI is the checked-out workspace.

    Raises:
        SourceNotFoundError: If nothing exists at the path, or it is not
            a file.
    """
    resolved = Path(path_str).expanduser().resolve()
    if not resolved.is_file():
        raise SourceNotFoundError(path_str)
    return resolved


def read_file_with_encoding(path: Path) -> tuple[str, str]:
    """Read a file with automatic encoding detection.

    Reads raw bytes first, then uses charset-normalizer to detect encoding.
    Defaults to UTF-8 for empty files or when detection fails.

    Args:
        path: Path to the file to read.

    Returns:
        Tuple of (content_string, detected_encoding).
    """
    raw = path.read_bytes()
    if not raw:
        return ("", "utf-8")

    result = from_bytes(raw).best()
    if result is None:
        encoding = "utf-8"
        content = raw.decode(encoding, errors="replace")
    else:
        encoding = result.encoding
        # ascii is a strict subset of utf-8
        if encoding == "ascii":
            encoding = "utf-8"
        content = str(result)
    return (content, encoding)


def read_source(path_str: str) -> str:
    """Validate and read the local configuration file.

    Raises:
        SourceNotFoundError: If the file does not exist.
    """
    resolved = validate_source_path(path_str)
    content, encoding = read_file_with_encoding(resolved)
    logger.debug(
        "Read %d characters from %s (%s)", len(content), resolved, encoding
    )
    return content


async def read_source_async(path_str: str) -> str:
    """Async wrapper around ``read_source``."""
    return await run_sync(read_source, path_str)
