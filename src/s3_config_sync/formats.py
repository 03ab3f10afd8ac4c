"""Configuration formats: extension resolution and text codecs.

A ``FormatCodec`` is bound to one ``ConfigFormat`` at construction and
keeps that format's parse/serialize pair for its whole lifetime, so an
unsupported format fails immediately rather than on first use.

Usage:
    from s3_config_sync.formats import FormatCodec, resolve_format

    codec = FormatCodec(resolve_format("settings.yml"))
    config = codec.parse(text)
"""

from __future__ import annotations

import datetime
import json
import tomllib
from enum import Enum
from typing import Any, Callable, NamedTuple

import tomli_w
import yaml

from .errors import ParseError, SerializationError, UnsupportedFormatError

Configuration = dict[str, Any]


class ConfigFormat(str, Enum):
    """Supported configuration formats."""

    TOML = "toml"
    YAML = "yaml"
    JSON = "json"


_EXTENSION_FORMAT_MAP: dict[str, ConfigFormat] = {
    "toml": ConfigFormat.TOML,
    "yaml": ConfigFormat.YAML,
    "yml": ConfigFormat.YAML,
    "json": ConfigFormat.JSON,
    "ejson": ConfigFormat.JSON,
}


def resolve_format(file_name: str) -> ConfigFormat:
    """Map a file name to its configuration format by extension.

    The extension is everything after the last ``.``, compared
    case-insensitively. A name without a dot is treated as one big
    extension and therefore never matches.

    Args:
        file_name: Local path or object key.

    Returns:
        The matching ``ConfigFormat``.

    Raises:
        UnsupportedFormatError: If the extension is missing or unknown.
    """
    extension = file_name.rsplit(".", 1)[-1].lower()
    try:
        return _EXTENSION_FORMAT_MAP[extension]
    except KeyError:
        raise UnsupportedFormatError(extension) from None


# ---------------------------------------------------------------------------
# Per-format parse/serialize
# ---------------------------------------------------------------------------


def _parse_toml(text: str) -> Any:
    return tomllib.loads(text)


def _serialize_toml(config: Configuration) -> str:
    return tomli_w.dumps(config)


def _parse_yaml(text: str) -> Any:
    data = yaml.safe_load(text)
    # An empty document is an empty configuration
    return {} if data is None else data


def _serialize_yaml(config: Configuration) -> str:
    return yaml.safe_dump(
        config,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _json_default(value: Any) -> str:
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(
        f"Object of type {type(value).__name__} is not JSON serializable"
    )


def _serialize_json(config: Configuration) -> str:
    return (
        json.dumps(
            config, indent=2, ensure_ascii=False, default=_json_default
        )
        + "\n"
    )


class _Capability(NamedTuple):
    parse: Callable[[str], Any]
    serialize: Callable[[Configuration], str]
    parse_errors: tuple[type[Exception], ...]
    content_type: str


_CAPABILITIES: dict[ConfigFormat, _Capability] = {
    ConfigFormat.TOML: _Capability(
        _parse_toml,
        _serialize_toml,
        (tomllib.TOMLDecodeError,),
        "application/toml",
    ),
    ConfigFormat.YAML: _Capability(
        _parse_yaml,
        _serialize_yaml,
        (yaml.YAMLError,),
        "application/yaml",
    ),
    ConfigFormat.JSON: _Capability(
        _parse_json,
        _serialize_json,
        (json.JSONDecodeError,),
        "application/json",
    ),
}


class FormatCodec:
    """Parse and serialize configurations in one fixed format.

    Args:
        fmt: A ``ConfigFormat`` or its string value (``"toml"``,
            ``"yaml"``, ``"json"``).

    Raises:
        UnsupportedFormatError: If *fmt* names no known format.
    """

    def __init__(self, fmt: ConfigFormat | str) -> None:
        try:
            self.format = ConfigFormat(fmt)
        except ValueError:
            raise UnsupportedFormatError(str(fmt)) from None
        self._capability = _CAPABILITIES[self.format]

    def __repr__(self) -> str:
        return f"FormatCodec({self.format.value!r})"

    @property
    def content_type(self) -> str:
        """MIME type used when publishing this format."""
        return self._capability.content_type

    def parse(self, text: str, origin: str | None = None) -> Configuration:
        """Parse *text* into a configuration mapping.

        Args:
            text: Raw configuration text.
            origin: Where the text came from, used in error messages.

        Raises:
            ParseError: If the text is malformed or its root is not a
                mapping.
        """
        where = f" in {origin}" if origin else ""
        try:
            data = self._capability.parse(text)
        except self._capability.parse_errors as exc:
            raise ParseError(
                f"Invalid {self.format.value} configuration{where}: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise ParseError(
                f"Invalid {self.format.value} configuration{where}: "
                f"root must be a mapping, got {type(data).__name__}"
            )
        return data

    def serialize(self, config: Configuration) -> str:
        """Render *config* as text in the bound format.

        Raises:
            SerializationError: If a value has no representation in the
                format (for example ``null`` in TOML).
        """
        try:
            return self._capability.serialize(config)
        except (TypeError, ValueError, yaml.YAMLError) as exc:
            raise SerializationError(
                f"Cannot serialize configuration as {self.format.value}: {exc}"
            ) from exc
