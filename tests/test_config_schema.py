"""Tests for s3_config_sync.config_schema -- Pydantic config file models."""

import pytest
from pydantic import ValidationError

from s3_config_sync.config_schema import (
    LoggingConfig,
    UnifiedConfig,
    build_config,
    to_input_fallbacks,
)


class TestBuildConfig:
    def test_empty_dict_gives_defaults(self):
        config = build_config({})
        assert config == UnifiedConfig()
        assert config.sync.dry_run is False
        assert config.logging.level == "INFO"
        assert config.logging.format == "text"

    def test_sections_parsed(self):
        config = build_config(
            {
                "sync": {"bucket": "configs", "source": "app.toml", "dry_run": True},
                "aws": {"region": "eu-central-1"},
                "logging": {"level": "DEBUG", "format": "json"},
            }
        )
        assert config.sync.bucket == "configs"
        assert config.sync.dry_run is True
        assert config.aws.region == "eu-central-1"
        assert config.logging.format == "json"

    def test_wrong_section_shape_rejected(self):
        with pytest.raises(ValidationError):
            build_config({"sync": "not-a-mapping"})

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")

    def test_models_are_frozen(self):
        config = UnifiedConfig()
        with pytest.raises(ValidationError):
            config.sync.bucket = "other"  # type: ignore[misc]


class TestToInputFallbacks:
    def test_drops_unset_values(self):
        config = build_config({"sync": {"bucket": "configs"}})
        assert to_input_fallbacks(config) == {"bucket": "configs", "dry_run": False}

    def test_flattens_aws_section(self):
        config = build_config(
            {"aws": {"access_key": "AKIA", "endpoint_url": "http://minio:9000"}}
        )
        fallbacks = to_input_fallbacks(config)
        assert fallbacks["access_key"] == "AKIA"
        assert fallbacks["endpoint_url"] == "http://minio:9000"


class TestUnknownKeys:
    def test_non_string_top_level_key_rejected(self):
        with pytest.raises(ValidationError):
            build_config({1: "x"})

    def test_unknown_section_rejected(self):
        with pytest.raises(ValidationError):
            build_config({"sinc": {"bucket": "configs"}})
