"""Tests for s3_config_sync.config_loader -- config file discovery and merge."""

import textwrap

import pytest
import yaml

from s3_config_sync.config_loader import (
    discover_config_files,
    interpolate_env_vars,
    interpolate_tree,
    load_hierarchical_config,
)

# -------------------------------------------------------------------------
# Env var interpolation
# -------------------------------------------------------------------------


class TestInterpolateEnvVars:
    """Tests for ${VAR} and ${VAR:-default} substitution."""

    def test_replaces_set_var(self, monkeypatch):
        monkeypatch.setenv("MY_BUCKET", "configs")
        assert interpolate_env_vars("${MY_BUCKET}") == "configs"

    def test_unset_var_replaced_with_empty(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ}") == ""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("UNSET_VAR_XYZ", raising=False)
        assert interpolate_env_vars("${UNSET_VAR_XYZ:-eu-west-1}") == "eu-west-1"

    def test_default_used_when_empty(self, monkeypatch):
        monkeypatch.setenv("EMPTY_VAR", "")
        assert interpolate_env_vars("${EMPTY_VAR:-fallback}") == "fallback"

    def test_embedded_in_text(self, monkeypatch):
        monkeypatch.setenv("STAGE", "prod")
        assert interpolate_env_vars("${STAGE}/app.json") == "prod/app.json"

    def test_literal_dollar_brace_no_closing(self):
        assert interpolate_env_vars("${NO_CLOSE") == "${NO_CLOSE"

    def test_nested_tree(self, monkeypatch):
        monkeypatch.setenv("SECRET", "s3cr3t")
        data = {"aws": {"secret_key": "${SECRET}", "port": 9000}, "l": ["${SECRET}", 1]}
        assert interpolate_tree(data) == {
            "aws": {"secret_key": "s3cr3t", "port": 9000},
            "l": ["s3cr3t", 1],
        }


# -------------------------------------------------------------------------
# Discovery
# -------------------------------------------------------------------------


class TestDiscoverConfigFiles:
    def test_none_found(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert discover_config_files() == []

    def test_project_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("sync: {}\n")
        assert discover_config_files() == [project]

    def test_env_path_comes_first(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        explicit = tmp_path / "custom.yml"
        explicit.write_text("sync: {}\n")
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("sync: {}\n")
        monkeypatch.setenv("S3_CONFIG_SYNC_CONFIG", str(explicit))

        assert discover_config_files() == [explicit.resolve(), project]

    def test_global_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        home = tmp_path / "home"
        monkeypatch.setenv("HOME", str(home))
        global_file = home / ".config" / "s3_config_sync" / "config.yml"
        global_file.parent.mkdir(parents=True)
        global_file.write_text("aws: {}\n")
        assert discover_config_files() == [global_file]


# -------------------------------------------------------------------------
# Hierarchical load
# -------------------------------------------------------------------------


class TestLoadHierarchicalConfig:
    def test_zero_config(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert load_hierarchical_config() == {}

    def test_project_sections_replace_global(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        home = tmp_path / "home"
        monkeypatch.setenv("HOME", str(home))
        global_file = home / ".config" / "s3_config_sync" / "config.yml"
        global_file.parent.mkdir(parents=True)
        global_file.write_text(
            textwrap.dedent(
                """\
                aws:
                  region: us-west-2
                sync:
                  bucket: global-bucket
                  dry_run: true
                """
            )
        )
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("sync:\n  bucket: project-bucket\n")

        merged = load_hierarchical_config()

        assert merged["sync"] == {"bucket": "project-bucket"}
        assert merged["aws"] == {"region": "us-west-2"}

    def test_interpolates_after_merge(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DEPLOY_BUCKET", "from-env")
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("sync:\n  bucket: ${DEPLOY_BUCKET}\n")

        assert load_hierarchical_config()["sync"]["bucket"] == "from-env"

    def test_non_dict_root_skipped(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("- just\n- a list\n")

        assert load_hierarchical_config() == {}

    def test_malformed_yaml_raises(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        project = tmp_path / ".s3_config_sync" / "config.yml"
        project.parent.mkdir()
        project.write_text("sync: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_hierarchical_config()
