"""Shared pytest fixtures for s3-config-sync tests."""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

import pytest

from s3_config_sync.config import RunInputs
from s3_config_sync.errors import StoreError


class FakeStore:
    """In-memory ``RemoteStore`` replacement for testing.

    Objects live in a ``{(bucket, key): bytes}`` dict. Every call is
    recorded in ``calls`` so tests can assert on ordering, and
    ``fail_on`` makes the named operation raise ``StoreError``.
    """

    def __init__(
        self,
        buckets: Optional[Set[str]] = None,
        objects: Optional[Dict[Tuple[str, str], bytes]] = None,
    ) -> None:
        self.buckets: Set[str] = set(buckets or ())
        self.objects: Dict[Tuple[str, str], bytes] = dict(objects or {})
        self.calls: List[str] = []
        self.writes: List[Tuple[str, str, bytes, Optional[str]]] = []
        self.fail_on: Set[str] = set()

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise StoreError(f"simulated {name} failure")

    async def container_exists(self, container: str) -> bool:
        self._record("container_exists")
        return container in self.buckets

    async def object_exists(self, container: str, key: str) -> bool:
        self._record("object_exists")
        return (container, key) in self.objects

    async def read_object(self, container: str, key: str) -> bytes:
        self._record("read_object")
        try:
            return self.objects[(container, key)]
        except KeyError:
            raise StoreError(f"s3://{container}/{key} vanished") from None

    async def write_object(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        self._record("write_object")
        self.writes.append((container, key, data, content_type))
        self.objects[(container, key)] = data


@pytest.fixture
def fake_store():
    """Store with an empty ``test-bucket``."""
    return FakeStore(buckets={"test-bucket"})


@pytest.fixture
def make_inputs(tmp_path):
    """Factory for ``RunInputs`` whose source lives under *tmp_path*."""

    def _make(**overrides) -> RunInputs:
        values = {
            "bucket": "test-bucket",
            "source": str(tmp_path / "test-source.json"),
            "destination": "test-destination.json",
            "access_key": "test-access-key",
            "secret_key": "test-secret-key",
            "region": "us-east-1",
            "dry_run": False,
        }
        values.update(overrides)
        return RunInputs(**values)

    return _make


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep the developer's shell and config files out of every test."""
    for name in (
        "S3_CONFIG_SYNC_BUCKET",
        "S3_CONFIG_SYNC_SOURCE",
        "S3_CONFIG_SYNC_DESTINATION",
        "S3_CONFIG_SYNC_DRY_RUN",
        "S3_CONFIG_SYNC_ENDPOINT_URL",
        "S3_CONFIG_SYNC_CONFIG",
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "INPUT_BUCKET",
        "INPUT_SOURCE",
        "INPUT_DESTINATION",
        "INPUT_AWS_ACCESS_KEY",
        "INPUT_AWS_SECRET_KEY",
        "INPUT_AWS_REGION",
        "INPUT_DRY_RUN",
        "GITHUB_ACTIONS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


@pytest.fixture
def make_store():
    """Factory for ``FakeStore`` instances with custom contents."""
    return FakeStore
