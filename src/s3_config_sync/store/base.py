"""Remote object-store contract used by the reconciliation engine."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RemoteStore(Protocol):
    """Container + key object storage.

    ``container_exists`` and ``object_exists`` return ``False`` only when
    the backend confirms the target is absent; every other failure, and
    any failure of ``read_object``/``write_object``, raises ``StoreError``.
    """

    async def container_exists(self, container: str) -> bool:
        """Return whether *container* exists."""
        ...

    async def object_exists(self, container: str, key: str) -> bool:
        """Return whether *key* exists inside *container*."""
        ...

    async def read_object(self, container: str, key: str) -> bytes:
        """Return the full contents of *key*."""
        ...

    async def write_object(
        self,
        container: str,
        key: str,
        data: bytes,
        content_type: str | None = None,
    ) -> None:
        """Replace *key* with *data*."""
        ...
