"""Pydantic models for diff results.

- ``DiffEntry``: a key that was added or removed, with its value.
- ``UpdatedEntry``: a key whose value changed.
- ``DiffReport``: the three ordered lists produced by one run.

All models are frozen.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class DiffEntry(BaseModel):
    """A key present on only one side.

    Attributes:
        key: Configuration key.
        value: Value on the side where the key exists.
    """

    key: str
    value: Any = None

    model_config = {"frozen": True}


class UpdatedEntry(BaseModel):
    """A key present on both sides with different values.

    Attributes:
        key: Configuration key.
        old_value: Value currently published.
        new_value: Value in the desired configuration.
    """

    key: str
    old_value: Any = None
    new_value: Any = None

    model_config = {"frozen": True}


class DiffReport(BaseModel):
    """Difference between the published and desired configurations.

    ``added`` and ``updated`` follow the desired configuration's key order;
    ``removed`` follows the published configuration's key order.
    """

    added: list[DiffEntry] = Field(default_factory=list)
    removed: list[DiffEntry] = Field(default_factory=list)
    updated: list[UpdatedEntry] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.updated)

    def summary(self) -> str:
        """One-line count of changes by kind."""
        return (
            f"{len(self.added)} added, {len(self.removed)} removed, "
            f"{len(self.updated)} updated"
        )
