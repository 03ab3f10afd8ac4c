"""Key-level diff between two configuration mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .models import DiffEntry, DiffReport, UpdatedEntry


def values_differ(old: Any, new: Any) -> bool:
    """Strict inequality used to decide whether a key was updated.

    Values of different types always differ. Mappings and sequences are
    compared by identity, so two separately parsed tables are reported as
    different even when their contents match. Dates and times are plain
    scalars here and compare by value, so an unchanged TOML timestamp is
    not reported as updated.
    """
    if old is new:
        return False
    if type(old) is not type(new):
        return True
    if isinstance(old, (dict, list, tuple, set)):
        return True
    return old != new


def diff_configs(
    old: Mapping[str, Any], new: Mapping[str, Any]
) -> DiffReport:
    """Compare the published configuration *old* with the desired *new*.

    Keys only in *new* are added and keys only in *old* are removed. Keys
    in both whose values differ (see ``values_differ``) are updated.
    Unchanged keys are left out.

    Returns:
        A ``DiffReport``; ``added``/``updated`` in *new*'s key order and
        ``removed`` in *old*'s key order.
    """
    added: list[DiffEntry] = []
    updated: list[UpdatedEntry] = []
    removed: list[DiffEntry] = []

    for key, value in new.items():
        if key not in old:
            added.append(DiffEntry(key=str(key), value=value))
        elif values_differ(old[key], value):
            updated.append(
                UpdatedEntry(
                    key=str(key), old_value=old[key], new_value=value
                )
            )

    for key, value in old.items():
        if key not in new:
            removed.append(DiffEntry(key=str(key), value=value))

    return DiffReport(added=added, removed=removed, updated=updated)
