"""Helpers shared by the store transport and local file access."""

from .async_utils import run_sync

__all__ = ["run_sync"]
