"""Filesystem persistence helpers."""

from goalkeeper.core.store.local import JsonDocument

__all__ = ["JsonDocument"]
