"""Shared utility helpers for the wildlight project."""

from .files import read_json, safe_remove, safe_rename, write_json

__all__ = [
    "read_json",
    "safe_remove",
    "safe_rename",
    "write_json",
]
