"""Snapshot serialization exports."""

from .snapshot_filter import NULLED_KEYS, OMITTED_KEYS, serialization_filter

__all__ = ["NULLED_KEYS", "OMITTED_KEYS", "serialization_filter"]
