"""Tracker module."""

from .tracker import IUniqueIdTracker, UniqueIdTrackingListener

__all__ = ["IUniqueIdTracker", "UniqueIdTrackingListener"]
