"""Listener contract module."""

from .listener import IExecutionListener

__all__ = ["IExecutionListener"]
