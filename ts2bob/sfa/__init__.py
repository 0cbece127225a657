"""Symbolic transforms producing SFA words from sliding windows."""

from .transform import MIN_WINDOW_LENGTH, SFA, SymbolicTransform

__all__ = ["MIN_WINDOW_LENGTH", "SFA", "SymbolicTransform"]
