"""Shuttlecock inventory tracking with FIFO cost settlement."""

__version__ = "1.0.0"
