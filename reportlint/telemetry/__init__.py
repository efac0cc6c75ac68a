"""Telemetry helpers.

This package emits structured run events for lint commands.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
