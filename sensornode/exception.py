# sensornode/exception.py
"""Exceptions for sensornode.

Decoding never raises for payload content; these cover caller mistakes only.
"""

from __future__ import annotations


class SensorNodeError(Exception):
    """Base class for sensornode errors."""


class UnknownFamilyError(SensorNodeError, KeyError):
    """No decode table is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown device family: {self.name!r}"


class OutputTypeError(SensorNodeError, ValueError):
    """Output type is neither ``nested`` nor ``flat``."""
