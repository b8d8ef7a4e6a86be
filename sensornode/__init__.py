# sensornode/__init__.py
"""Payload decoders for LoRaWAN environmental sensor nodes."""

from __future__ import annotations

from .buffer import ByteReader, Cursor
from .const import OutputType
from .device import get_decode_table, list_families
from .exception import OutputTypeError, SensorNodeError, UnknownFamilyError
from .float32 import decode_float32
from .protocol import decode, decode_records, decode_uplink, parse_device_msg
from .records import ParameterRecord, build_flat, build_nested, build_output

__version__ = "0.1.0"

__all__ = [
    "ByteReader",
    "Cursor",
    "OutputType",
    "OutputTypeError",
    "ParameterRecord",
    "SensorNodeError",
    "UnknownFamilyError",
    "build_flat",
    "build_nested",
    "build_output",
    "decode",
    "decode_float32",
    "decode_records",
    "decode_uplink",
    "get_decode_table",
    "list_families",
    "parse_device_msg",
]
