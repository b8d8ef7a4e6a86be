# sensornode/const.py
"""Constants shared by the decode tables, builders and CLI."""

from __future__ import annotations

from enum import Enum

# ────────────────────────────────────────────────────────────────
# LoRaWAN application ports
# ────────────────────────────────────────────────────────────────
PORT_DATA = 1
PORT_DEVICE_INFO = 10
PORT_DOWNLINK = 100

# ────────────────────────────────────────────────────────────────
# packet-type values
# ────────────────────────────────────────────────────────────────
DATA_PACKET = "DATA_PACKET"
DEVICE_INFO = "DEVICE_INFO"
DOWNLINK_RESPONSE = "DOWNLINK_RESPONSE"
UNKNOWN_RESPONSE = "UNKNOWN_RESPONSE"

# ────────────────────────────────────────────────────────────────
# Source tags
# ────────────────────────────────────────────────────────────────
SRC_MAIN = "main"
SRC_DIAGNOSTIC = "diagnostic"
SRC_DOWNLINK = "downlink"
SRC_DEVICE_INFO = "device_info"
SRC_UNKNOWN = "unknown"
SRC_ADC = "adc"
SRC_DIGITAL = "digital"

# Structural tags: hidden from nested output, folded out of flat keys
RESERVED_SOURCES = frozenset(
    {SRC_MAIN, SRC_DIAGNOSTIC, SRC_DOWNLINK, SRC_DEVICE_INFO, SRC_UNKNOWN}
)

SDI_SLOT_COUNT = 10


def sdi_source(command: int) -> str:
    """Source tag for an SDI-12 programming slot, e.g. ``sdi_3``."""
    return f"sdi_{command}"


class OutputType(str, Enum):
    """Projection applied to a decoded record sequence."""

    NESTED = "nested"
    FLAT = "flat"


DEFAULT_OUTPUT_TYPE = OutputType.NESTED
OUTPUT_TYPE_ENVVAR = "SENSORNODE_OUTPUT_TYPE"
