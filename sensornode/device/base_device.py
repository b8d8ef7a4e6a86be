# sensornode/device/base_device.py
"""Module defining the base decode table shared by all node families."""

from __future__ import annotations

import logging
import math
from abc import ABC, ABCMeta, abstractmethod
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from ..buffer import ByteOrder, ByteReader, Cursor, Payload
from ..const import (
    DEVICE_INFO,
    DOWNLINK_RESPONSE,
    PORT_DATA,
    PORT_DEVICE_INFO,
    PORT_DOWNLINK,
    SRC_DEVICE_INFO,
    SRC_DOWNLINK,
    SRC_MAIN,
    SRC_UNKNOWN,
    UNKNOWN_RESPONSE,
)
from ..records import ParameterRecord
from .sdi12 import SdiSlotTable


class _classproperty(property):
    def __get__(self, owner_self: object, owner_cls: ABCMeta) -> str:  # type: ignore
        ret: str = self.fget(owner_cls)  # type: ignore
        return ret


# ────────────────────────────────────────────────────────────────
# Value helpers
# ────────────────────────────────────────────────────────────────

def round_fixed(value: float, places: int) -> float:
    """
    Round half away from zero on the exact binary value.
    NaN and ±inf pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    q = Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(q)


def milli(raw: int) -> float:
    """Thousandths to units, 3 dp (mV -> V, m°C -> °C)."""
    return round_fixed(raw / 1000, 3)


def tilt_offset(axis: float, reference: float) -> float:
    """
    Offset from vertical in degrees for one accelerometer axis pair:
      angle  = |atan(axis / reference)| in degrees
      offset = +(90 - angle) if reference < 0 else -(90 - angle)
    """
    if reference == 0:
        ratio = math.nan if axis == 0 else math.copysign(math.inf, axis)
    else:
        ratio = axis / reference
    angle = abs(math.atan(ratio) * (180 / math.pi))
    offset = 90 - angle
    return round_fixed(offset if reference < 0 else 0 - offset, 3)


# ────────────────────────────────────────────────────────────────
# Base decode table
# ────────────────────────────────────────────────────────────────

class BaseDecodeTable(ABC):
    """
    Port dispatch shared by every node family.

    Subclasses implement :meth:`decode_data` for port 1 and tune the shared
    branches through class attributes:

    * ``byteorder``: endianness of multi-byte port 1 fields
    * ``emit_device_identity``: emit ``product-id``/``batch-number`` on port 10
      (the bytes are consumed either way)
    * ``emit_raw_payload``: add the undecoded bytes to unknown-port responses
    """

    _model_name: str | None = None
    _model_codes: list[str] = []
    _description: str = ""

    byteorder: ByteOrder = "big"
    emit_device_identity: bool = True
    emit_raw_payload: bool = True
    sdi_slots: SdiSlotTable = SdiSlotTable()

    def __init__(self) -> None:
        assert self._model_name is not None
        self._logger = logging.getLogger(f"sensornode.device.{self._model_name}")

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self._model_name}>"

    @_classproperty
    def model_name(self) -> str | None:
        return self._model_name

    @_classproperty
    def model_codes(self) -> list[str]:
        return self._model_codes

    @_classproperty
    def description(self) -> str:
        return self._description

    def cursor(self, reader: ByteReader, offset: int = 0) -> Cursor:
        return Cursor(reader, offset, self.byteorder)

    # Entry point

    def decode(self, reader: ByteReader | Payload, port: int) -> List[ParameterRecord]:
        """Decode one uplink into records, in wire order."""
        if not isinstance(reader, ByteReader):
            reader = ByteReader(reader)

        if port == PORT_DATA:
            records = self.decode_data(reader)
        elif port == PORT_DEVICE_INFO:
            records = self.decode_device_info(reader)
        elif port == PORT_DOWNLINK:
            records = self.decode_downlink(reader)
        else:
            records = self.decode_unknown(reader)

        self._logger.debug(
            "port %s: %d byte(s) -> %d record(s), %d overrun read(s)",
            port, reader.length, len(records), reader.overrun_reads,
        )
        return records

    @abstractmethod
    def decode_data(self, reader: ByteReader) -> List[ParameterRecord]:
        """Port 1 measurement payload."""

    def decode_device_info(self, reader: ByteReader) -> List[ParameterRecord]:
        cur = Cursor(reader)  # always big-endian
        records = [ParameterRecord("packet-type", 0, DEVICE_INFO, SRC_MAIN)]
        product_id = cur.uint32()
        batch_number = cur.uint32()
        if self.emit_device_identity:
            records.append(ParameterRecord("product-id", 0, product_id, SRC_DEVICE_INFO))
            records.append(ParameterRecord("batch-number", 0, batch_number, SRC_DEVICE_INFO))
        records.append(ParameterRecord("software-version", 0, cur.uint32(), SRC_DEVICE_INFO))
        return records

    def decode_downlink(self, reader: ByteReader) -> List[ParameterRecord]:
        # one character per byte
        text = reader.payload.decode("latin-1")
        return [
            ParameterRecord("packet-type", 0, DOWNLINK_RESPONSE, SRC_MAIN),
            ParameterRecord("downlink-response", 0, text, SRC_DOWNLINK),
        ]

    def decode_unknown(self, reader: ByteReader) -> List[ParameterRecord]:
        records = [ParameterRecord("packet-type", 0, UNKNOWN_RESPONSE, SRC_MAIN)]
        if self.emit_raw_payload:
            records.append(ParameterRecord("raw-payload", 0, reader.slice(0, reader.length), SRC_UNKNOWN))
        return records

    def decode_sdi(self, command: int, cursor: Cursor) -> List[ParameterRecord]:
        """Dispatch to SDI-12 programming slot ``command`` (0..9)."""
        if command not in self.sdi_slots:
            self._logger.debug("command %d is not an SDI-12 slot", command)
            return []
        return self.sdi_slots.decode(command, cursor)
