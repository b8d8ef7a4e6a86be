# sensornode/device/mfr_node.py
"""MFR-Node decode tables.

Port 1 starts with a charge/fault byte and a header byte; the header selects
the rest of the layout (big-endian)::

    0x10  diagnostics   u32 uptime, u16 battery, u16 solar, u32 frequency
    0x20  analog        4 x ADC microvolts
    0x40  digital       4 x u32 pulse counters (4, 3, 2, 1)
    0x8n  SDI-12        slot n (0..9)

Two firmware windows are supported: ``mfr-node-r2`` (<= R2.6.8) and
``mfr-node-r3`` (>= R2.6.9, signed + calibrated ADC readings).
"""

from __future__ import annotations

from typing import List

from ..buffer import ByteReader, Cursor
from ..const import DATA_PACKET, SRC_ADC, SRC_DIAGNOSTIC, SRC_DIGITAL, SRC_MAIN
from ..records import ParameterRecord
from .base_device import BaseDecodeTable, milli

HEADER_DIAGNOSTIC = 0x10
HEADER_ANALOG = 0x20
HEADER_DIGITAL = 0x40
HEADER_SDI = 0x80

MIN_DATA_LENGTH = 3


def header_code(header: int) -> int:
    """Header byte rendered as two decimal digits, e.g. 0x10 -> 10, 0x8C -> 92."""
    return (header // 16) * 10 + header % 16


class _MFRNode(BaseDecodeTable):
    """Multi-function node: analog, digital and SDI-12 inputs."""

    signed_adc: bool = False
    emit_charge_state: bool = True
    # frequency readings at or below this are "no sensor attached"
    min_frequency: int | None = None

    def decode_data(self, reader: ByteReader) -> List[ParameterRecord]:
        cur = self.cursor(reader)
        charge_fault = cur.uint8()
        header = cur.uint8()

        records = [ParameterRecord("packet-type", 0, DATA_PACKET, SRC_MAIN)]
        if self.emit_charge_state:
            records.append(ParameterRecord("payload-version", 0, (charge_fault & 0xF0) >> 4, SRC_MAIN))
            records.append(ParameterRecord("charging-state", 0, charge_fault & 1, SRC_MAIN))
            records.append(ParameterRecord("fault", 0, (charge_fault & 2) >> 1, SRC_MAIN))
        records.append(ParameterRecord("header", 0, header_code(header), SRC_MAIN))

        if reader.length < MIN_DATA_LENGTH:
            return records

        if header == HEADER_DIAGNOSTIC:
            records.extend(self._diagnostics(cur))
        elif header == HEADER_ANALOG:
            records.extend(self._analog(cur))
        elif header == HEADER_DIGITAL:
            records.extend(self._digital(cur))
        elif header & HEADER_SDI:
            command = header & 0x0F
            records.append(ParameterRecord("command", 0, command, SRC_MAIN))
            records.extend(self.decode_sdi(command, cur))
        else:
            self._logger.debug("unhandled header 0x%02X", header)
        return records

    def _diagnostics(self, cur: Cursor) -> List[ParameterRecord]:
        records = [
            ParameterRecord("uptime", 0, cur.uint32(), SRC_DIAGNOSTIC, "s"),
            ParameterRecord("battery-voltage", 0, milli(cur.uint16()), SRC_DIAGNOSTIC, "V"),
            ParameterRecord("solar-voltage", 0, milli(cur.uint16()), SRC_DIAGNOSTIC, "V"),
        ]
        frequency = cur.uint32()
        if self.min_frequency is None or frequency > self.min_frequency:
            records.append(ParameterRecord("frequency", 0, frequency, SRC_DIAGNOSTIC, "ns/pulse"))
        return records

    def _analog(self, cur: Cursor) -> List[ParameterRecord]:
        read = cur.int32 if self.signed_adc else cur.uint32
        return [
            ParameterRecord("voltage-adc", channel, read(), SRC_ADC, "uV")
            for channel in range(1, 5)
        ]

    def _digital(self, cur: Cursor) -> List[ParameterRecord]:
        cur.skip(8)  # counters 4 and 3 are not reported
        digital2 = cur.uint32()
        digital1 = cur.uint32()
        return [
            ParameterRecord("digital-count", 2, digital2, SRC_DIGITAL),
            ParameterRecord("digital-count", 1, digital1, SRC_DIGITAL),
        ]


class MFRNodeR2(_MFRNode):
    _model_name = "mfr-node-r2"
    _model_codes = ["MNLA3", "MNLA4"]
    _description = "MFR-Node Rev2-0 (MNLA3/MNLA4, firmware <= R2.6.8)"


class MFRNodeR3(_MFRNode):
    _model_name = "mfr-node-r3"
    _model_codes = ["MNLA5", "MNLB3"]
    _description = "MFR-Node Rev3-1 (MNLA3/4/5, MNLB3, firmware >= R2.6.9)"

    signed_adc = True
    emit_charge_state = False
    min_frequency = 1
    emit_device_identity = False
    emit_raw_payload = False
