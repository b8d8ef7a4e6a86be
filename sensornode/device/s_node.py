# sensornode/device/s_node.py
"""S-Node decode table (SNLA2..SNLA5, firmware >= R2.4.2).

Port 1 (big-endian)::

    0  u32  uptime (s)
    4  u16  battery (mV)
    6  u16  solar (mV)
    8  u8   flags: bit0 charging, bit1 fault, bit2 GNSS payload
    9  ...  GNSS: i32 latitude, i32 longitude (1e-7 degrees)
            otherwise: u8 SDI-12 command, then the slot payload
"""

from __future__ import annotations

from typing import List

from ..buffer import ByteReader
from ..const import DATA_PACKET, SRC_DIAGNOSTIC, SRC_MAIN
from ..records import ParameterRecord
from .base_device import BaseDecodeTable, milli, round_fixed

MIN_SDI_LENGTH = 10
SDI_PAYLOAD_OFFSET = 10


def coordinate(raw: int) -> float:
    return round_fixed(raw / 10_000_000, 6)


class SNode(BaseDecodeTable):
    """Solar powered SDI-12 node, optionally with GNSS."""

    _model_name = "s-node"
    _model_codes = ["SNLA2", "SNLA3", "SNLA4", "SNLA5"]
    _description = "S-Node Rev2-3 (SNLA2..SNLA5, firmware >= R2.4.2)"

    def decode_data(self, reader: ByteReader) -> List[ParameterRecord]:
        cur = self.cursor(reader)
        src = SRC_DIAGNOSTIC
        records = [
            ParameterRecord("packet-type", 0, DATA_PACKET, src),
            ParameterRecord("uptime", 0, cur.uint32(), src, "s"),
            ParameterRecord("battery-voltage", 0, milli(cur.uint16()), src, "V"),
            ParameterRecord("solar-voltage", 0, milli(cur.uint16()), src, "V"),
        ]
        flags = cur.uint8()
        gnss = 1 if flags & 4 else 0
        records.append(ParameterRecord("charging-state", 0, flags & 1, src))
        records.append(ParameterRecord("fault", 0, (flags & 2) >> 1, src))
        records.append(ParameterRecord("gnss", 0, gnss, src))

        if gnss:
            latitude = coordinate(cur.int32())
            longitude = coordinate(cur.int32())
            # a zero coordinate means no fix
            if latitude != 0 and longitude != 0:
                records.append(ParameterRecord("latitude", 0, latitude, src, "Degrees"))
                records.append(ParameterRecord("longitude", 0, longitude, src, "Degrees"))
            return records

        if reader.length < MIN_SDI_LENGTH:
            return records

        command = cur.uint8()
        records.append(ParameterRecord("command", 0, command, SRC_MAIN))
        records.extend(self.decode_sdi(command, cur.seek(SDI_PAYLOAD_OFFSET)))
        return records
