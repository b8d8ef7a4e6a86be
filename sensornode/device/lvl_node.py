# sensornode/device/lvl_node.py
"""LVL-Node decode table (LVLA2, all firmware).

Only the distance reading is reported. Uptime, battery and the radio
diagnostics still occupy their bytes: battery scaling is known to be
inaccurate on this model and the radio fields are not meaningful.
"""

from __future__ import annotations

from typing import List

from ..buffer import ByteReader
from ..const import DATA_PACKET, SRC_MAIN
from ..records import ParameterRecord
from .base_device import BaseDecodeTable


class LVLNode(BaseDecodeTable):
    """Ultrasonic level node."""

    _model_name = "lvl-node"
    _model_codes = ["LVLA2"]
    _description = "LVL-Node Rev2-0 (LVLA2)"

    emit_device_identity = False

    def decode_data(self, reader: ByteReader) -> List[ParameterRecord]:
        cur = self.cursor(reader)
        records = [ParameterRecord("packet-type", 0, DATA_PACKET, SRC_MAIN)]

        cur.skip(4 + 2)  # uptime u32, battery u16
        records.append(ParameterRecord("distance", 0, cur.uint16(), SRC_MAIN, "mm"))
        cur.skip(2 + 1 + 1 + 1)  # rssi i16, snr i8, tx power u8, fault u8
        return records
