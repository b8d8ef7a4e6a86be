# sensornode/device/ad_node.py
"""AD-Node decode table.

Suitable for model ADLA3 running firmware 2.4.1 and newer (little-endian
layout). Not suitable for ADLA1/ADLA2.

Port 1 layout (little-endian)::

    0  u32  uptime (s)
    4  u16  battery (mV)
    6  u16  4-20 mA loop current (uA)
    8  u32  ADC V0 (uV)
   12  u32  ADC V1 (uV)
   16  i32  thermistor T1 (m°C)
   20  u32  pulse counter 4, 3, 2, 1
   36  i16  accelerometer x, y, z (raw)
"""

from __future__ import annotations

from typing import List

from ..buffer import ByteReader
from ..const import DATA_PACKET, SRC_ADC, SRC_DIAGNOSTIC, SRC_DIGITAL, SRC_MAIN
from ..records import ParameterRecord
from .base_device import BaseDecodeTable, milli, round_fixed, tilt_offset

# ±2 g full scale over the signed 16-bit range, in mG
ACCEL_MG_PER_LSB = (2.0 / 32678.0) * 1000


class ADNode(BaseDecodeTable):
    """Analog/digital node with tilt sensing."""

    _model_name = "ad-node"
    _model_codes = ["ADLA3"]
    _description = "AD-Node Rev2-2 (ADLA3, firmware >= 2.4.1)"

    byteorder = "little"
    emit_device_identity = False
    emit_raw_payload = False

    def decode_data(self, reader: ByteReader) -> List[ParameterRecord]:
        cur = self.cursor(reader)
        records = [ParameterRecord("packet-type", 0, DATA_PACKET, SRC_MAIN)]

        records.append(ParameterRecord("uptime", 0, cur.uint32(), SRC_DIAGNOSTIC, "s"))
        records.append(ParameterRecord("battery-voltage", 0, milli(cur.uint16()), SRC_DIAGNOSTIC, "V"))

        current0 = cur.uint16()
        voltage0 = cur.uint32()
        voltage1 = cur.uint32()
        records.append(ParameterRecord("current-adc", 0, current0, SRC_ADC, "uA"))
        records.append(ParameterRecord("voltage-adc", 0, voltage0, SRC_ADC, "uV"))
        records.append(ParameterRecord("voltage-adc", 1, voltage1, SRC_ADC, "uV"))
        # T0 is repurposed as ADC V1 on ADLA3, only T1 is reported
        records.append(ParameterRecord("temperature", 1, milli(cur.int32()), SRC_ADC, "C"))

        digital4 = cur.uint32()
        digital3 = cur.uint32()
        cur.skip(8)  # counters 2 and 1 are not reported
        records.append(ParameterRecord("digital-count", 1, digital4, SRC_DIGITAL))
        records.append(ParameterRecord("digital-count", 2, digital3, SRC_DIGITAL))

        x = round_fixed(cur.int16() * ACCEL_MG_PER_LSB, 3)
        y = round_fixed(cur.int16() * ACCEL_MG_PER_LSB, 3)
        z = round_fixed(cur.int16() * ACCEL_MG_PER_LSB, 3)
        records.append(ParameterRecord("x-tilt-offset", 0, tilt_offset(x, y), SRC_MAIN, "Degrees"))
        records.append(ParameterRecord("y-tilt-offset", 0, tilt_offset(x, z), SRC_MAIN, "Degrees"))
        return records
