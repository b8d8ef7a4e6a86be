"""Tests for the MFR-Node decode tables (Rev2 and Rev3 firmware)."""

import struct

import pytest

from sensornode.device import MFRNodeR2, MFRNodeR3
from sensornode.device.mfr_node import header_code
from sensornode.records import ParameterRecord

# charge/fault 0x10, diagnostics header, frequency 0
DIAGNOSTIC_PAYLOAD = bytes.fromhex("1010000170F40FB04E7200000000")


def _labels(records):
    return [r.label for r in records]


def test_header_code_reads_as_decimal_digits() -> None:
    assert header_code(0x10) == 10
    assert header_code(0x40) == 40
    assert header_code(0x8C) == 92


def test_r3_diagnostics_suppress_zero_frequency(by_label) -> None:
    records = MFRNodeR3().decode(DIAGNOSTIC_PAYLOAD, 1)
    rec = by_label(records)

    assert _labels(records) == [
        "packet-type",
        "header",
        "uptime",
        "battery-voltage",
        "solar-voltage",
    ]
    assert rec[("header", 0)].value == 10
    assert rec[("uptime", 0)].value == 0x000170F4
    assert rec[("battery-voltage", 0)].value == 4.016
    assert rec[("solar-voltage", 0)].value == 20.082


def test_r3_diagnostics_report_real_frequency() -> None:
    payload = DIAGNOSTIC_PAYLOAD[:-4] + struct.pack(">I", 123456)

    records = MFRNodeR3().decode(payload, 1)

    assert records[-1] == ParameterRecord("frequency", 0, 123456, "diagnostic", "ns/pulse")


def test_r3_frequency_of_one_is_treated_as_no_sensor() -> None:
    payload = DIAGNOSTIC_PAYLOAD[:-4] + struct.pack(">I", 1)

    assert "frequency" not in _labels(MFRNodeR3().decode(payload, 1))


def test_r2_reports_charge_state_and_zero_frequency(by_label) -> None:
    records = MFRNodeR2().decode(DIAGNOSTIC_PAYLOAD, 1)
    rec = by_label(records)

    assert _labels(records) == [
        "packet-type",
        "payload-version",
        "charging-state",
        "fault",
        "header",
        "uptime",
        "battery-voltage",
        "solar-voltage",
        "frequency",
    ]
    assert rec[("payload-version", 0)].value == 1
    assert rec[("charging-state", 0)].value == 0
    assert rec[("fault", 0)].value == 0
    assert rec[("frequency", 0)].value == 0


def test_charge_fault_bits() -> None:
    records = MFRNodeR2().decode(bytes([0x23, 0x10]), 1)
    values = {r.label: r.value for r in records}

    assert values["payload-version"] == 2
    assert values["charging-state"] == 1
    assert values["fault"] == 1


@pytest.mark.parametrize("table", [MFRNodeR2(), MFRNodeR3()])
def test_short_payload_stops_after_header(table) -> None:
    records = table.decode(bytes([0x00, 0x10]), 1)

    assert _labels(records)[-1] == "header"
    assert "uptime" not in _labels(records)


def test_analog_r3_is_signed_and_r2_unsigned() -> None:
    payload = bytes([0x00, 0x20]) + struct.pack(">iiii", -1000, 2000, -3000, 4000)

    r3 = [r for r in MFRNodeR3().decode(payload, 1) if r.label == "voltage-adc"]
    r2 = [r for r in MFRNodeR2().decode(payload, 1) if r.label == "voltage-adc"]

    assert [(r.channel, r.value) for r in r3] == [(1, -1000), (2, 2000), (3, -3000), (4, 4000)]
    assert [r.value for r in r2] == [2**32 - 1000, 2000, 2**32 - 3000, 4000]
    assert all(r.unit == "uV" and r.source == "adc" for r in r3)


def test_digital_reports_counters_two_and_one() -> None:
    payload = bytes([0x00, 0x40]) + struct.pack(">IIII", 11, 22, 33, 44)

    records = [r for r in MFRNodeR3().decode(payload, 1) if r.label == "digital-count"]

    assert [(r.channel, r.value) for r in records] == [(2, 33), (1, 44)]
    assert all(r.source == "digital" for r in records)


def test_sdi_header_emits_command_and_empty_slot() -> None:
    records = MFRNodeR3().decode(bytes([0x00, 0x83, 0x01, 0x02, 0x03]), 1)

    assert records[-2] == ParameterRecord("header", 0, 83, "main")
    assert records[-1] == ParameterRecord("command", 0, 3, "main")


def test_sdi_command_outside_slots_decodes_nothing_more() -> None:
    records = MFRNodeR2().decode(bytes([0x00, 0x8C, 0xAA]), 1)

    assert records[-1] == ParameterRecord("command", 0, 12, "main")


def test_sdi_slot_override_receives_cursor_after_header() -> None:
    def slot_3(cursor, source):
        return [ParameterRecord("level", 0, cursor.uint16(), source, "mm", "0")]

    class SiteNode(MFRNodeR3):
        _model_name = "site-mfr"
        sdi_slots = MFRNodeR3.sdi_slots.override(3, slot_3)

    records = SiteNode().decode(bytes([0x00, 0x83, 0x01, 0x02]), 1)

    assert records[-1] == ParameterRecord("level", 0, 0x0102, "sdi_3", "mm", "0")
    # the base table is untouched
    assert MFRNodeR3().decode(bytes([0x00, 0x83, 0x01, 0x02]), 1)[-1].label == "command"


def test_unhandled_header_stops_after_header() -> None:
    records = MFRNodeR2().decode(bytes([0x00, 0x30, 0x01, 0x02]), 1)

    assert _labels(records)[-1] == "header"
