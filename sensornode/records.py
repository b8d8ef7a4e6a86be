# sensornode/records.py
"""Decoded parameter records and the two output projections."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .const import RESERVED_SOURCES, OutputType
from .exception import OutputTypeError

__all__ = [
    "ParameterRecord",
    "Value",
    "build_nested",
    "build_flat",
    "build_output",
    "coerce_output_type",
]

Value = Union[int, float, str, bytes]


@dataclass(frozen=True)
class ParameterRecord:
    """One decoded field: what was measured, on which channel, and its value."""

    label: str
    channel: int
    value: Value
    source: Optional[str] = None
    unit: Optional[str] = None
    address: Optional[str] = None

    @property
    def is_structural(self) -> bool:
        return self.source in RESERVED_SOURCES


def build_nested(records: Iterable[ParameterRecord]) -> List[Dict[str, Any]]:
    """
    One dict per record, in decode order:
      {label, channelId, value[, source][, unit][, address]}
    Structural sources (main, diagnostic, ...) are left out of ``source``.
    """
    out: List[Dict[str, Any]] = []
    for rec in records:
        par: Dict[str, Any] = {
            "label": rec.label,
            "channelId": rec.channel,
            "value": rec.value,
        }
        if rec.source is not None and not rec.is_structural:
            par["source"] = rec.source
        if rec.unit is not None:
            par["unit"] = rec.unit
        if rec.address is not None:
            par["address"] = rec.address
        out.append(par)
    return out


def _flat_key(rec: ParameterRecord) -> str:
    label = rec.label
    if rec.address is not None:
        label = f"{label}{rec.address}_"
    if rec.unit is None:
        return label if rec.is_structural else f"{label}{rec.channel}"
    if rec.is_structural:
        return f"{label}_{rec.unit}"
    return f"{label}{rec.channel}_{rec.unit}"


def build_flat(records: Union[Iterable[ParameterRecord], Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Single-level mapping keyed by composed labels, e.g.::

      uptime_s, battery-voltage_V, digital-count1, voltage-adc0_uV

    Later records overwrite earlier ones on a key clash. A mapping that is
    already flat is returned as an equal copy.
    """
    if isinstance(records, Mapping):
        return dict(records)
    out: Dict[str, Any] = {}
    for rec in records:
        out[_flat_key(rec)] = rec.value
    return out


def coerce_output_type(value: Union[OutputType, str]) -> OutputType:
    if isinstance(value, OutputType):
        return value
    try:
        return OutputType(str(value).strip().lower())
    except ValueError as e:
        raise OutputTypeError(
            f"output type must be one of {[t.value for t in OutputType]}, got {value!r}"
        ) from e


def build_output(
    records: Iterable[ParameterRecord],
    output_type: Union[OutputType, str] = OutputType.NESTED,
) -> Dict[str, Any]:
    """Project records the way the network-server hooks expect them."""
    if coerce_output_type(output_type) is OutputType.FLAT:
        return build_flat(records)
    return {"data": build_nested(records)}
