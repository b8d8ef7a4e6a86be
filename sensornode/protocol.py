# sensornode/protocol.py
"""Decoder entry points.

The three call shapes used by LoRaWAN network-server payload hooks all come
down to: pick a decode table, decode ``(bytes, port)`` into records, then
project the records as nested or flat output.

  decode(port, data)               ChirpStack style ``Decode(fPort, bytes)``
  decode_uplink(data, port)        TTN style ``Decoder(bytes, port)``
  parse_device_msg(buf, message)   NNNCo style, always nested
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Union

from .buffer import ByteReader, Payload
from .const import DEFAULT_OUTPUT_TYPE, OutputType
from .device import BaseDecodeTable, get_decode_table
from .records import ParameterRecord, build_nested, build_output, coerce_output_type

__all__ = [
    "decode",
    "decode_records",
    "decode_uplink",
    "parse_device_msg",
]

_LOGGER = logging.getLogger(__name__)

Family = Union[str, BaseDecodeTable]


def _table(family: Family) -> BaseDecodeTable:
    if isinstance(family, BaseDecodeTable):
        return family
    return get_decode_table(family)


def decode_records(family: Family, data: ByteReader | Payload, port: int) -> List[ParameterRecord]:
    """Decode one uplink into its record sequence (no output projection)."""
    table = _table(family)
    reader = data if isinstance(data, ByteReader) else ByteReader(data)
    return table.decode(reader, int(port))


def decode(
    port: int,
    data: ByteReader | Payload,
    *,
    family: Family,
    output_type: Union[OutputType, str] = DEFAULT_OUTPUT_TYPE,
) -> Dict[str, Any]:
    """
    Primary form. Returns ``{"data": [...]}`` for nested output or a single
    level mapping for flat output.
    """
    shape = coerce_output_type(output_type)
    records = decode_records(family, data, port)
    _LOGGER.debug("decoded %d record(s) on port %s as %s", len(records), port, shape.value)
    return build_output(records, shape)


def decode_uplink(
    data: ByteReader | Payload,
    port: int,
    *,
    family: Family,
    output_type: Union[OutputType, str] = DEFAULT_OUTPUT_TYPE,
) -> Dict[str, Any]:
    """Same as :func:`decode` with the arguments swapped."""
    return decode(port, data, family=family, output_type=output_type)


def parse_device_msg(
    buf: ByteReader | Payload,
    message: Mapping[str, Any],
    *,
    family: Family,
) -> List[Dict[str, Any]]:
    """Decode using the port carried in ``message["loraPort"]``; always nested."""
    records = decode_records(family, buf, message["loraPort"])
    return build_nested(records)
