# sensornode/uplinks.py
"""Read uplink events exported from a network server.

Accepts a JSON array or NDJSON stream of events in any of these shapes:

* ChirpStack v4: ``{"time", "deviceInfo": {"devEui"}, "fPort", "data": <base64>}``
* TTN v3: ``{"received_at", "end_device_ids": {"dev_eui"},
  "uplink_message": {"f_port", "frm_payload": <base64>}}``
* bare rows: ``{"port" | "fPort", "hex" | "bytes_hex"}`` (what ``write_jsonl`` emits)
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional, TextIO

_LOGGER = logging.getLogger(__name__)


def _iter_records(stream: TextIO) -> Iterator[Dict[str, Any]]:
    """Yield objects from either a JSON array or an NDJSON stream."""
    first = stream.read(1)
    while first and first.isspace():
        first = stream.read(1)
    if not first:
        return
    if first == "[":
        arr = json.loads("[" + stream.read())
        for x in arr:
            yield x
    else:
        line = first + stream.readline()
        if line.strip():
            yield json.loads(line)
        for line in stream:
            if line.strip():
                yield json.loads(line)


def _get(d: Dict[str, Any], *path: str, default=None):
    cur: Any = d
    for p in path:
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


def _payload_bytes(rec: Dict[str, Any]) -> Optional[bytes]:
    hex_value = rec.get("bytes_hex", rec.get("hex"))
    if isinstance(hex_value, str):
        return bytes.fromhex("".join(hex_value.split()))

    b64 = rec.get("data")
    if b64 is None:
        b64 = _get(rec, "uplink_message", "frm_payload")
    if isinstance(b64, str):
        return base64.b64decode(b64, validate=True)
    return None


def _port(rec: Dict[str, Any]) -> Optional[int]:
    for value in (rec.get("fPort"), rec.get("port"), _get(rec, "uplink_message", "f_port")):
        if value is not None:
            return int(value)
    return None


def normalize_uplink(rec: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Return ``{ts, dev_eui, f_port, bytes_hex, len}`` or None when unusable."""
    if not isinstance(rec, dict):
        return None
    try:
        payload = _payload_bytes(rec)
        port = _port(rec)
    except (ValueError, TypeError, binascii.Error) as e:
        _LOGGER.debug("skipping uplink with bad payload/port: %s", e)
        return None
    if payload is None or port is None:
        _LOGGER.debug("skipping record without port or payload: %s", sorted(rec))
        return None

    return {
        "ts": rec.get("time") or rec.get("received_at") or rec.get("ts"),
        "dev_eui": _get(rec, "deviceInfo", "devEui")
        or _get(rec, "end_device_ids", "dev_eui")
        or rec.get("dev_eui"),
        "f_port": port,
        "bytes_hex": payload.hex(),
        "len": len(payload),
    }


def iter_uplinks(stream: TextIO) -> Iterator[Dict[str, Any]]:
    """Yield normalized uplink rows from an export stream."""
    for rec in _iter_records(stream):
        row = normalize_uplink(rec)
        if row is not None:
            yield row


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(obj: Any, *, pretty: bool = False) -> str:
    """JSON text for decoded output; raw byte values become lists of ints."""
    if pretty:
        return json.dumps(obj, ensure_ascii=False, indent=2, default=_json_default)
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), default=_json_default)


def write_jsonl(rows: Iterable[Dict[str, Any]], out: TextIO, *, pretty: bool = False) -> int:
    """Write rows as JSON Lines; returns the number written."""
    n = 0
    for r in rows:
        out.write(dumps(r, pretty=pretty))
        out.write("\n")
        n += 1
    return n
