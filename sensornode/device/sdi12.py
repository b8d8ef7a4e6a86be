# sensornode/device/sdi12.py
"""SDI-12 programming slots.

Nodes with an SDI-12 bus tag each sensor uplink with a command nibble naming
one of ten programming slots. The field layout of a slot depends on the
sensor wired to it at the site, so every slot starts out empty. Site
specific decoders replace a slot without touching the others::

    def teros12(cursor, source):
        return [ParameterRecord("vwc", 0, cursor.uint16() / 100, source, "%", "0")]

    class SiteSNode(SNode):
        sdi_slots = SNode.sdi_slots.override(0, teros12)
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from ..buffer import Cursor
from ..const import SDI_SLOT_COUNT, sdi_source
from ..records import ParameterRecord

_LOGGER = logging.getLogger(__name__)

SdiSlotDecoder = Callable[[Cursor, str], List[ParameterRecord]]


def empty_slot(cursor: Cursor, source: str) -> List[ParameterRecord]:
    """Slot with no field layout yet."""
    _LOGGER.debug("%s has no field layout; %d byte(s) left undecoded", source, cursor.remaining)
    return []


class SdiSlotTable(Mapping[int, SdiSlotDecoder]):
    """Immutable mapping of slot number (0..9) to its decoder."""

    def __init__(self, slots: Optional[Mapping[int, SdiSlotDecoder]] = None) -> None:
        table: Dict[int, SdiSlotDecoder] = {n: empty_slot for n in range(SDI_SLOT_COUNT)}
        for n, fn in (slots or {}).items():
            self._check(n)
            table[n] = fn
        self._slots = table

    @staticmethod
    def _check(command: int) -> None:
        if not 0 <= command < SDI_SLOT_COUNT:
            raise ValueError(f"SDI-12 slot must be within 0..{SDI_SLOT_COUNT - 1}, got {command}")

    def __getitem__(self, command: int) -> SdiSlotDecoder:
        return self._slots[command]

    def __iter__(self) -> Iterator[int]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def override(self, command: int, decoder: SdiSlotDecoder) -> "SdiSlotTable":
        """Return a copy with slot ``command`` replaced."""
        self._check(command)
        return SdiSlotTable({**self._slots, command: decoder})

    def decode(self, command: int, cursor: Cursor) -> List[ParameterRecord]:
        return self._slots[command](cursor, sdi_source(command))
