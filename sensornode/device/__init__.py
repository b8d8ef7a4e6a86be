# sensornode/device/__init__.py
"""Decode tables, one per node family / firmware window."""

from __future__ import annotations

from typing import Dict, List, Type

from ..exception import UnknownFamilyError
from .ad_node import ADNode
from .base_device import BaseDecodeTable
from .lvl_node import LVLNode
from .mfr_node import MFRNodeR2, MFRNodeR3
from .s_node import SNode
from .sdi12 import SdiSlotTable, empty_slot

DECODE_TABLES: Dict[str, Type[BaseDecodeTable]] = {
    cls.model_name: cls  # type: ignore[misc]
    for cls in (ADNode, LVLNode, MFRNodeR2, MFRNodeR3, SNode)
}


def get_model_class_from_name(name: str) -> Type[BaseDecodeTable] | None:
    """Find a table by registry name (``s-node``) or hardware model code (``SNLA4``)."""
    key = (name or "").strip()
    if key.lower() in DECODE_TABLES:
        return DECODE_TABLES[key.lower()]
    for cls in DECODE_TABLES.values():
        if any(key.upper().startswith(code) for code in cls.model_codes):
            return cls
    return None


def get_decode_table(name: str) -> BaseDecodeTable:
    """Instantiate the table registered for ``name``; raises ``UnknownFamilyError``."""
    cls = get_model_class_from_name(name)
    if cls is None:
        raise UnknownFamilyError(name)
    return cls()


def list_families() -> List[Type[BaseDecodeTable]]:
    return list(DECODE_TABLES.values())


__all__ = [
    "ADNode",
    "BaseDecodeTable",
    "DECODE_TABLES",
    "LVLNode",
    "MFRNodeR2",
    "MFRNodeR3",
    "SNode",
    "SdiSlotTable",
    "empty_slot",
    "get_decode_table",
    "get_model_class_from_name",
    "list_families",
]
