"""Utility exports."""
from .text import snap_containing, snap_forward, to_bytes, to_text, utf8_index_map, utf16_units
from .validation import check_position, check_range, clamp_range, resolve_index, resolve_lenient

__all__ = [
    "snap_containing",
    "snap_forward",
    "to_bytes",
    "to_text",
    "utf8_index_map",
    "utf16_units",
    "check_position",
    "check_range",
    "clamp_range",
    "resolve_index",
    "resolve_lenient",
]
