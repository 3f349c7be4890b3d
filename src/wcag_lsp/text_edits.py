"""Edit spans between two full-document texts, in tree-sitter's units.

Full-document sync hands the server whole texts, but tree-sitter only reuses
unchanged subtrees when the old tree is told which byte range changed. The
span is recovered here by trimming the common prefix and suffix.
"""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[int, int]


@dataclass(frozen=True, slots=True)
class TextEdit:
    """One `Tree.edit` payload."""

    start_byte: int
    old_end_byte: int
    new_end_byte: int
    start_point: Point
    old_end_point: Point
    new_end_point: Point


def point_at(data: bytes, offset: int) -> Point:
    """Row and byte column of `offset` within `data`."""
    row = data.count(b"\n", 0, offset)
    line_start = data.rfind(b"\n", 0, offset) + 1
    return row, offset - line_start


def _common_prefix(old: bytes, new: bytes) -> int:
    lo, hi = 0, min(len(old), len(new))
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if old[:mid] == new[:mid]:
            lo = mid
        else:
            hi = mid - 1
    return lo


def _common_suffix(old: bytes, new: bytes, limit: int) -> int:
    lo, hi = 0, limit
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if old[len(old) - mid :] == new[len(new) - mid :]:
            lo = mid
        else:
            hi = mid - 1
    return lo


def _is_continuation(data: bytes, offset: int) -> bool:
    return offset < len(data) and (data[offset] & 0xC0) == 0x80


def compute_edit(old: bytes, new: bytes) -> TextEdit | None:
    """Smallest single edit turning `old` into `new`; None when equal."""
    if old == new:
        return None
    prefix = _common_prefix(old, new)
    # never split a UTF-8 sequence
    while prefix > 0 and (_is_continuation(old, prefix) or _is_continuation(new, prefix)):
        prefix -= 1
    suffix = _common_suffix(old, new, min(len(old), len(new)) - prefix)
    old_end = len(old) - suffix
    new_end = len(new) - suffix
    return TextEdit(
        start_byte=prefix,
        old_end_byte=old_end,
        new_end_byte=new_end,
        start_point=point_at(old, prefix),
        old_end_point=point_at(old, old_end),
        new_end_point=point_at(new, new_end),
    )
