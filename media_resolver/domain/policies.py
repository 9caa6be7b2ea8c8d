from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import (
    DEFAULT_QUALITY,
    CandidateItem,
    Quality,
)


_DIGITS_RX = re.compile(r"\d+")

# Longer digit runs are clamped; int() refuses very long strings.
_MAX_DIGITS = 6
_CLAMPED_HEIGHT = 10 ** _MAX_DIGITS


@dataclass(frozen=True, slots=True)
class FormatEntry:
    """
    One downloadable format reported by a format-list provider.
    Infrastructure maps provider descriptors into this structure.
    """
    height: int
    url: str
    label: str
    bitrate_kbps: float | None = None


def highest(allowed: Sequence[Quality]) -> Quality:
    if Quality.MAX in allowed:
        return Quality.MAX
    return max(allowed, key=lambda q: q.height or 0)


def _default_for(allowed: Sequence[Quality]) -> Quality:
    if DEFAULT_QUALITY in allowed:
        return DEFAULT_QUALITY
    return highest(allowed)


def parse_resolution(raw: str | None) -> int | None:
    """'1080p' / ' 720 ' / 'HD 720' -> int; anything else -> None."""
    if raw is None:
        return None
    s = raw.strip().lower()
    if s.endswith("p"):
        s = s[:-1].strip()
    if not s.isdecimal():
        m = _DIGITS_RX.search(s)
        if not m:
            return None
        s = m.group(0)
    return _to_height(s)


def _to_height(digits: str) -> int:
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        return _CLAMPED_HEIGHT
    return int(digits)


def pick_nearest(target: int, heights: Iterable[int]) -> int:
    """
    Nearest height by absolute distance; ties go to the higher resolution.
    """
    pool = list(heights)
    if not pool:
        raise ValueError("pick_nearest() needs at least one candidate")
    return min(pool, key=lambda h: (abs(h - target), -h))


def normalize_quality(requested: str | None, allowed: Sequence[Quality]) -> Quality:
    """
    Map a freeform quality request onto a member of ``allowed``.

    Never fails for any input string. ``allowed`` must be non-empty.
    """
    if not allowed:
        raise ValueError("allowed quality set must not be empty")

    if requested is None:
        return _default_for(allowed)

    cleaned = requested.strip().lower()
    if cleaned.endswith("p"):
        cleaned = cleaned[:-1].strip()
    if not cleaned:
        return _default_for(allowed)

    if cleaned in ("max", "best"):
        return highest(allowed)

    for q in allowed:
        if q.value == cleaned:
            return q

    target = parse_resolution(cleaned)
    if target is None:
        return _default_for(allowed)

    numeric = {q.height: q for q in allowed if q.height is not None}
    if not numeric:
        # Only MAX is allowed.
        return highest(allowed)
    return numeric[pick_nearest(target, numeric.keys())]


def deduplicate_entries(entries: Iterable[FormatEntry]) -> list[FormatEntry]:
    """
    One entry per resolution. Higher bitrate wins, first seen wins on ties
    or when bitrate is unknown.
    """
    buckets: dict[int, FormatEntry] = {}
    for e in entries:
        existing = buckets.get(e.height)
        if existing is None:
            buckets[e.height] = e
            continue
        if (e.bitrate_kbps or 0) > (existing.bitrate_kbps or 0):
            buckets[e.height] = e
    return list(buckets.values())


def rank_entries(entries: Iterable[FormatEntry], requested: Quality) -> list[FormatEntry]:
    """
    Deduplicate, then put the entry closest to ``requested`` first and the
    rest by descending resolution.
    """
    unique = deduplicate_entries(entries)
    if not unique:
        return []

    ordered = sorted(unique, key=lambda e: -e.height)
    if requested.height is None:
        return ordered

    chosen = pick_nearest(requested.height, (e.height for e in ordered))
    first = next(e for e in ordered if e.height == chosen)
    return [first] + [e for e in ordered if e is not first]


def entries_to_candidates(entries: Iterable[FormatEntry]) -> tuple[CandidateItem, ...]:
    return tuple(CandidateItem(url=e.url, label=e.label) for e in entries)


def height_label(height: int) -> str:
    return f"{height}p"
