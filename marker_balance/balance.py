"""
Marker balance checking.

Responsibilities:
- normalize the three call shapes (char, string, parallel sequences) into one
  list of (opening, closing) pairs
- validate the pairs before any scanning happens
- scan the source once with an explicit stack and report the first offending
  position
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .models import Verdict
from .rules import NO_POSITION
from .validation import (
    ArgumentError,
    must_not_be_empty_or_whitespace,
    must_not_be_none,
)

logger = logging.getLogger(__name__)

MarkerArg = Union[str, Sequence[str]]
MarkerPair = Tuple[str, str]


def _as_marker_list(name: str, markers: MarkerArg) -> List[str]:
    must_not_be_none(name, markers)

    # a bare string is one marker, never a sequence of one-char markers
    if isinstance(markers, str):
        return [must_not_be_empty_or_whitespace(name, markers)]

    items = list(markers)
    if not items:
        raise ArgumentError(name, "must contain at least one marker")

    for i, marker in enumerate(items):
        must_not_be_empty_or_whitespace(f"{name}[{i}]", marker)

    return items


def build_marker_set(opening: MarkerArg, closing: MarkerArg) -> List[MarkerPair]:
    """
    Validate opening/closing markers and pair them up by index.

    Rules:
    - both sides non-empty and the same length
    - opening[i] != closing[i]
    - no marker is used both as an opening and as a closing marker
    - opening markers are distinct, closing markers are distinct
    """
    openings = _as_marker_list("opening", opening)
    closings = _as_marker_list("closing", closing)

    if len(openings) != len(closings):
        raise ArgumentError(
            "closing",
            f"expected {len(openings)} markers to match opening, got {len(closings)}",
        )

    for i, (o, c) in enumerate(zip(openings, closings)):
        if o == c:
            raise ArgumentError("closing", f"pair {i} opens and closes with {o!r}")

    both = set(openings) & set(closings)
    if both:
        raise ArgumentError(
            "closing",
            f"markers used as both opening and closing: {sorted(both)!r}",
        )

    if len(set(openings)) != len(openings):
        raise ArgumentError("opening", "opening markers must be distinct")
    if len(set(closings)) != len(closings):
        raise ArgumentError("closing", "closing markers must be distinct")

    return list(zip(openings, closings))


def _longest_first(markers: Sequence[str]) -> List[Tuple[str, int]]:
    # sorted() is stable, so equal lengths keep pair order
    return sorted(((m, i) for i, m in enumerate(markers)), key=lambda mi: -len(mi[0]))


def _match_at(source: str, pos: int, candidates: List[Tuple[str, int]]) -> Optional[Tuple[int, int]]:
    for marker, index in candidates:
        if source.startswith(marker, pos):
            return index, len(marker)
    return None


def _scan(source: str, pairs: List[MarkerPair]) -> int:
    openings = _longest_first([o for o, _ in pairs])
    closings = _longest_first([c for _, c in pairs])

    # (pair index, position opened)
    stack: List[Tuple[int, int]] = []
    pos = 0
    end = len(source)

    while pos < end:
        hit = _match_at(source, pos, openings)
        if hit is not None:
            index, width = hit
            stack.append((index, pos))
            pos += width
            continue

        hit = _match_at(source, pos, closings)
        if hit is not None:
            index, width = hit
            if not stack or stack[-1][0] != index:
                return pos
            stack.pop()
            pos += width
            continue

        pos += 1

    if stack:
        # earliest marker that was never closed
        return stack[0][1]
    return NO_POSITION


def check_balance(source: str, opening: MarkerArg, closing: MarkerArg) -> Verdict:
    """
    Check that every opening marker in source is closed in nested order.

    opening/closing may each be a single marker (one character or a longer
    string) or index-aligned sequences of markers. Where several markers match
    at the same position the longest wins; opening markers are tried before
    closing markers.

    Raises ArgumentNullError / ArgumentError before scanning when the input is
    malformed.
    """
    must_not_be_empty_or_whitespace("source", source)
    return check_pairs(source, build_marker_set(opening, closing))


def check_pairs(source: str, pairs: List[MarkerPair]) -> Verdict:
    """
    Scan source against pairs already returned by build_marker_set().
    """
    must_not_be_empty_or_whitespace("source", source)

    position = _scan(source, pairs)
    logger.debug("scanned %d chars with %d marker pairs -> %d", len(source), len(pairs), position)

    if position == NO_POSITION:
        return Verdict.ok()
    return Verdict.unbalanced_at(position)


def find_unbalanced_position(source: str, opening: MarkerArg, closing: MarkerArg) -> int:
    return check_balance(source, opening, closing).position


def is_balanced(source: str, opening: MarkerArg, closing: MarkerArg) -> bool:
    return check_balance(source, opening, closing).balanced
