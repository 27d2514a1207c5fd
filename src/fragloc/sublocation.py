"""Finite-state scanner for the sub-location suffix of the terminal step.

The suffix carries at most one of each field::

    :42            character offset
    :42[text;s=a]  offset plus bracketed text assertion with side bias
    @0.5:0.75      spatial range
    ~12.5          temporal offset in seconds

``^`` escapes the next character so it is read as literal data. An escaped
character never opens a state (``:`` ``~`` ``@`` ``[``) and never closes an
assertion (``]``).

Public API:

* ``parse_sub_location(text)``: scan a suffix into a ``SubLocation``.
* ``parse_side_bias(text)``: split a ``;s=a`` / ``;s=b`` marker off an assertion.
* ``parse_range(text)``: parse ``from:to`` into an integer ``SpatialRange``.
* ``transition(state, char, ...)``: the pure state transition function.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

from fragloc.types import SIDE_BIAS_MARKERS, SideBias, SpatialRange, SubLocation

logger = logging.getLogger(__name__)

ESCAPE_CHAR = "^"
# Virtual end-of-input character; carries no meaning inside a step.
TERMINATOR = "/"

_DIGITS = frozenset("0123456789")

_SIDE_BIAS_RE = re.compile(r"^(.*);s=([ab])$", re.DOTALL)
_RANGE_RE = re.compile(r"^([0-9.]+):([0-9.]+)$")
_LEADING_INT_RE = re.compile(r"^[0-9]+")
_LEADING_FLOAT_RE = re.compile(r"^(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


# ---------------------------------------------------------------------------
# Scanner states and transitions
# ---------------------------------------------------------------------------


class ScanState(Enum):
    NONE = "none"
    OFFSET = "offset"
    SPATIAL = "spatial"
    TEMPORAL = "temporal"
    ASSERTION = "assertion"


class ScanAction(Enum):
    ESCAPE = "escape"              # consume '^', next char is literal
    SKIP = "skip"                  # ignore the char
    OPEN = "open"                  # enter a new accumulating state
    APPEND = "append"              # add the char to the accumulator
    CLOSE = "close"                # flush accumulator, char consumed
    CLOSE_RESCAN = "close_rescan"  # flush accumulator, rescan char from NONE


_OPENERS: dict[str, ScanState] = {
    ":": ScanState.OFFSET,
    "~": ScanState.TEMPORAL,
    "@": ScanState.SPATIAL,
}


def transition(
    state: ScanState,
    char: str,
    *,
    escaped: bool = False,
    seen_colon: bool = False,
) -> tuple[ScanState, ScanAction]:
    """Return ``(next_state, action)`` for one input character.

    ``seen_colon`` only matters in ``SPATIAL``, where a single ``:`` is part
    of the range and a second one ends it.
    """
    if char == ESCAPE_CHAR and not escaped:
        return state, ScanAction.ESCAPE

    if state is ScanState.NONE:
        if not escaped and char in _OPENERS:
            return _OPENERS[char], ScanAction.OPEN
        return ScanState.NONE, ScanAction.SKIP

    if state is ScanState.OFFSET:
        if char in _DIGITS:
            return ScanState.OFFSET, ScanAction.APPEND
        if char == "[" and not escaped:
            return ScanState.ASSERTION, ScanAction.CLOSE
        return ScanState.NONE, ScanAction.CLOSE_RESCAN

    if state is ScanState.ASSERTION:
        if char == "]" and not escaped:
            return ScanState.NONE, ScanAction.CLOSE
        return ScanState.ASSERTION, ScanAction.APPEND

    if state is ScanState.SPATIAL:
        if char in _DIGITS or char == ".":
            return ScanState.SPATIAL, ScanAction.APPEND
        if char == ":" and not seen_colon:
            return ScanState.SPATIAL, ScanAction.APPEND
        return ScanState.NONE, ScanAction.CLOSE_RESCAN

    # TEMPORAL
    if char in _DIGITS or char == ".":
        return ScanState.TEMPORAL, ScanAction.APPEND
    return ScanState.NONE, ScanAction.CLOSE_RESCAN


# ---------------------------------------------------------------------------
# Field parsers
# ---------------------------------------------------------------------------


def parse_side_bias(text: str | None) -> tuple[str | None, SideBias | None]:
    """Split a trailing ``;s=a`` (after) or ``;s=b`` (before) marker off ``text``.

    Returns ``(location, side_bias)``. Without a marker the whole text is the
    location and no bias is set.
    """
    if not text:
        return None, None
    m = _SIDE_BIAS_RE.match(text.strip())
    if m is None:
        return text, None
    return (m.group(1) or None), SIDE_BIAS_MARKERS[m.group(2)]


def parse_range(text: str | None) -> SpatialRange | None:
    """Parse ``from:to`` into an integer-truncated ``SpatialRange``.

    Bounds keep only their leading digits, so ``"0.5:0.75"`` becomes
    ``SpatialRange(0, 0)``. A bound without a leading digit (``".5"``)
    makes the whole range unparseable.
    """
    if not text:
        return None
    m = _RANGE_RE.match(text.strip())
    if m is None:
        return None
    start = _LEADING_INT_RE.match(m.group(1))
    end = _LEADING_INT_RE.match(m.group(2))
    if start is None or end is None:
        return None
    start_value = parse_digits(start.group())
    end_value = parse_digits(end.group())
    if start_value is None or end_value is None:
        return None
    return SpatialRange(start=start_value, end=end_value)


def parse_digits(text: str) -> int | None:
    """Convert a run of ASCII digits to int; None if empty or too long for int()."""
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        # Digit runs past sys.get_int_max_str_digits() are refused by int().
        return None


def _parse_temporal(text: str) -> float | None:
    m = _LEADING_FLOAT_RE.match(text)
    if m is None:
        return None
    return float(m.group())


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _SubLocationScanner:
    """Mutable scan state for one ``parse_sub_location`` call."""

    state: ScanState = ScanState.NONE
    escaped: bool = False
    seen_colon: bool = False
    buffer: list[str] = field(default_factory=list)
    offset: int | None = None
    side_bias: SideBias | None = None
    spatial: SpatialRange | None = None
    temporal: float | None = None
    text_assertion: str | None = None

    def feed(self, char: str) -> None:
        while True:
            next_state, action = transition(
                self.state, char, escaped=self.escaped, seen_colon=self.seen_colon,
            )
            if action is ScanAction.ESCAPE:
                self.escaped = True
                return
            if action is ScanAction.OPEN:
                self.buffer.clear()
                self.seen_colon = False
            elif action is ScanAction.APPEND:
                if self.state is ScanState.SPATIAL and char == ":":
                    self.seen_colon = True
                self.buffer.append(char)
            elif action in (ScanAction.CLOSE, ScanAction.CLOSE_RESCAN):
                self._close()
            self.state = next_state
            if action is not ScanAction.CLOSE_RESCAN:
                break
        self.escaped = False

    def finish(self) -> SubLocation:
        # End of input behaves like the virtual terminator: flush whatever is open.
        if self.state is not ScanState.NONE:
            self._close()
            self.state = ScanState.NONE
        return SubLocation(
            offset=self.offset,
            side_bias=self.side_bias,
            spatial=self.spatial,
            temporal=self.temporal,
            text_assertion=self.text_assertion,
        )

    def _close(self) -> None:
        text = "".join(self.buffer)
        self.buffer.clear()
        if self.state is ScanState.OFFSET:
            if not text:
                self.offset = 0
            else:
                offset = parse_digits(text)
                if offset is None:
                    logger.debug("Dropping unparseable offset %r", text[:32])
                else:
                    self.offset = offset
        elif self.state is ScanState.ASSERTION:
            location, side_bias = parse_side_bias(text)
            self.text_assertion = location
            if side_bias is not None:
                self.side_bias = side_bias
        elif self.state is ScanState.SPATIAL:
            spatial = parse_range(text) if self.seen_colon else None
            if spatial is None:
                logger.debug("Dropping unparseable spatial range %r", text)
            else:
                self.spatial = spatial
        elif self.state is ScanState.TEMPORAL:
            temporal = _parse_temporal(text)
            if temporal is None:
                logger.debug("Dropping unparseable temporal offset %r", text)
            else:
                self.temporal = temporal


def parse_sub_location(text: str) -> SubLocation:
    """Scan the trailing text of the terminal step into a ``SubLocation``.

    Fields that never appear stay ``None``. Malformed fragments are dropped
    rather than raised.
    """
    scanner = _SubLocationScanner()
    for char in text:
        scanner.feed(char)
    return scanner.finish()
