"""Path grammar parser for ``identifier(...)`` strings.

Grammar::

    identifier  := "identifier(" body ")"
    body        := part ("!" part)*
    part        := ("/" step)+
    step        := DIGITS? ("[" NODE_ID "]")? SUBLOCATION?

``!`` and ``/`` are never escaped at this level, so plain splits are
enough. Only a missing wrapper raises; unparseable steps and parts that
end up empty are dropped.
"""

from __future__ import annotations

import logging
import re

from fragloc.errors import MalformedIdentifierError
from fragloc.sublocation import parse_digits, parse_sub_location
from fragloc.types import Part, Step

logger = logging.getLogger(__name__)

IDENTIFIER_SCHEME = "identifier"
PART_SEPARATOR = "!"
STEP_SEPARATOR = "/"

_WRAPPER_RE = re.compile(rf"^{IDENTIFIER_SCHEME}\((.*)\)$", re.DOTALL)
_STEP_RE = re.compile(r"^([0-9]*)(?:\[([^\[\]]+)\])?(.*)$", re.DOTALL)


def unwrap_identifier(raw: str) -> str:
    """Return the body enclosed by ``identifier(...)``.

    Raises MalformedIdentifierError when the wrapper is missing.
    """
    if not isinstance(raw, str):
        raise MalformedIdentifierError(raw)
    m = _WRAPPER_RE.match(raw.strip())
    if m is None:
        raise MalformedIdentifierError(raw)
    return m.group(1)


def parse_step(text: str, *, is_last: bool = False) -> Step | None:
    """Parse one ``/``-delimited step string.

    A zero index is equivalent to no index. Trailing text becomes a
    sub-location only when ``is_last`` is set. Returns None for a step with
    neither an index nor an ID.
    """
    digits, node_id, trailing = _STEP_RE.match(text).groups()  # type: ignore[union-attr]
    if not digits and not node_id:
        return None

    node_index = parse_digits(digits)
    if digits and node_index is None:
        logger.debug("Dropping step with unparseable index %r", digits[:32])
        return None

    sub_location = None
    if is_last and trailing:
        sub_location = parse_sub_location(trailing)

    return Step(
        node_index=node_index or None,  # a zero index is equivalent to no index
        node_id=node_id or None,
        sub_location=sub_location,
    )


def parse_part(text: str, *, is_last: bool = False) -> Part | None:
    """Parse one ``!``-delimited part string; None if no step survives."""
    step_strs = text.split(STEP_SEPARATOR)[1:]
    steps: list[Step] = []
    for idx, step_str in enumerate(step_strs):
        step = parse_step(step_str, is_last=is_last and idx == len(step_strs) - 1)
        if step is None:
            logger.debug("Dropping unparseable step %r in part %r", step_str, text)
            continue
        steps.append(step)
    if not steps:
        return None
    return Part(steps=tuple(steps))


def parse_parts(raw: str) -> tuple[Part, ...]:
    """Parse a raw identifier string into its ordered parts."""
    body = unwrap_identifier(raw)
    if not body:
        return ()

    part_strs = body.split(PART_SEPARATOR)
    parts: list[Part] = []
    for idx, part_str in enumerate(part_strs):
        part = parse_part(part_str, is_last=idx == len(part_strs) - 1)
        if part is None:
            logger.debug("Dropping empty part %r", part_str)
            continue
        parts.append(part)
    return tuple(parts)
