"""Deterministic dict/JSON snapshots of identifiers and resolved locations."""

from __future__ import annotations

from typing import Any

import orjson

from fragloc.identifier import Identifier
from fragloc.types import Part, ResolvedLocation, SpatialRange, Step, SubLocation


def sub_location_to_dict(sub_location: SubLocation) -> dict[str, object]:
    """Serialize only the fields that were parsed."""

    row: dict[str, object] = {}
    if sub_location.offset is not None:
        row["offset"] = sub_location.offset
    if sub_location.side_bias is not None:
        row["side_bias"] = sub_location.side_bias
    if sub_location.spatial is not None:
        row["spatial"] = {"from": sub_location.spatial.start, "to": sub_location.spatial.end}
    if sub_location.temporal is not None:
        row["temporal"] = sub_location.temporal
    if sub_location.text_assertion is not None:
        row["text_assertion"] = sub_location.text_assertion
    return row


def step_to_dict(step: Step) -> dict[str, object]:
    row: dict[str, object] = {}
    if step.node_index is not None:
        row["node_index"] = step.node_index
    if step.node_id is not None:
        row["node_id"] = step.node_id
    if step.sub_location is not None:
        row["sub_location"] = sub_location_to_dict(step.sub_location)
    return row


def identifier_to_dict(identifier: Identifier) -> dict[str, object]:
    """Serialize an identifier for snapshots and logging."""

    return {
        "raw": identifier.raw,
        "parts": [
            [step_to_dict(step) for step in part.steps]
            for part in identifier.parts
        ],
    }


def resolved_location_to_dict(
    location: ResolvedLocation,
    *,
    node_label: str | None = None,
) -> dict[str, object]:
    """Serialize a resolution result; the node is given as a caller-chosen label."""

    return {
        "node": node_label if node_label is not None else repr(location.node),
        "offset": location.offset,
        "side_bias": location.side_bias,
    }


def dumps_identifier(identifier: Identifier, *, pretty: bool = False) -> str:
    """JSON-encode ``identifier`` with sorted keys via orjson."""
    opts = orjson.OPT_SORT_KEYS
    if pretty:
        opts |= orjson.OPT_INDENT_2
    return orjson.dumps(identifier_to_dict(identifier), option=opts).decode("utf-8")


def _sub_location_from_dict(row: dict[str, Any]) -> SubLocation:
    spatial = row.get("spatial")
    return SubLocation(
        offset=row.get("offset"),
        side_bias=row.get("side_bias"),
        spatial=SpatialRange(start=int(spatial["from"]), end=int(spatial["to"])) if spatial else None,
        temporal=row.get("temporal"),
        text_assertion=row.get("text_assertion"),
    )


def _step_from_dict(row: dict[str, Any]) -> Step:
    sub_location = row.get("sub_location")
    return Step(
        node_index=row.get("node_index"),
        node_id=row.get("node_id"),
        sub_location=_sub_location_from_dict(sub_location) if sub_location is not None else None,
    )


def loads_identifier(payload: str | bytes) -> Identifier:
    """Rebuild an ``Identifier`` from ``dumps_identifier`` output.

    The structure is taken from the snapshot as-is; ``raw`` is not re-parsed.
    """
    data = orjson.loads(payload)
    parts = tuple(
        Part(steps=tuple(_step_from_dict(step) for step in part))
        for part in data["parts"]
    )
    return Identifier(raw=data["raw"], parts=parts)
