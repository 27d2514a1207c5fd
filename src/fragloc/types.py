"""Core value types for parsed fragment identifiers and resolution results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias


SideBias: TypeAlias = Literal["before", "after"]

SIDE_BIAS_MARKERS: dict[str, SideBias] = {
    "a": "after",
    "b": "before",
}


@dataclass(frozen=True, slots=True)
class SpatialRange:
    """Normalized 2D extent within media content (``@from:to``).

    Bounds are integer-truncated when parsed.
    """

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class SubLocation:
    """Parsed suffix of the terminal step.

    Only ``offset`` and ``side_bias`` take part in resolution; spatial and
    temporal values are parsed and carried along untouched.
    """

    offset: int | None = None
    side_bias: SideBias | None = None
    spatial: SpatialRange | None = None
    temporal: float | None = None
    text_assertion: str | None = None

    def __post_init__(self) -> None:
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be >= 0, got {self.offset}")
        if self.side_bias is not None and self.side_bias not in ("before", "after"):
            raise ValueError(f"unknown side_bias {self.side_bias!r}")

    @property
    def is_empty(self) -> bool:
        return (
            self.offset is None
            and self.side_bias is None
            and self.spatial is None
            and self.temporal is None
            and self.text_assertion is None
        )


@dataclass(frozen=True, slots=True)
class Step:
    """One hierarchical hop: child ordinal and/or ID anchor."""

    node_index: int | None = None  # 1-based among ALL children; 0 is folded to None
    node_id: str | None = None
    sub_location: SubLocation | None = None

    def __post_init__(self) -> None:
        if self.node_index is not None and self.node_index < 1:
            raise ValueError(f"node_index must be >= 1 or None, got {self.node_index}")
        if self.node_id is not None and not self.node_id:
            raise ValueError("node_id cannot be empty")


@dataclass(frozen=True, slots=True)
class Part:
    """Steps addressing one document in the chain (one ``!`` segment)."""

    steps: tuple[Step, ...]

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError("Part must contain at least one step")

    @property
    def last_step(self) -> Step:
        return self.steps[-1]


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """Node reached by resolution plus the terminal offset/bias, if any."""

    node: Any
    offset: int | None = None
    side_bias: SideBias | None = None


@dataclass(frozen=True, slots=True)
class ResolveOptions:
    """Resolution knobs. ``ignore_ids`` disables the ID-anchor shortcut."""

    ignore_ids: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ResolveOptions:
        """Build options from a plain mapping (e.g. decoded JSON).

        Accepts ``ignore_ids`` or the camel-case ``ignoreIDs`` key.
        Unknown keys are ignored.
        """
        if not data:
            return cls()
        raw = data.get("ignore_ids", data.get("ignoreIDs", False))
        return cls(ignore_ids=bool(raw))
