"""Identifier: the parsed, immutable form of a fragment identifier string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fragloc import resolver
from fragloc.grammar import parse_parts
from fragloc.tree import DocumentTree
from fragloc.types import Part, ResolvedLocation, ResolveOptions, Step


@dataclass(frozen=True, slots=True)
class Identifier:
    """Parsed ``identifier(...)`` string.

    ``parts`` addresses a chain of documents: each part but the last ends
    on a link-bearing element pointing at the document the next part
    walks. Resolution never mutates the identifier, so one instance can be
    resolved from several threads against independent trees.
    """

    raw: str
    parts: tuple[Part, ...]

    def __post_init__(self) -> None:
        for part in self.parts[:-1]:
            if any(step.sub_location is not None for step in part.steps):
                raise ValueError("sub_location is only allowed on the last part")
        if self.parts:
            for step in self.parts[-1].steps[:-1]:
                if step.sub_location is not None:
                    raise ValueError("sub_location is only allowed on the last step")

    @classmethod
    def parse(cls, raw: str) -> Identifier:
        """Parse ``raw``; raises MalformedIdentifierError without the wrapper."""
        return cls(raw=raw, parts=parse_parts(raw))

    def __str__(self) -> str:
        return self.raw

    @property
    def last_step(self) -> Step | None:
        if not self.parts:
            return None
        return self.parts[-1].last_step

    def resolve_node(
        self,
        index: int,
        tree: DocumentTree | None,
        options: ResolveOptions | None = None,
    ) -> Any:
        return resolver.resolve_node(self, index, tree, options)

    def resolve_uri(
        self,
        index: int,
        tree: DocumentTree | None,
        options: ResolveOptions | None = None,
    ) -> str | None:
        return resolver.resolve_uri(self, index, tree, options)

    def resolve(
        self,
        tree: DocumentTree | None,
        options: ResolveOptions | None = None,
    ) -> ResolvedLocation:
        return resolver.resolve(self, tree, options)


def parse_identifier(raw: str) -> Identifier:
    """Parse a raw ``identifier(...)`` string into an ``Identifier``."""
    return Identifier.parse(raw)
