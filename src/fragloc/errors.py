"""Exception hierarchy for parsing and resolving fragment identifiers.

Only structural failures raise. Malformed sub-grammar tokens (an
unparseable step, an empty part, a bad spatial range) are dropped during
parsing instead.
"""

from __future__ import annotations


class FragmentLocatorError(Exception):
    """Base class for every error raised by fragloc."""


class MalformedIdentifierError(FragmentLocatorError, ValueError):
    """Raised when the input is not wrapped in ``identifier(...)``."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"Not a valid fragment identifier: {raw!r}")


class IndexOutOfBoundsError(FragmentLocatorError, IndexError):
    """Raised when a part index is outside the range an operation accepts."""

    def __init__(self, index: int, part_count: int, *, detail: str = "") -> None:
        self.index = index
        self.part_count = part_count
        suffix = f" ({detail})" if detail else ""
        super().__init__(
            f"Part index {index} is out of bounds for identifier with "
            f"{part_count} part(s){suffix}"
        )


class DocumentIncompatibleError(FragmentLocatorError):
    """Raised when no usable starting node exists in the supplied tree."""


class NodeResolutionError(FragmentLocatorError, LookupError):
    """Raised when a step's child ordinal does not match any node."""

    def __init__(self, part_index: int, step_index: int, node_index: int | None) -> None:
        self.part_index = part_index
        self.step_index = step_index
        self.node_index = node_index
        super().__init__(
            f"Identifier did not match any node in this document "
            f"(part {part_index}, step {step_index}, node index {node_index})"
        )


class MissingAttributeError(FragmentLocatorError, LookupError):
    """Raised when a link-bearing element lacks the attribute carrying its link."""

    def __init__(self, tag: str, attribute: str) -> None:
        self.tag = tag
        self.attribute = attribute
        super().__init__(f"{tag} element is missing {attribute!r} attribute")


class ReferenceNotFoundError(FragmentLocatorError, LookupError):
    """Raised when an ``idref`` points to no element in the tree."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(f"Referenced node {reference!r} is missing from manifest")
