"""Resolution engine: walk a parsed identifier against a document tree.

Public API:

* ``resolve_node(identifier, index, tree, options)``: node addressed by one part.
* ``resolve_uri(identifier, index, tree, options)``: link to the next document.
* ``resolve(identifier, tree, options)``: terminal node plus offset/side bias.

Each part of an identifier addresses a separate document. The caller
supplies, for part ``index``, the tree of the document that part
addresses. Part 0 always addresses the package document.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fragloc.errors import (
    DocumentIncompatibleError,
    IndexOutOfBoundsError,
    MissingAttributeError,
    NodeResolutionError,
    ReferenceNotFoundError,
)
from fragloc.tree import DocumentTree
from fragloc.types import Part, ResolvedLocation, ResolveOptions

if TYPE_CHECKING:
    from fragloc.identifier import Identifier

logger = logging.getLogger(__name__)

# tag -> attribute holding the link, for elements needing no parent check
_LINK_ATTRIBUTES: dict[str, str] = {
    "iframe": "src",
    "embed": "src",
    "object": "data",
    "image": "xlink:href",
    "use": "xlink:href",
}


# ---------------------------------------------------------------------------
# Node walking
# ---------------------------------------------------------------------------


def _part_at(identifier: Identifier, index: int) -> Part:
    parts = identifier.parts
    if index < 0 or index >= len(parts):
        raise IndexOutOfBoundsError(index, len(parts), detail="missing part")
    return parts[index]


def _starting_node(index: int, tree: DocumentTree) -> Any | None:
    if index == 0:
        return tree.container_element()
    for node in tree.top_level_nodes():
        if tree.is_element(node):
            return node
    return None


def resolve_node(
    identifier: Identifier,
    index: int,
    tree: DocumentTree | None,
    options: ResolveOptions | None = None,
) -> Any:
    """Return the node addressed by part ``index`` within ``tree``.

    Steps are scanned from last to first for an ID that exists in the
    tree; the first hit becomes the starting node and index walking
    resumes right after it. With ``options.ignore_ids`` the whole part is
    walked by child ordinals from the starting element.
    """
    opts = options or ResolveOptions()
    if tree is None:
        raise DocumentIncompatibleError("Missing document tree argument")

    part = _part_at(identifier, index)
    node = _starting_node(index, tree)
    if node is None:
        raise DocumentIncompatibleError("Document incompatible with fragment identifiers")

    start_from = 0
    if not opts.ignore_ids:
        for step_index in range(len(part.steps) - 1, -1, -1):
            node_id = part.steps[step_index].node_id
            if not node_id:
                continue
            anchor = tree.get_element_by_id(node_id)
            if anchor is not None:
                logger.debug("Anchoring part %d at id %r (step %d)", index, node_id, step_index)
                node = anchor
                start_from = step_index + 1
                break

    for step_index in range(start_from, len(part.steps)):
        step = part.steps[step_index]
        children = tree.child_nodes(node)
        if step.node_index is None or step.node_index > len(children):
            raise NodeResolutionError(index, step_index, step.node_index)
        node = children[step.node_index - 1]
    return node


# ---------------------------------------------------------------------------
# Link extraction
# ---------------------------------------------------------------------------


def _required_attribute(tree: DocumentTree, node: Any, tag: str, name: str) -> str:
    value = tree.get_attribute(node, name)
    if not value:
        raise MissingAttributeError(tag, name)
    return value


def resolve_uri(
    identifier: Identifier,
    index: int,
    tree: DocumentTree | None,
    options: ResolveOptions | None = None,
) -> str | None:
    """Return the URI of the document addressed by part ``index + 1``.

    ``tree`` is the document addressed by part ``index``. Returns None
    when the resolved node is not a recognized link-bearing element.
    """
    part_count = len(identifier.parts)
    if index < 0 or index > part_count - 2:
        raise IndexOutOfBoundsError(index, part_count, detail="no following part")

    node = resolve_node(identifier, index, tree, options)
    assert tree is not None  # resolve_node rejects a missing tree
    tag = tree.tag_name(node).lower()

    if tag == "itemref":
        parent = tree.parent_node(node)
        if parent is not None and tree.tag_name(parent).lower() == "spine":
            idref = _required_attribute(tree, node, tag, "idref")
            item = tree.get_element_by_id(idref)
            if item is None:
                raise ReferenceNotFoundError(idref)
            return _required_attribute(tree, item, "manifest item", "href")

    attribute = _LINK_ATTRIBUTES.get(tag)
    if attribute is not None:
        return _required_attribute(tree, node, tag, attribute)

    logger.debug("Part %d resolved to non-link element %r", index, tag)
    return None


# ---------------------------------------------------------------------------
# Terminal location
# ---------------------------------------------------------------------------


def resolve(
    identifier: Identifier,
    tree: DocumentTree | None,
    options: ResolveOptions | None = None,
) -> ResolvedLocation:
    """Resolve the last part against ``tree`` (the final document).

    Offset and side bias come from the sub-location of the last step; an
    offset of 0 is reported as 0.
    """
    index = len(identifier.parts) - 1
    if index < 0:
        raise IndexOutOfBoundsError(index, 0, detail="identifier has no parts")

    node = resolve_node(identifier, index, tree, options)
    sub_location = identifier.parts[index].last_step.sub_location
    if sub_location is None:
        return ResolvedLocation(node=node)
    return ResolvedLocation(
        node=node,
        offset=sub_location.offset,
        side_bias=sub_location.side_bias,
    )
