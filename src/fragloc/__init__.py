"""Fragment identifier parsing and resolution against linked document trees."""

from fragloc.errors import (
    DocumentIncompatibleError,
    FragmentLocatorError,
    IndexOutOfBoundsError,
    MalformedIdentifierError,
    MissingAttributeError,
    NodeResolutionError,
    ReferenceNotFoundError,
)
from fragloc.grammar import parse_parts, parse_step
from fragloc.identifier import Identifier, parse_identifier
from fragloc.resolver import resolve, resolve_node, resolve_uri
from fragloc.serialize import (
    dumps_identifier,
    identifier_to_dict,
    loads_identifier,
    resolved_location_to_dict,
)
from fragloc.sublocation import parse_range, parse_side_bias, parse_sub_location
from fragloc.tree import DocumentTree, SoupTree
from fragloc.types import (
    Part,
    ResolvedLocation,
    ResolveOptions,
    SideBias,
    SpatialRange,
    Step,
    SubLocation,
)

__all__ = [
    "DocumentIncompatibleError",
    "DocumentTree",
    "FragmentLocatorError",
    "Identifier",
    "IndexOutOfBoundsError",
    "MalformedIdentifierError",
    "MissingAttributeError",
    "NodeResolutionError",
    "Part",
    "ReferenceNotFoundError",
    "ResolveOptions",
    "ResolvedLocation",
    "SideBias",
    "SoupTree",
    "SpatialRange",
    "Step",
    "SubLocation",
    "dumps_identifier",
    "identifier_to_dict",
    "loads_identifier",
    "parse_identifier",
    "parse_parts",
    "parse_range",
    "parse_side_bias",
    "parse_step",
    "parse_sub_location",
    "resolve",
    "resolve_node",
    "resolve_uri",
    "resolved_location_to_dict",
]
