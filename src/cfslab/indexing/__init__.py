"""
CFSlab Indexing

Slice expression translation and coordinate dimension alignment.
"""

# Slice expression translation
from .expressions import (
    parse_bound,
    parse_expression,
    as_expression,
    resolve_bound,
    expand_expressions,
    translate,
)

# Coordinate alignment
from .alignment import (
    find_axis_dimensions,
    align_axis,
    resolve_axis_triple,
)

__all__ = [
    # Slice expression translation
    "parse_bound",
    "parse_expression",
    "as_expression",
    "resolve_bound",
    "expand_expressions",
    "translate",
    # Coordinate alignment
    "find_axis_dimensions",
    "align_axis",
    "resolve_axis_triple",
]
