"""
CFSlab Coordinate Dimension Alignment

This module works out which dimensions of a data variable a coordinate
(axis) variable spans, using shapes only, and derives the coordinate's own
hyperslab from the data variable's hyperslab.

Matching rules, tried in order; the first rule that applies decides, with
no backtracking when its consistency check then fails:

1. Same rank: the shapes must be identical and the axis spans every
   dimension.
2. Rank 1: the axis spans the first data dimension with the same extent.
3. Lower rank: the axis spans the contiguous run of data dimensions that
   starts at the first dimension whose extent equals the axis' first
   extent.

Rank 0 axes have no dimensions and are always read whole.

Known limitation: when several data dimensions share the axis' extent (a
square lat/lon grid, say) the first one in dimension order is chosen.
"""

from typing import Optional, Sequence, Tuple, Union

from ..core.core_types import SliceTriple
from ..core.exceptions import AxisShapeMismatchError
from ..core.logging_config import get_logger

logger = get_logger('indexing.alignment')

Dimensions = Tuple[int, ...]

# ============================================================================
# Shape Matching
# ============================================================================

def find_axis_dimensions(
    variable_shape: Sequence[int],
    axis_shape: Sequence[int],
    variable: str = "",
    axis: str = "",
) -> Union[Dimensions, AxisShapeMismatchError]:
    """
    Find the data dimensions an axis variable spans.

    Args:
        variable_shape: Shape of the data variable
        axis_shape: Shape of the coordinate variable
        variable: Data variable name used in the error
        axis: Coordinate variable name used in the error

    Returns:
        Dimensions | AxisShapeMismatchError: Indices of the spanned data
        dimensions (empty for a rank 0 axis), or the mismatch as an error
        value
    """
    shape = tuple(variable_shape)
    axis_shape = tuple(axis_shape)
    rank, axis_rank = len(shape), len(axis_shape)

    def mismatch(dimension: Optional[int] = None) -> AxisShapeMismatchError:
        return AxisShapeMismatchError(variable, axis, shape, axis_shape, dimension)

    if axis_rank == 0:
        return ()

    if axis_rank == rank:
        if axis_shape == shape:
            return tuple(range(rank))
        return mismatch()

    # Start of the run: first dimension with the axis' leading extent
    try:
        start = shape.index(axis_shape[0])
    except ValueError:
        return mismatch()

    if axis_rank == 1:
        if shape.count(axis_shape[0]) > 1:
            logger.debug(
                "Axis %s%s matches several dimensions of %s%s; using dimension %d",
                axis, axis_shape, variable, shape, start
            )
        return (start,)

    for offset in range(1, axis_rank):
        dim = start + offset
        if dim >= rank or shape[dim] != axis_shape[offset]:
            return mismatch(min(dim, rank - 1))

    return tuple(range(start, start + axis_rank))


def align_axis(
    variable_shape: Sequence[int],
    axis_shape: Sequence[int],
    variable: str = "",
    axis: str = "",
) -> Dimensions:
    """
    Find the data dimensions an axis variable spans.

    Raises:
        AxisShapeMismatchError: If the axis cannot be aligned

    Examples:
        >>> align_axis((9043, 11, 1, 1), (11,))
        (1,)
        >>> align_axis((100, 5, 3), (5, 3))
        (1, 2)
    """
    result = find_axis_dimensions(variable_shape, axis_shape, variable, axis)
    if isinstance(result, AxisShapeMismatchError):
        raise result
    return result

# ============================================================================
# Hyperslab Derivation
# ============================================================================

def resolve_axis_triple(
    variable_shape: Sequence[int],
    triple: SliceTriple,
    axis_shape: Sequence[int],
    variable: str = "",
    axis: str = "",
) -> Optional[SliceTriple]:
    """
    Derive an axis variable's hyperslab from the data variable's hyperslab.

    Args:
        variable_shape: Shape of the data variable
        triple: Hyperslab requested on the data variable
        axis_shape: Shape of the coordinate variable
        variable: Data variable name used in errors
        axis: Coordinate variable name used in errors

    Returns:
        Optional[SliceTriple]: The axis' own triple, or None for a rank 0
        axis which must be read unsliced

    Raises:
        AxisShapeMismatchError: If the axis cannot be aligned
    """
    dims = align_axis(variable_shape, axis_shape, variable, axis)
    if not dims:
        return None

    axis_triple = triple.take(dims)
    logger.debug("Axis %s spans dimensions %s of %s: %s", axis, dims, variable, axis_triple)
    return axis_triple
