"""
CFSlab Information Utilities

This module provides functions summarizing a grid variable and how each of
its coordinate variables lines up with its dimensions.
"""

from typing import Any, Dict

from ..core.exceptions import AxisShapeMismatchError
from ..indexing.alignment import find_axis_dimensions
from ..variable import GridVariable


# ============================================================================
# Variable Information
# ============================================================================

def get_variable_info(variable: GridVariable) -> Dict[str, Any]:
    """
    Get shape and axis alignment information for a variable.

    Args:
        variable: Grid variable to describe

    Returns:
        Dict: name, shape, rank and, per axis, its shape and the data
        dimensions it spans (``None`` for an axis without dimensions,
        the error message for an axis that does not fit)

    Examples:
        >>> info = get_variable_info(v)
        >>> info['axes']['DEPTH']['dimensions']
        (1,)
    """
    shape = variable.shape
    axes = {}
    for axis in variable.axes:
        axis_shape = variable.source.shape_of(axis)
        result = find_axis_dimensions(shape, axis_shape, variable.name, axis)
        entry = {'shape': axis_shape, 'dimensions': None, 'error': None}
        if isinstance(result, AxisShapeMismatchError):
            entry['error'] = result.message
        elif result:
            entry['dimensions'] = result
        axes[axis] = entry

    return {
        'name': variable.name,
        'shape': shape,
        'rank': len(shape),
        'axes': axes,
    }


def describe_alignment(variable: GridVariable) -> str:
    """
    Human readable summary of a variable and its axes.

    Examples:
        >>> print(describe_alignment(v))
        TEMP (9043, 11, 1, 1)
          TIME (9043,) -> dims (0,)
          DEPTH (11,) -> dims (1,)
    """
    info = get_variable_info(variable)
    lines = [f"{info['name']} {info['shape']}"]
    for axis, entry in info['axes'].items():
        if entry['error']:
            target = f"does not fit: {entry['error']}"
        elif entry['dimensions'] is None:
            target = "no dimensions (read whole)"
        else:
            target = f"dims {entry['dimensions']}"
        lines.append(f"  {axis} {entry['shape']} -> {target}")
    return "\n".join(lines)
