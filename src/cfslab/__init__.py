"""
CFSlab - Hyperslab access to gridded variables and their coordinates.

This package reads all or part of a multi-dimensional data variable and the
matching part of every coordinate variable describing its dimensions, with
1-based inclusive first/last/stride bounds or colon-syntax index
expressions.

Key Features:
- Hyperslab reads with default last (end of each dimension) and stride (1)
- Index expressions: ":", ranges, strides, "end"-relative and negative indices
- Coordinate variables of any lower rank aligned against the data dimensions
- xarray backed data source, any object implementing RawDataSource works

Quick Start:
    >>> import cfslab
    >>> v = cfslab.open_variable("/path/to/file.nc", "TEMP",
    ...                          axes=["TIME", "DEPTH", "LATITUDE", "LONGITUDE"])
    >>> temp = v.data([1, 1, 1, 1], [100, 5, 1, 1])
    >>> grid = v.grid([1, 1, 1, 1], [100, 5, 1, 1])
    >>> tail = v.mdata("end-2:end", ":")
"""

__version__ = "1.0.0"
__author__ = "CFSlab Development Team"

# Main interface functions
from .main import (
    open_source,
    open_variable,
    as_source,
)

from .variable import GridVariable

# Data sources
from .io.source import RawDataSource, XarraySource

# Types and index expressions
from .core.core_types import (
    SliceTriple,
    SliceOptions,
    End,
    END,
    All,
    ALL,
    Scalar,
    Range,
    StridedRange,
)

# Indexing functions
from .indexing import (
    translate,
    parse_expression,
    align_axis,
    resolve_axis_triple,
)

# Exceptions for error handling
from .core.exceptions import (
    CFSlabError,
    IndexOutOfRangeError,
    RankMismatchError,
    AxisShapeMismatchError,
    UnknownVariableError,
    OutOfBoundsError,
    InvalidSourceError,
    ParameterError,
)

# Logging configuration
from .core.logging_config import setup_logging, set_log_level

# Information utilities
from .utils import get_variable_info, describe_alignment

__all__ = [
    # Version info
    '__version__',

    # Main interface
    'open_source',
    'open_variable',
    'as_source',
    'GridVariable',

    # Data sources
    'RawDataSource',
    'XarraySource',

    # Types and index expressions
    'SliceTriple',
    'SliceOptions',
    'End',
    'END',
    'All',
    'ALL',
    'Scalar',
    'Range',
    'StridedRange',

    # Indexing functions
    'translate',
    'parse_expression',
    'align_axis',
    'resolve_axis_triple',

    # Exception classes
    'CFSlabError',
    'IndexOutOfRangeError',
    'RankMismatchError',
    'AxisShapeMismatchError',
    'UnknownVariableError',
    'OutOfBoundsError',
    'InvalidSourceError',
    'ParameterError',

    # Logging configuration
    'setup_logging',
    'set_log_level',

    # Information utilities
    'get_variable_info',
    'describe_alignment',
]
