"""
CFSlab Custom Exception Classes

This module defines the error taxonomy for hyperslab access. Every error
identifies the offending variable and, where it applies, the offending
dimension index (0-based) so callers can report a precise diagnostic.
"""

from typing import Optional, Sequence

# ============================================================================
# Base Exception
# ============================================================================

class CFSlabError(Exception):
    """Base exception class for all CFSlab related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

# ============================================================================
# Indexing Errors
# ============================================================================

class IndexOutOfRangeError(CFSlabError):
    """A resolved bound falls outside [1, extent] or first exceeds last."""

    def __init__(self, variable: str, dimension: int, first: int, last: int, extent: int):
        super().__init__(
            f"Index out of range for '{variable}' in dimension {dimension}: "
            f"first={first}, last={last}",
            f"Valid range is 1..{extent} with first <= last"
        )
        self.variable = variable
        self.dimension = dimension
        self.first = first
        self.last = last
        self.extent = extent

class RankMismatchError(CFSlabError):
    """More index values than the variable has dimensions."""

    def __init__(self, variable: str, expected: int, actual: int, what: str = "index expressions"):
        super().__init__(
            f"Rank mismatch for '{variable}': got {actual} {what}",
            f"Variable has {expected} dimension(s)"
        )
        self.variable = variable
        self.expected = expected
        self.actual = actual
        self.dimension = None

class AxisShapeMismatchError(CFSlabError):
    """A coordinate variable cannot be aligned against the data variable."""

    def __init__(
        self,
        variable: str,
        axis: str,
        variable_shape: Sequence[int],
        axis_shape: Sequence[int],
        dimension: Optional[int] = None,
    ):
        where = f" (dimension {dimension})" if dimension is not None else ""
        super().__init__(
            f"The data size of the coordinate variable '{axis}' does not fit "
            f"the size of '{variable}'{where}",
            f"{axis} shape {tuple(axis_shape)} vs {variable} shape {tuple(variable_shape)}"
        )
        self.variable = variable
        self.axis = axis
        self.variable_shape = tuple(variable_shape)
        self.axis_shape = tuple(axis_shape)
        self.dimension = dimension

# ============================================================================
# Data Source Errors
# ============================================================================

class UnknownVariableError(CFSlabError):
    """Variable not found in the data source."""

    def __init__(self, variable: str, available_variables: Optional[Sequence[str]] = None):
        super().__init__(
            f"Variable not found: {variable}",
            f"Available variables: {', '.join(sorted(available_variables))}" if available_variables else None
        )
        self.variable = variable
        self.available_variables = list(available_variables) if available_variables else None
        self.dimension = None

class OutOfBoundsError(CFSlabError):
    """A hyperslab read exceeds the stored extent of a variable."""

    def __init__(self, variable: str, dimension: int, index: int, extent: int):
        super().__init__(
            f"Read out of bounds for '{variable}' in dimension {dimension}: index {index}",
            f"Stored extent is {extent}"
        )
        self.variable = variable
        self.dimension = dimension
        self.index = index
        self.extent = extent

class InvalidSourceError(CFSlabError):
    """The object given as a dataset cannot be used as a data source."""

    def __init__(self, source: object):
        super().__init__(
            "Invalid dataset was specified",
            f"Got object of type {type(source).__name__}"
        )
        self.source = source

# ============================================================================
# Parameter Errors
# ============================================================================

class ParameterError(CFSlabError):
    """Parameter validation errors."""

    def __init__(
        self,
        parameter: str,
        value: str,
        reason: str,
        variable: Optional[str] = None,
        dimension: Optional[int] = None,
    ):
        prefix = f"'{variable}': " if variable else ""
        super().__init__(f"{prefix}Invalid parameter '{parameter}': {value}", reason)
        self.parameter = parameter
        self.value = value
        self.variable = variable
        self.dimension = dimension

# ============================================================================
# Utility Functions
# ============================================================================

def raise_if_error(error: Optional[CFSlabError]) -> None:
    """Raise the given error value, if any."""
    if error is not None:
        raise error
