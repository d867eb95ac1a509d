"""
CFSlab Type Definitions and Data Classes

This module defines the data structures shared by the slice expression
translator, the dimension alignment resolver and the data accessor:
hyperslab triples, their default-filling options, and the per-dimension
index expression forms.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_STRIDE, END_KEYWORD, INDEX_BASE
from .exceptions import (
    CFSlabError, IndexOutOfRangeError, ParameterError, RankMismatchError
)

# ============================================================================
# Type Aliases
# ============================================================================

Shape = Tuple[int, ...]
IndexVector = Sequence[int]

# ============================================================================
# Validation Utilities (Module Level)
# ============================================================================

def _as_index_tuple(name: str, values: IndexVector) -> Tuple[int, ...]:
    """Convert a sequence of integer-like values to a tuple of ints."""
    array = np.asarray(values).ravel()
    if array.size == 0:
        return ()
    if not np.issubdtype(array.dtype, np.number) or not np.all(np.mod(array, 1) == 0):
        raise ParameterError(name, str(values), "Index values must be integers")
    return tuple(int(v) for v in array)

# ============================================================================
# Hyperslab Triple
# ============================================================================

@dataclass(frozen=True)
class SliceTriple:
    """
    Rectangular hyperslab over a variable, one entry per dimension.

    Bounds are 1-based and inclusive. A triple of rank 0 describes a
    scalar (dimensionless) variable.

    Attributes:
        first: First selected index along each dimension
        last: Last selected index along each dimension
        stride: Step between selected indices along each dimension
    """
    first: Tuple[int, ...] = ()
    last: Tuple[int, ...] = ()
    stride: Tuple[int, ...] = ()

    def __post_init__(self):
        """Normalize to int tuples and check the three lengths agree."""
        object.__setattr__(self, "first", _as_index_tuple("first", self.first))
        object.__setattr__(self, "last", _as_index_tuple("last", self.last))
        object.__setattr__(self, "stride", _as_index_tuple("stride", self.stride))

        if not len(self.first) == len(self.last) == len(self.stride):
            raise ParameterError(
                "first/last/stride",
                f"{len(self.first)}/{len(self.last)}/{len(self.stride)}",
                "All three sequences must have the same length"
            )

    @classmethod
    def full(cls, shape: Sequence[int]) -> SliceTriple:
        """Triple selecting every element of an array with the given shape."""
        shape = tuple(int(n) for n in shape)
        return cls(
            first=(INDEX_BASE,) * len(shape),
            last=shape,
            stride=(DEFAULT_STRIDE,) * len(shape),
        )

    @property
    def rank(self) -> int:
        """Number of dimensions described."""
        return len(self.first)

    @property
    def counts(self) -> Tuple[int, ...]:
        """Number of selected elements along each dimension."""
        return tuple(
            -(-(l - f + 1) // s) for f, l, s in zip(self.first, self.last, self.stride)
        )

    def take(self, dims: Sequence[int]) -> SliceTriple:
        """Sub-triple restricted to the given dimension indices, in order."""
        return SliceTriple(
            first=tuple(self.first[d] for d in dims),
            last=tuple(self.last[d] for d in dims),
            stride=tuple(self.stride[d] for d in dims),
        )

    def to_slices(self) -> Tuple[slice, ...]:
        """Equivalent 0-based Python slices, one per dimension."""
        return tuple(
            slice(f - INDEX_BASE, l - INDEX_BASE + 1, s)
            for f, l, s in zip(self.first, self.last, self.stride)
        )

    def check(self, variable: str, shape: Sequence[int]) -> Optional[CFSlabError]:
        """
        Check this triple against a variable shape.

        Args:
            variable: Variable name used in the error
            shape: Declared shape of the variable

        Returns:
            Optional[CFSlabError]: First violation found, or None when valid
        """
        if self.rank != len(shape):
            return RankMismatchError(variable, len(shape), self.rank, "hyperslab bounds")

        for dim, (f, l, s, n) in enumerate(zip(self.first, self.last, self.stride, shape)):
            if s < 1:
                return ParameterError(
                    "stride", str(s), "Stride must be >= 1",
                    variable=variable, dimension=dim
                )
            if f < INDEX_BASE or l > n or f > l:
                return IndexOutOfRangeError(variable, dim, f, l, n)

        return None

# ============================================================================
# Default Filling
# ============================================================================

@dataclass
class SliceOptions:
    """
    Optional trailing hyperslab parameters.

    Missing values are filled once, at the entry point, from the variable
    shape: ``last`` defaults to the shape and ``stride`` to all ones.

    Attributes:
        last: Last index per dimension, or None for the end of each dimension
        stride: Stride per dimension, or None for unit stride
    """
    last: Optional[IndexVector] = None
    stride: Optional[IndexVector] = None

    def resolve(self, first: IndexVector, shape: Sequence[int]) -> SliceTriple:
        """Build the complete triple for a variable of the given shape."""
        last = tuple(shape) if self.last is None else self.last
        stride = (DEFAULT_STRIDE,) * len(shape) if self.stride is None else self.stride
        return SliceTriple(first=first, last=last, stride=stride)

# ============================================================================
# Index Expressions
# ============================================================================

@dataclass(frozen=True)
class End:
    """
    Index relative to the end of a dimension.

    ``END`` is the last index; ``END - 2`` is two before it.
    """
    offset: int = 0

    def __sub__(self, other: int) -> End:
        return End(self.offset + int(other))

    def __add__(self, other: int) -> End:
        return End(self.offset - int(other))

    def resolve(self, extent: int) -> int:
        return extent - self.offset

    def __repr__(self) -> str:
        if self.offset == 0:
            return END_KEYWORD
        sign = "-" if self.offset > 0 else "+"
        return f"{END_KEYWORD}{sign}{abs(self.offset)}"


END = End()

Bound = Union[int, End]


@dataclass(frozen=True)
class All:
    """Every element of a dimension (the colon)."""

    def __repr__(self) -> str:
        return "ALL"


ALL = All()


@dataclass(frozen=True)
class Scalar:
    """A single index."""
    value: Bound


@dataclass(frozen=True)
class Range:
    """Inclusive range of indices with unit stride."""
    start: Bound
    stop: Bound


@dataclass(frozen=True)
class StridedRange:
    """Inclusive range of indices with an explicit stride."""
    start: Bound
    step: int
    stop: Bound


IndexExpression = Union[All, Scalar, Range, StridedRange]
