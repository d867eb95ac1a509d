"""
CFSlab Grid Variable

This module provides ``GridVariable``, access to all or part of a data
variable and to the matching part of each of its coordinate variables.

Example:
    >>> import cfslab
    >>> v = cfslab.open_variable("OS_M1_20081008_TS.nc", "TEMP",
    ...                          axes=["TIME", "DEPTH", "LATITUDE", "LONGITUDE"])
    >>> v.shape
    (9043, 11, 1, 1)
    >>> temp = v.data([1, 1, 1, 1], [100, 5, 1, 1])
    >>> grid = v.grid([1, 1, 1, 1], [100, 5, 1, 1])
    >>> last_values = v.mdata("end-2:end", "3:2:7")
"""

from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from .core.core_types import Shape, SliceOptions, SliceTriple
from .core.exceptions import ParameterError, RankMismatchError, raise_if_error
from .indexing.alignment import resolve_axis_triple
from .indexing.expressions import translate
from .io.source import RawDataSource
from .core.logging_config import get_logger

logger = get_logger('variable')

# ============================================================================
# Grid Variable
# ============================================================================

class GridVariable:
    """
    A data variable together with the coordinate variables describing it.

    Nothing is cached: shapes are queried from the source on every request
    and each request reads through the source exactly once per variable.
    """

    def __init__(self, source: RawDataSource, name: str, axes: Sequence[str] = ()):
        """
        Bind a variable of a data source.

        Args:
            source: Data source holding the variable and its axes
            name: Name of the data variable
            axes: Names of the coordinate variables, in declaration order

        Raises:
            UnknownVariableError: If the variable or an axis does not exist
        """
        self.source = source
        self._name = name
        self._axes = tuple(axes)

        # Fail early on unknown names
        source.shape_of(name)
        for axis in self._axes:
            source.shape_of(axis)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        """Name of the data variable."""
        return self._name

    @property
    def axes(self) -> Tuple[str, ...]:
        """Names of the coordinate variables associated with the variable."""
        return self._axes

    @property
    def shape(self) -> Shape:
        """Shape of the variable, including its singleton dimensions."""
        return self.source.shape_of(self._name)

    def size(self) -> Shape:
        """Shape of the variable, including its singleton dimensions."""
        return self.shape

    @property
    def rank(self) -> int:
        """Number of dimensions of the variable (0 for a scalar)."""
        return len(self.shape)

    def end(self, k: int) -> int:
        """
        Last index of dimension ``k`` (1-based), for end-relative indexing.

        Example:
            >>> v.data([v.end(1) - 3, 1, 1, 1])
        """
        shape = self.shape
        if not 1 <= k <= len(shape):
            raise ParameterError(
                "k", str(k), f"Dimension number must be in 1..{len(shape)}",
                variable=self._name
            )
        return shape[k - 1]

    @property
    def attributes(self) -> Dict[str, Any]:
        """Attributes of the variable."""
        return self.source.attributes(self._name)

    def attribute(self, key: str, default: Any = None) -> Any:
        """
        Value of a variable attribute, falling back to the global attribute.

        Args:
            key: Attribute name, e.g. 'units' or 'title'
            default: Returned when neither attribute exists
        """
        attributes = self.source.attributes(self._name)
        if key in attributes:
            return attributes[key]
        return self.source.global_attributes().get(key, default)

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------

    def fetch_all(self) -> np.ndarray:
        """Every value of the variable."""
        return self.source.read_all(self._name)

    def fetch_all_grid(self) -> Dict[str, np.ndarray]:
        """Every value of each coordinate variable, keyed by axis name."""
        return {axis: self.source.read_all(axis) for axis in self._axes}

    def _resolve_triple(
        self,
        first: Sequence[int],
        last: Optional[Sequence[int]],
        stride: Optional[Sequence[int]],
    ) -> Tuple[Shape, SliceTriple]:
        shape = self.shape
        # A bare integer is a one-element bound vector
        first = np.atleast_1d(first)
        last = None if last is None else np.atleast_1d(last)
        stride = None if stride is None else np.atleast_1d(stride)
        for bounds in (first, last, stride):
            if bounds is not None and len(bounds) != len(shape):
                raise RankMismatchError(self._name, len(shape), len(bounds), "hyperslab bounds")

        triple = SliceOptions(last=last, stride=stride).resolve(first, shape)
        raise_if_error(triple.check(self._name, shape))
        return shape, triple

    def fetch_slice(
        self,
        first: Sequence[int],
        last: Optional[Sequence[int]] = None,
        stride: Optional[Sequence[int]] = None,
    ) -> np.ndarray:
        """
        A hyperslab of the variable.

        Args:
            first: First index per dimension (1-based)
            last: Last index per dimension, inclusive (default: the shape)
            stride: Stride per dimension (default: all ones)

        Returns:
            np.ndarray: Selected values, every dimension kept

        Raises:
            RankMismatchError: If the bounds do not have one entry per dimension
            IndexOutOfRangeError: If a bound lies outside the variable
            ParameterError: If a stride is not positive
        """
        _, triple = self._resolve_triple(first, last, stride)
        if triple.rank == 0:
            return self.source.read_all(self._name)
        return self.source.read_slice(self._name, triple.first, triple.last, triple.stride)

    def fetch_slice_grid(
        self,
        first: Sequence[int],
        last: Optional[Sequence[int]] = None,
        stride: Optional[Sequence[int]] = None,
    ) -> Dict[str, np.ndarray]:
        """
        The part of each coordinate variable matching a hyperslab of the variable.

        Each axis is aligned against the variable's dimensions; axes without
        dimensions are returned whole. If any axis cannot be aligned the
        whole request fails.

        Raises:
            AxisShapeMismatchError: If an axis does not fit the variable
        """
        shape, triple = self._resolve_triple(first, last, stride)

        # Align every axis before reading any of them
        axis_triples = {
            axis: resolve_axis_triple(shape, triple, self.source.shape_of(axis), self._name, axis)
            for axis in self._axes
        }
        logger.debug("Reading grid of %s for %s", self._name, triple)

        grid = {}
        for axis, axis_triple in axis_triples.items():
            if axis_triple is None:
                grid[axis] = self.source.read_all(axis)
            else:
                grid[axis] = self.source.read_slice(
                    axis, axis_triple.first, axis_triple.last, axis_triple.stride
                )
        return grid

    def translate(self, *expressions: Any) -> SliceTriple:
        """Hyperslab triple for index expressions on this variable."""
        return translate(expressions, self.shape, self._name)

    def translate_and_fetch(self, *expressions: Any) -> np.ndarray:
        """
        Values selected with index expressions.

        Accepts ``ALL``/":", integers (negative count from the end),
        ``END - k``, ``Range``/``StridedRange`` and colon-syntax strings such
        as "end-3:end" or "3:2:7". Missing trailing dimensions select
        everything; a single ":" selects the whole array.
        """
        triple = self.translate(*expressions)
        return self.fetch_slice(triple.first, triple.last, triple.stride)

    # ------------------------------------------------------------------
    # Short forms
    # ------------------------------------------------------------------

    def data(
        self,
        first: Optional[Sequence[int]] = None,
        last: Optional[Sequence[int]] = None,
        stride: Optional[Sequence[int]] = None,
    ) -> np.ndarray:
        """All the data, or a hyperslab when ``first`` is given."""
        if first is None:
            return self.fetch_all()
        return self.fetch_slice(first, last, stride)

    def grid(
        self,
        first: Optional[Sequence[int]] = None,
        last: Optional[Sequence[int]] = None,
        stride: Optional[Sequence[int]] = None,
    ) -> Dict[str, np.ndarray]:
        """All coordinate data, or the part matching a hyperslab when ``first`` is given."""
        if first is None:
            return self.fetch_all_grid()
        return self.fetch_slice_grid(first, last, stride)

    def mdata(self, *expressions: Any) -> np.ndarray:
        """Alias of ``translate_and_fetch``; no expressions selects everything."""
        return self.translate_and_fetch(*expressions)

    # ------------------------------------------------------------------
    # Resource handling
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the data source.

        Only a source that opened its dataset itself (``open_variable`` on a
        path) releases anything; a wrapped in-memory dataset stays usable.
        """
        self.source.close()

    def __enter__(self) -> "GridVariable":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GridVariable(name={self._name!r}, shape={self.shape}, axes={list(self._axes)})"
