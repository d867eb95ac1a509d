"""
CFSlab Raw Data Sources

This module defines the interface the hyperslab core reads through, and an
implementation backed by an xarray Dataset. The source answers three
questions: the declared shape of a variable, its full contents, and the
contents of a 1-based inclusive hyperslab. It also exposes the attribute
store, which the indexing logic never consults.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import xarray as xr

from ..core.config import DEFAULT_CHUNKS, DEFAULT_ENGINE, INDEX_BASE
from ..core.core_types import Shape, SliceTriple
from ..core.exceptions import (
    OutOfBoundsError, ParameterError, RankMismatchError, UnknownVariableError
)
from ..core.logging_config import get_logger

logger = get_logger('io.source')

# ============================================================================
# Source Interface
# ============================================================================

class RawDataSource(ABC):
    """
    Read-only access to the variables of one dataset.

    Implementations are passed explicitly to every variable accessor; the
    accessors never mutate them.
    """

    @abstractmethod
    def variable_names(self) -> List[str]:
        """Names of all variables in the dataset."""

    @abstractmethod
    def shape_of(self, name: str) -> Shape:
        """
        Declared shape of a variable.

        Raises:
            UnknownVariableError: If the name does not exist
        """

    @abstractmethod
    def read_all(self, name: str) -> np.ndarray:
        """Read every element of a variable."""

    @abstractmethod
    def read_slice(
        self,
        name: str,
        first: Sequence[int],
        last: Sequence[int],
        stride: Sequence[int]
    ) -> np.ndarray:
        """
        Read a rectangular hyperslab (1-based, inclusive bounds).

        Raises:
            OutOfBoundsError: If any index exceeds the variable's shape
            ParameterError: If a stride is not positive
        """

    @abstractmethod
    def attributes(self, name: str) -> Dict[str, Any]:
        """Attributes attached to a variable."""

    @abstractmethod
    def global_attributes(self) -> Dict[str, Any]:
        """Attributes attached to the dataset itself."""

    def has_variable(self, name: str) -> bool:
        return name in self.variable_names()

    def close(self) -> None:
        """Release the underlying dataset; sources holding nothing to release ignore it."""

    def __enter__(self) -> "RawDataSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

# ============================================================================
# xarray Backed Source
# ============================================================================

class XarraySource(RawDataSource):
    """
    Raw data source over an ``xarray.Dataset``.

    Dimension order of each variable defines its shape order. Values are
    returned as numpy arrays with every dimension kept, singleton ones
    included.
    """

    def __init__(self, dataset: xr.Dataset, owns_dataset: bool = False):
        """
        Wrap an already opened dataset.

        Args:
            dataset: Dataset to read from
            owns_dataset: Close the dataset when this source is closed
        """
        self.dataset = dataset
        self._owns_dataset = owns_dataset

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        engine: Optional[str] = DEFAULT_ENGINE,
        chunks: Union[None, str, Dict[str, int]] = DEFAULT_CHUNKS
    ) -> "XarraySource":
        """
        Open a file (or URL) with ``xarray.open_dataset``.

        Args:
            path: File path or OPeNDAP URL
            engine: xarray backend engine (None lets xarray choose)
            chunks: Dask chunking configuration (None reads eagerly)

        Returns:
            XarraySource: Source owning the opened dataset
        """
        logger.debug("Opening dataset %s (engine=%s, chunks=%s)", path, engine, chunks)
        dataset = xr.open_dataset(path, engine=engine, chunks=chunks)
        return cls(dataset, owns_dataset=True)

    def close(self) -> None:
        if self._owns_dataset:
            self.dataset.close()

    def variable_names(self) -> List[str]:
        return [str(name) for name in self.dataset.variables]

    def _get(self, name: str) -> xr.Variable:
        try:
            return self.dataset.variables[name]
        except KeyError:
            raise UnknownVariableError(name, self.variable_names()) from None

    def shape_of(self, name: str) -> Shape:
        return tuple(int(n) for n in self._get(name).shape)

    def read_all(self, name: str) -> np.ndarray:
        logger.debug("Reading all of %s", name)
        return np.asarray(self._get(name).values)

    def read_slice(
        self,
        name: str,
        first: Sequence[int],
        last: Sequence[int],
        stride: Sequence[int]
    ) -> np.ndarray:
        variable = self._get(name)
        shape = variable.shape
        triple = SliceTriple(first=first, last=last, stride=stride)
        if triple.rank != len(shape):
            raise RankMismatchError(name, len(shape), triple.rank, "hyperslab bounds")

        for dim, (f, l, s, n) in enumerate(zip(triple.first, triple.last, triple.stride, shape)):
            if s < 1:
                raise ParameterError(
                    "stride", str(s), "Stride must be >= 1", variable=name, dimension=dim
                )
            if f < INDEX_BASE:
                raise OutOfBoundsError(name, dim, f, n)
            if l > n:
                raise OutOfBoundsError(name, dim, l, n)

        logger.debug(
            "Reading %s first=%s last=%s stride=%s",
            name, triple.first, triple.last, triple.stride
        )
        indexers = dict(zip(variable.dims, triple.to_slices()))
        return np.asarray(variable.isel(indexers).values)

    def attributes(self, name: str) -> Dict[str, Any]:
        return dict(self._get(name).attrs)

    def global_attributes(self) -> Dict[str, Any]:
        return dict(self.dataset.attrs)

    def __repr__(self) -> str:
        return f"XarraySource(variables={self.variable_names()})"
