"""
CFSlab Main Interface

This module provides the entry points that open a data source and bind a
grid variable to it.
"""

from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import xarray as xr

from .core.config import DEFAULT_CHUNKS, DEFAULT_ENGINE
from .core.exceptions import InvalidSourceError
from .io.source import RawDataSource, XarraySource
from .variable import GridVariable
from .core.logging_config import get_logger

logger = get_logger('main')

SourceLike = Union[str, Path, xr.Dataset, RawDataSource]

# ============================================================================
# Main API Functions
# ============================================================================

def open_source(
    path: Union[str, Path],
    *,
    engine: Optional[str] = DEFAULT_ENGINE,
    chunks: Union[None, str, Dict[str, int]] = DEFAULT_CHUNKS,
) -> XarraySource:
    """
    Open a dataset file or URL as a raw data source.

    Args:
        path: File path or OPeNDAP URL
        engine: xarray backend engine (e.g. "netcdf4", "h5netcdf")
        chunks: Dask chunking configuration, None to read eagerly

    Returns:
        XarraySource: Source that closes the dataset when closed

    Examples:
        >>> with open_source("/path/to/file.nc") as src:
        ...     v = GridVariable(src, "TEMP", axes=["TIME", "DEPTH"])
        ...     t = v.data()
    """
    return XarraySource.from_path(path, engine=engine, chunks=chunks)


def as_source(
    src: SourceLike,
    *,
    engine: Optional[str] = DEFAULT_ENGINE,
    chunks: Union[None, str, Dict[str, int]] = DEFAULT_CHUNKS,
) -> RawDataSource:
    """
    Turn a path, an xarray Dataset or a data source into a data source.

    Raises:
        InvalidSourceError: For any other kind of object
    """
    if isinstance(src, RawDataSource):
        return src
    if isinstance(src, xr.Dataset):
        return XarraySource(src)
    if isinstance(src, (str, Path)):
        return open_source(src, engine=engine, chunks=chunks)
    raise InvalidSourceError(src)


def open_variable(
    src: SourceLike,
    name: str,
    axes: Optional[Sequence[str]] = None,
    *,
    engine: Optional[str] = DEFAULT_ENGINE,
    chunks: Union[None, str, Dict[str, int]] = DEFAULT_CHUNKS,
) -> GridVariable:
    """
    Bind a data variable and its coordinate variables.

    Args:
        src: Path or URL, xarray Dataset, or RawDataSource
        name: Name of the data variable
        axes: Names of its coordinate variables, in declaration order
        engine: xarray backend engine used when ``src`` is a path
        chunks: Dask chunking used when ``src`` is a path

    Returns:
        GridVariable: Accessor for the variable and its axes

    Raises:
        InvalidSourceError: If ``src`` cannot be used as a dataset
        UnknownVariableError: If the variable or an axis does not exist

    Examples:
        >>> v = open_variable("/path/to/file.nc", "TEMP",
        ...                   axes=["TIME", "DEPTH", "LATITUDE", "LONGITUDE"])
        >>> t = v.data([1, 1, 1, 1], [10, 2, 1, 1])
        >>> g = v.grid([1, 1, 1, 1], [10, 2, 1, 1])
    """
    source = as_source(src, engine=engine, chunks=chunks)
    logger.info("Opening variable %s with axes %s", name, list(axes or ()))
    return GridVariable(source, name, axes or ())
