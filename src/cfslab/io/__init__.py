"""
CFSlab Data Sources

Raw data source interface and the xarray backed implementation.
"""

from .source import RawDataSource, XarraySource

__all__ = [
    "RawDataSource",
    "XarraySource",
]
