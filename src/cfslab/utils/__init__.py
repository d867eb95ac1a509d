"""
CFSlab Utilities

This package provides information queries on grid variables.
"""

from .info import (
    get_variable_info,
    describe_alignment,
)

__all__ = [
    "get_variable_info",
    "describe_alignment",
]
