"""
CFSlab Configuration and Constants

This module centralizes the configuration parameters, constants, and default
values shared by the indexing, alignment and data access layers.
"""

import os
from typing import Dict, Optional, Union

# ============================================================================
# Package Identity
# ============================================================================

LOGGER_NAME = "cfslab"

# ============================================================================
# Index Conventions
# ============================================================================

# Hyperslab bounds are 1-based and inclusive on both ends
INDEX_BASE = 1
DEFAULT_STRIDE = 1

# ============================================================================
# Slice Expression Syntax
# ============================================================================

END_KEYWORD = "end"
ALL_TOKEN = ":"
EXPRESSION_SEPARATOR = ":"

# end, end-3, end+0, 12, -1
BOUND_PATTERN = r"^\s*(?:(?P<end>end)\s*(?:(?P<sign>[+-])\s*(?P<offset>\d+))?|(?P<literal>[+-]?\d+))\s*$"

# ============================================================================
# Backend Defaults
# ============================================================================

# Users can override via CFSLAB_ENGINE / CFSLAB_CHUNKS environment variables
DEFAULT_ENGINE: Optional[str] = os.environ.get("CFSLAB_ENGINE") or None


def _parse_chunks(value: Optional[str]) -> Union[None, str, Dict[str, int]]:
    """Parse the CFSLAB_CHUNKS setting ("auto" or "dim=size,dim=size")."""
    if not value:
        return None
    if value == "auto":
        return value
    chunks = {}
    for item in value.split(","):
        dim, _, size = item.partition("=")
        chunks[dim.strip()] = int(size)
    return chunks


DEFAULT_CHUNKS = _parse_chunks(os.environ.get("CFSLAB_CHUNKS"))
