"""
CFSlab Slice Expression Translation

This module turns per-dimension index expressions (colon, scalars, ranges,
strided ranges, ``end``-relative and negative indices) into a concrete
1-based hyperslab triple for a variable of known shape.

String expressions use colon syntax with the stride in the middle:
``"end-3:end"``, ``"3:2:7"``, ``"-1"``, ``":"``.
"""

import re
from typing import Any, List, Sequence, Tuple

import numpy as np

from ..core.config import (
    ALL_TOKEN, BOUND_PATTERN, DEFAULT_STRIDE, END_KEYWORD, EXPRESSION_SEPARATOR, INDEX_BASE
)
from ..core.core_types import (
    ALL, All, Bound, End, IndexExpression, Range, Scalar, SliceTriple, StridedRange
)
from ..core.exceptions import ParameterError, RankMismatchError, raise_if_error
from ..core.logging_config import get_logger

logger = get_logger('indexing.expressions')

_BOUND_RE = re.compile(BOUND_PATTERN)

# ============================================================================
# Parsing
# ============================================================================

def parse_bound(text: str) -> Bound:
    """
    Parse a single bound: a literal index or an ``end`` relative one.

    Examples:
        "7" -> 7, "-1" -> -1, "end" -> END, "end-2" -> END - 2
    """
    match = _BOUND_RE.match(text)
    if not match:
        raise ParameterError("index", repr(text), f"Expected an integer, '{END_KEYWORD}' or '{END_KEYWORD}-k'")

    if match.group("literal") is not None:
        return int(match.group("literal"))

    offset = int(match.group("offset") or 0)
    return End(offset) if match.group("sign") != "+" else End(-offset)


def parse_expression(text: str) -> IndexExpression:
    """
    Parse a colon-syntax expression for one dimension.

    Args:
        text: ``":"``, ``"b"``, ``"a:b"`` or ``"a:s:b"``

    Returns:
        IndexExpression: Parsed expression

    Raises:
        ParameterError: If the text is not a valid expression
    """
    if text.strip() == ALL_TOKEN:
        return ALL

    parts = text.split(EXPRESSION_SEPARATOR)
    if len(parts) == 1:
        return Scalar(parse_bound(parts[0]))
    if len(parts) == 2:
        return Range(parse_bound(parts[0]), parse_bound(parts[1]))
    if len(parts) == 3:
        step = parse_bound(parts[1])
        if isinstance(step, End):
            raise ParameterError("stride", repr(text), "Stride must be a literal integer")
        return StridedRange(parse_bound(parts[0]), step, parse_bound(parts[2]))

    raise ParameterError("expression", repr(text), "Use ':', 'b', 'a:b' or 'a:s:b'")


def as_expression(value: Any) -> IndexExpression:
    """
    Coerce a user supplied index into an expression.

    Accepts the expression types themselves, ``ALL``, ``":"``,
    ``slice(None)``, integers (numpy ones included), ``End`` values and
    colon-syntax strings.
    """
    if isinstance(value, (All, Scalar, Range, StridedRange)):
        return value
    if isinstance(value, End):
        return Scalar(value)
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return Scalar(int(value))
    if isinstance(value, str):
        return parse_expression(value)
    if isinstance(value, slice) and value == slice(None):
        return ALL

    raise ParameterError(
        "expression", repr(value),
        "Expected ALL, an int, END-relative index, Range, StridedRange or a colon-syntax string"
    )

# ============================================================================
# Resolution
# ============================================================================

def resolve_bound(bound: Bound, extent: int) -> int:
    """
    Resolve a bound to an absolute 1-based index.

    Negative literals count back from the end (-1 is the last element),
    just as ``END - k`` does. Zero is returned unchanged so range checking
    rejects it.
    """
    if isinstance(bound, End):
        return bound.resolve(extent)
    if bound < 0:
        return extent + INDEX_BASE + bound
    return bound


def resolve_expression(
    expression: IndexExpression,
    extent: int,
) -> Tuple[int, int, int]:
    """Resolve one expression against one dimension extent to (first, last, stride)."""
    if isinstance(expression, All):
        return INDEX_BASE, extent, DEFAULT_STRIDE
    if isinstance(expression, Scalar):
        index = resolve_bound(expression.value, extent)
        return index, index, DEFAULT_STRIDE
    if isinstance(expression, Range):
        return resolve_bound(expression.start, extent), resolve_bound(expression.stop, extent), DEFAULT_STRIDE
    return (
        resolve_bound(expression.start, extent),
        resolve_bound(expression.stop, extent),
        int(expression.step),
    )


def is_whole_array(expressions: Sequence[IndexExpression]) -> bool:
    """True for the whole-array request: nothing, or a single colon."""
    return len(expressions) == 0 or (len(expressions) == 1 and isinstance(expressions[0], All))


def expand_expressions(
    expressions: Sequence[Any],
    shape: Sequence[int],
    variable: str = "",
) -> List[IndexExpression]:
    """
    Expand user expressions to exactly one expression per dimension.

    A single colon on a multi-dimensional variable selects the whole array.
    Missing trailing dimensions select everything.

    Raises:
        RankMismatchError: If more expressions than dimensions are given
        ParameterError: If an expression cannot be understood; the error
            names the variable and the dimension it was given for
    """
    parsed = []
    for dim, value in enumerate(expressions):
        try:
            parsed.append(as_expression(value))
        except ParameterError as error:
            raise ParameterError(
                error.parameter, error.value, error.details,
                variable=variable, dimension=dim
            ) from error
    rank = len(shape)

    if is_whole_array(parsed):
        return [ALL] * rank

    if len(parsed) > rank:
        raise RankMismatchError(variable, rank, len(parsed))

    return parsed + [ALL] * (rank - len(parsed))


def translate(
    expressions: Sequence[Any],
    shape: Sequence[int],
    variable: str = "",
) -> SliceTriple:
    """
    Translate index expressions into a hyperslab triple.

    Args:
        expressions: One expression per leading dimension (see module docs)
        shape: Declared shape of the variable; ``end`` resolves against it
        variable: Variable name used in error messages

    Returns:
        SliceTriple: Triple with one entry per dimension of ``shape``

    Raises:
        RankMismatchError: If more expressions than dimensions are given
        IndexOutOfRangeError: If a resolved bound is outside [1, extent]
            or first > last
        ParameterError: If an expression cannot be understood or a stride
            is not positive

    Examples:
        >>> translate(["end-2:end"], (10,)).first
        (8,)
        >>> translate([-1], (10,))
        SliceTriple(first=(10,), last=(10,), stride=(1,))
    """
    expanded = expand_expressions(expressions, shape, variable)
    resolved = [resolve_expression(e, n) for e, n in zip(expanded, shape)]

    triple = SliceTriple(
        first=tuple(r[0] for r in resolved),
        last=tuple(r[1] for r in resolved),
        stride=tuple(r[2] for r in resolved),
    )
    raise_if_error(triple.check(variable, shape))

    logger.debug("Translated %s on %s%s to %s", list(expressions), variable, tuple(shape), triple)
    return triple
