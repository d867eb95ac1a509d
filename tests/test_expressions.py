import numpy as np
import pytest

from cfslab import (
    ALL, END, End, IndexOutOfRangeError, ParameterError, Range, RankMismatchError,
    Scalar, SliceTriple, StridedRange
)
from cfslab.indexing.expressions import (
    as_expression, expand_expressions, parse_bound, parse_expression, resolve_bound, translate
)


def test_parse_bound():
    assert parse_bound("7") == 7
    assert parse_bound("-1") == -1
    assert parse_bound("end") == END
    assert parse_bound("end-2") == END - 2
    assert parse_bound(" end - 3 ") == End(3)
    assert parse_bound("end+1") == End(-1)

    with pytest.raises(ParameterError):
        parse_bound("")
    with pytest.raises(ParameterError):
        parse_bound("last")


def test_parse_expression():
    f = parse_expression

    assert f(":") == ALL
    assert f("4") == Scalar(4)
    assert f("end") == Scalar(END)
    assert f("end-2:end") == Range(END - 2, END)
    assert f("3:2:7") == StridedRange(3, 2, 7)
    assert f("1:end") == Range(1, END)

    with pytest.raises(ParameterError):
        f("1:2:3:4")
    with pytest.raises(ParameterError):
        f("1:end:5")
    with pytest.raises(ParameterError):
        f("3:")


def test_as_expression():
    f = as_expression

    assert f(ALL) == ALL
    assert f(":") == ALL
    assert f(slice(None)) == ALL
    assert f(3) == Scalar(3)
    assert f(np.int64(3)) == Scalar(3)
    assert f(END - 1) == Scalar(END - 1)
    assert f(Range(1, 2)) == Range(1, 2)

    with pytest.raises(ParameterError):
        f(slice(1, 3))
    with pytest.raises(ParameterError):
        f(2.5)
    with pytest.raises(ParameterError):
        f(True)


def test_resolve_bound():
    assert resolve_bound(3, 10) == 3
    assert resolve_bound(-1, 10) == 10
    assert resolve_bound(-3, 10) == 8
    assert resolve_bound(END, 10) == 10
    assert resolve_bound(END - 2, 10) == 8
    assert resolve_bound(0, 10) == 0


def test_end_relative():
    assert translate(["end-2:end"], (10,)) == SliceTriple((8,), (10,), (1,))
    assert translate([-1], (10,)) == SliceTriple((10,), (10,), (1,))
    assert translate([Range(END - 2, END)], (10,)) == SliceTriple((8,), (10,), (1,))


def test_forms():
    shape = (10, 8, 6)
    t = translate(["2", "3:5", "1:2:5"], shape)
    assert t.first == (2, 3, 1)
    assert t.last == (2, 5, 5)
    assert t.stride == (1, 1, 2)

    t = translate([ALL, END, StridedRange(END - 5, 3, END)], shape)
    assert t.first == (1, 8, 1)
    assert t.last == (10, 8, 6)
    assert t.stride == (1, 1, 3)


def test_end_uses_each_dimension():
    t = translate(["end", "end", "end"], (4, 3, 2))
    assert t.first == (4, 3, 2)
    assert t.last == (4, 3, 2)


def test_single_colon_is_whole_array():
    shape = (4, 3, 2)
    whole = translate([ALL], shape)
    assert whole == translate([ALL, ALL, ALL], shape)
    assert whole == SliceTriple.full(shape)
    assert translate([], shape) == whole
    assert translate([":"], shape) == whole


def test_trailing_dimensions_default_to_all():
    t = translate([2], (4, 3, 2))
    assert t == SliceTriple((2, 1, 1), (2, 3, 2), (1, 1, 1))

    t = translate(["end-1:end", 2], (4, 3, 2))
    assert t == SliceTriple((3, 2, 1), (4, 2, 2), (1, 1, 1))


def test_expand_expressions():
    assert expand_expressions([], (3, 3)) == [ALL, ALL]
    assert expand_expressions([1], (3, 3)) == [Scalar(1), ALL]
    assert expand_expressions([ALL], ()) == []


def test_scalar_variable():
    assert translate([], ()) == SliceTriple()
    assert translate([ALL], ()).rank == 0
    with pytest.raises(RankMismatchError):
        translate([1], ())


def test_rank_mismatch():
    with pytest.raises(RankMismatchError) as info:
        translate([1, 1, 1], (4, 3), "TEMP")
    assert info.value.variable == "TEMP"
    assert info.value.expected == 2
    assert info.value.actual == 3


@pytest.mark.parametrize("expressions, dimension", [
    ([11], 0),
    ([0], 0),
    (["1:11"], 0),
    (["5:3"], 0),
    ([ALL, "end+1"], 1),
    ([ALL, -6], 1),
])
def test_out_of_range(expressions, dimension):
    with pytest.raises(IndexOutOfRangeError) as info:
        translate(expressions, (10, 5), "TEMP")
    assert info.value.variable == "TEMP"
    assert info.value.dimension == dimension


def test_bad_stride():
    with pytest.raises(ParameterError) as info:
        translate(["1:0:5"], (10,), "TEMP")
    assert info.value.dimension == 0
    with pytest.raises(ParameterError):
        translate(["5:-1:1"], (10,))


@pytest.mark.parametrize("expressions, dimension", [
    ([":", "1:x"], 1),
    (["end-", ALL], 0),
    ([1, 2, 1.5], 2),
])
def test_unparseable_expression_names_variable_and_dimension(expressions, dimension):
    with pytest.raises(ParameterError) as info:
        translate(expressions, (4, 3, 2), "TEMP")
    assert info.value.variable == "TEMP"
    assert info.value.dimension == dimension
    assert "'TEMP'" in str(info.value)
