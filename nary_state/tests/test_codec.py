# nary_state/tests/test_codec.py
import pytest
from nary_state import codec
from nary_state.codec import Counted, UNCOUNTED
from nary_state.errors import NAryDomainError, NonMultipleRowCountError, NegativeCountForNonNullUnitError
from nary_state.units import NullVector, fixed_vector

def test_unit_size_from_default_instance():
    assert codec.unit_size(fixed_vector("Vec4", 4)) == 4
    assert codec.unit_size(NullVector) == 0

def test_count_from_rows():
    assert codec.unit_count_from_rows(0, 3) == Counted(0)
    assert codec.unit_count_from_rows(9, 3) == Counted(3)
    assert int(codec.unit_count_from_rows(9, 3)) == 3

def test_count_from_rows_non_multiple():
    with pytest.raises(NonMultipleRowCountError):
        codec.unit_count_from_rows(7, 2)
    # domain errors are ValueErrors too
    with pytest.raises(ValueError):
        codec.unit_count_from_rows(1, 2)

def test_count_from_rows_null_unit():
    for rows in (0, 1, 17):
        assert codec.unit_count_from_rows(rows, 0) is UNCOUNTED
    assert int(UNCOUNTED) == -1

def test_rows_from_count():
    assert codec.rows_from_unit_count(4, 3) == 12
    assert codec.rows_from_unit_count(4, 0) == 0
    assert codec.rows_from_unit_count(Counted(2), 5) == 10

def test_rows_from_negative_count():
    assert codec.rows_from_unit_count(-1, 0) == 0
    assert codec.rows_from_unit_count(UNCOUNTED, 0) == 0
    with pytest.raises(NegativeCountForNonNullUnitError) as exc:
        codec.rows_from_unit_count(-2, 3)
    assert isinstance(exc.value, NAryDomainError)
    assert exc.value.count == -2

def test_round_trip_normalizes():
    for us in (0, 1, 3):
        for n in (0, 2, 5):
            back = codec.unit_count_from_rows(codec.rows_from_unit_count(n, us), us)
            assert int(back) == (n if us else -1)
