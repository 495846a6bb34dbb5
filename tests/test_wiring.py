import pytest

from wiring import Wiring


def test_forward_and_backward_are_inverse() -> None:
    w = Wiring([2, 0, 3, 1], 4)
    for i in range(4):
        assert w.backward(w.forward(i)) == i
        assert w.forward(w.backward(i)) == i


def test_lookups_wrap_out_of_range_indices() -> None:
    w = Wiring([2, 0, 3, 1], 4)
    assert w.forward(-1) == 1
    assert w.forward(5) == 0


def test_construction_errors() -> None:
    with pytest.raises(ValueError, match="positive"):
        Wiring([], 0)
    with pytest.raises(ValueError, match="expected 4"):
        Wiring([0, 1, 2], 4)
    with pytest.raises(ValueError, match="outside"):
        Wiring([0, 1, 2, 4], 4)
    with pytest.raises(ValueError, match="not an integer"):
        Wiring([0, 1, "2", 3], 4)


def test_duplicates_are_reported_not_rejected() -> None:
    w = Wiring([0, 1, 1, 3], 4)
    assert w.duplicates() == [(2, 1)]


def test_involution_breaks() -> None:
    assert Wiring([1, 0, 3, 2], 4).involution_breaks() == []
    assert Wiring([1, 2, 0], 3).involution_breaks() == [0, 1, 2]


def test_table_behaves_like_a_sequence() -> None:
    w = Wiring([1, 0, 2], 3)
    assert len(w) == 3
    assert list(w) == [1, 0, 2]
    assert w[0] == 1
    assert w == [1, 0, 2]
