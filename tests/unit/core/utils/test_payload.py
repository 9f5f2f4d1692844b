import pytest

from gcsbench.core.utils.payload import make_random_buffer


def test_make_random_buffer_length():
    assert len(make_random_buffer(262144)) == 262144
    assert make_random_buffer(0) == b""


def test_make_random_buffer_is_not_constant():
    assert make_random_buffer(64) != make_random_buffer(64)


def test_make_random_buffer_rejects_negative_length():
    with pytest.raises(ValueError):
        make_random_buffer(-1)
