import pytest

from gcsbench.core.utils.byte_sizes import format_bytes, format_rate, parse_bytes


@pytest.mark.parametrize(
    "value, expected",
    [
        ("0b", 0),
        ("1b", 1),
        ("1", 1),
        ("1k", 1024),
        ("4KB", 4 * 1024),
        ("256KB", 256 * 1024),
        ("256kb", 256 * 1024),
        ("1mb", 1024 * 1024),
        ("300m", 300 * 1024 * 1024),
        ("2gb", 2 * 1024 * 1024 * 1024),
        ("1tb", 1024**4),
        ("  1kb  ", 1024),
        ("9122488b", 9_122_488),
        (512, 512),
    ],
)
def test_parse_bytes_valid(value, expected):
    assert parse_bytes(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "nope", "kb", "1KiB", "1gbps", "-1kb", "1.5gb", "1k2", -5],
)
def test_parse_bytes_invalid_raises(value):
    with pytest.raises(ValueError):
        parse_bytes(value)


@pytest.mark.parametrize(
    "num_bytes, expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1023.9, "1023 B"),
        (1024, "1.0 KB"),
        (4096, "4.0 KB"),
        (1536 * 1024, "1.5 MB"),
        (3 * 1024**3, "3.0 GB"),
    ],
)
def test_format_bytes(num_bytes, expected):
    assert format_bytes(num_bytes) == expected


def test_format_rate():
    assert format_rate(2 * 1024 * 1024) == "2.0 MB/s"
