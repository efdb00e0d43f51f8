"""
Unit tests for disktop/utils.py
"""
import pytest

from disktop.utils import display_path, format_bytes, format_size


@pytest.mark.parametrize("num, expected", [
    (0, "0 bytes"),
    (10, "10 bytes"),
    (1024, "1024 bytes"),
    (3000, "2.93 KB"),
    (2_000_000, "1.91 MB"),
    (5 * 1024 ** 3, "5.00 GB"),
    (3 * 1024 ** 4, "3072.00 GB"),
])
def test_format_bytes(num, expected):
    assert format_bytes(num) == expected


def test_format_size_returns_value_and_unit():
    value, unit = format_size(2_000_000)

    assert unit == "MB"
    assert value == pytest.approx(1.907, abs=0.001)


def test_format_bytes_negative_passthrough():
    assert format_bytes(-1) == "-1"


def test_display_path_escapes_undecodable_bytes():
    assert display_path("/data/bad\udcffname.bin") == "/data/bad\\xffname.bin"
    assert display_path("/data/café.txt") == "/data/café.txt"
