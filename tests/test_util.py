import math

from wfobj import decode_utf8, format_number, parse_float, parse_int
from wfobj.util import parse_float_strict, parse_int_strict


def test_format_number_integral():
    assert format_number(1.0) == "1"
    assert format_number(0.0) == "0"
    assert format_number(-0.0) == "0"
    assert format_number(-3.0) == "-3"
    assert format_number(7) == "7"


def test_format_number_shortest():
    assert format_number(0.123) == "0.123"
    assert format_number(-2.5) == "-2.5"
    assert format_number(123.456) == "123.456"
    assert format_number(0.1 + 0.2) == "0.30000000000000004"
    assert format_number(0.0000015) == "0.0000015"


def test_format_number_exponents():
    assert format_number(1e16) == "10000000000000000"
    assert format_number(1e21) == "1e+21"
    assert format_number(1.5e300) == "1.5e+300"
    assert format_number(1e-7) == "1e-7"
    assert format_number(-1.23e-10) == "-1.23e-10"


def test_format_number_special():
    assert format_number(math.nan) == "NaN"
    assert format_number(math.inf) == "Infinity"
    assert format_number(-math.inf) == "-Infinity"


def test_parse_float():
    assert parse_float("1.5") == 1.5
    assert parse_float("1.5abc") == 1.5
    assert parse_float(".5") == 0.5
    assert parse_float("-1e3") == -1000.0
    assert parse_float("-Infinity") == -math.inf
    assert math.isnan(parse_float("abc"))
    assert math.isnan(parse_float("nan"))
    assert math.isnan(parse_float("\u0663"))

    assert parse_float_strict("1.5abc") is None
    assert parse_float_strict("2e-3") == 0.002
    assert parse_float_strict("\u0663") is None


def test_parse_int():
    assert parse_int("12") == 12
    assert parse_int("12abc") == 12
    assert parse_int("1.9") == 1
    assert parse_int("-4") == -4
    assert math.isnan(parse_int("x"))
    assert math.isnan(parse_int("\u0663"))

    assert parse_int_strict("1.9") is None
    assert parse_int_strict("+3") == 3
    assert parse_int_strict("\u0663") is None


def test_decode_utf8():
    assert decode_utf8(b"\xef\xbb\xbfv 1 2 3") == "v 1 2 3"
    assert decode_utf8("o café".encode("utf-8")) == "o café"
    assert decode_utf8(b"o \xff") == "o \ufffd"
