import math
import re
from decimal import Decimal
from typing import Optional, Tuple, Union


Number = Union[int, float]

# Longest numeric prefix accepted by a permissive float reader. Only ASCII
# digits count.
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII
)
_INT_PREFIX = re.compile(r"[+-]?\d+", re.ASCII)


def decode_utf8(data: bytes) -> str:
    """
    Decode raw OBJ bytes. A leading byte order mark is dropped and
    undecodable bytes become U+FFFD rather than raising.
    """

    return bytes(data).decode("utf-8-sig", errors="replace")


def _float_from_prefix(text: str) -> float:
    return float(text.replace("Infinity", "inf"))


def parse_float(token: str) -> float:
    """
    Reads a float from the longest numeric prefix of `token`, so
    "1.5abc" is 1.5. Tokens with no numeric prefix become NaN.
    """

    match = _FLOAT_PREFIX.match(token)

    if match is None:
        return math.nan

    return _float_from_prefix(match.group(0))


def parse_float_strict(token: str) -> Optional[float]:
    """
    Like parse_float, but the whole token must be numeric. Returns None
    otherwise.
    """

    match = _FLOAT_PREFIX.fullmatch(token)

    if match is None:
        return None

    return _float_from_prefix(match.group(0))


def parse_int(token: str) -> Number:
    """
    Reads an integer from the leading digits of `token` ("12abc" is 12).
    Tokens with no leading digits give NaN.
    """

    match = _INT_PREFIX.match(token)

    if match is None:
        return math.nan

    return int(match.group(0))


def parse_int_strict(token: str) -> Optional[int]:
    if _INT_PREFIX.fullmatch(token) is None:
        return None

    return int(token)


def _shortest_digits(value: float) -> Tuple[str, int]:
    # repr() already gives the shortest text that round-trips.
    _, digits, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digits)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)

    return stripped, exponent


def format_number(value: Number) -> str:
    """
    Render a number with the shortest decimal text that reads back to the
    same float. Integral values get no decimal point (1.0 is "1"), and
    exponent notation is only used for very large or very small magnitudes
    (1e21 is "1e+21", 1e-7 is "1e-7").
    """

    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)

    value = float(value)

    if math.isnan(value):
        return "NaN"

    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, exponent = _shortest_digits(abs(value))

    k = len(digits)
    # Position of the decimal point relative to the first digit.
    n = k + exponent

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        e_sign = "+" if e >= 0 else "-"
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{e_sign}{abs(e)}"

    return sign + text
