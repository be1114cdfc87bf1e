"""Integer nanosecond duration helpers.

Latency statistics are tracked as integer nanoseconds; this module rounds and
renders them in the compact ``1h2m3.5s`` / ``10.5ms`` / ``15µs`` style used by
the cluster tooling, and parses the same notation for command-line options
such as the netperf ``--duration``.

All arithmetic is integer-only so large magnitudes never lose precision.
"""
from __future__ import annotations

import re

from .errors import ErrorCode, ProbeError

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT = re.compile(r"(\d*)(?:\.(\d*))?(ns|us|µs|μs|ms|s|m|h)")


def round_duration(ns: int, multiple: int) -> int:
    """Round ``ns`` to the nearest multiple of ``multiple``.

    Halfway values round away from zero. A non-positive ``multiple`` returns
    ``ns`` unchanged.
    """
    if multiple <= 0:
        return ns
    r = abs(ns) % multiple
    if ns < 0:
        return -(abs(ns) - r) if r + r < multiple else -(abs(ns) + multiple - r)
    return ns - r if r + r < multiple else ns + multiple - r


def _frac(value: int, precision: int) -> tuple[str, int]:
    """Split ``value`` into a ``.ddd`` fraction (trailing zeros dropped) and the integer rest."""
    digits = []
    printed = False
    for _ in range(precision):
        digit = value % 10
        printed = printed or digit != 0
        if printed:
            digits.append(str(digit))
        value //= 10
    frac = "." + "".join(reversed(digits)) if digits else ""
    return frac, value


def format_duration(ns: int) -> str:
    """Render integer nanoseconds as a compact duration string.

    Examples: ``0s``, ``999ns``, ``1.5µs``, ``10ms``, ``1.234567s``,
    ``1m2.5s``, ``2h0m0s``.
    """
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < SECOND:
        if u == 0:
            return "0s"
        if u < MICROSECOND:
            return f"{sign}{u}ns"
        if u < MILLISECOND:
            frac, whole = _frac(u, 3)
            return f"{sign}{whole}{frac}µs"
        frac, whole = _frac(u, 6)
        return f"{sign}{whole}{frac}ms"

    frac, seconds = _frac(u, 9)
    text = f"{seconds % 60}{frac}s"
    minutes = seconds // 60
    if minutes > 0:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours > 0:
            text = f"{hours}h{text}"
    return sign + text


def parse_duration(text: str) -> int:
    """Parse a duration string such as ``10s``, ``1m30s`` or ``1.5h`` into nanoseconds.

    A bare ``0`` is accepted. Raises :class:`ProbeError` with
    ``ErrorCode.CONFIGURATION`` on malformed input.
    """
    raw = (text or "").strip()
    if not raw:
        raise ProbeError(ErrorCode.CONFIGURATION, "invalid duration: empty string")
    sign = 1
    body = raw
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return 0

    total = 0
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None or (not match.group(1) and not match.group(2)):
            raise ProbeError(ErrorCode.CONFIGURATION, f"invalid duration: {raw!r}")
        whole, fraction, unit = match.group(1), match.group(2) or "", match.group(3)
        scale = _UNITS[unit]
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // (10 ** len(fraction))
        pos = match.end()
    if pos == 0:
        raise ProbeError(ErrorCode.CONFIGURATION, f"invalid duration: {raw!r}")
    return sign * total


__all__ = [
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "round_duration",
    "format_duration",
    "parse_duration",
]
