from __future__ import annotations


class LrcParseError(ValueError):
    pass


class InvalidTimestamp(LrcParseError):
    pass


def decode_timestamp(minutes: str, seconds: str, fraction: str) -> int:
    """
    "01", "02", "50"  -> 62500 (two digits are centiseconds)
    "01", "02", "500" -> 62500 (three digits are milliseconds)
    """
    for part in (minutes, seconds, fraction):
        if not part or not (part.isascii() and part.isdigit()):
            raise InvalidTimestamp(f"Invalid timestamp capture: {part!r}")
    if len(fraction) == 2:
        frac_ms = int(fraction) * 10
    elif len(fraction) == 3:
        frac_ms = int(fraction)
    else:
        raise InvalidTimestamp(f"Fraction must have 2 or 3 digits: {fraction!r}")
    return (int(minutes) * 60 + int(seconds)) * 1000 + frac_ms


def format_timestamp(ms: int, *, millis: bool = False) -> str:
    ms = max(ms, 0)
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    if millis:
        return f"{m:02d}:{s:02d}.{ms2:03d}"
    return f"{m:02d}:{s:02d}.{ms2 // 10:02d}"
