from __future__ import annotations
from typing import Tuple

UNITS = ["bytes", "KB", "MB", "GB"]


def format_size(num: int) -> Tuple[float, str]:
    x = float(num)
    i = 0
    while x > 1024.0 and i < len(UNITS) - 1:
        x /= 1024.0
        i += 1
    return x, UNITS[i]


def format_bytes(num: int) -> str:
    if num < 0:
        return str(num)
    x, u = format_size(num)
    return f"{x:.2f} {u}" if u != "bytes" else f"{int(x)} {u}"


def display_path(path: str) -> str:
    """Printable form of a path; undecodable bytes come out as \\xNN escapes."""
    try:
        raw = path.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return path.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")
