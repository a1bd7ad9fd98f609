"""Hex color helpers. No engine imports."""

from __future__ import annotations

import math
import re

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex(color: str) -> tuple[int, int, int]:
    """``#rgb`` / ``#rrggbb`` → (r, g, b). Raises ValueError for anything else."""
    m = _HEX_RE.match(color.strip())
    if not m:
        raise ValueError(f"Not a hex color: {color!r}")
    digits = m.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    num = int(digits, 16)
    return num >> 16, (num >> 8) & 0xFF, num & 0xFF


def to_hex(r: int, g: int, b: int) -> str:
    return "#{:02x}{:02x}{:02x}".format(*(max(0, min(255, c)) for c in (r, g, b)))


def _shift(color: str, amount: int) -> str:
    # Named and functional CSS colors are drawn unchanged
    if not _HEX_RE.match(color.strip()):
        return color
    r, g, b = parse_hex(color)
    return to_hex(r + amount, g + amount, b + amount)


def _percent_amount(percent: float) -> int:
    # Half-up rounding, so 30% is +77 per channel
    return math.floor(2.55 * percent + 0.5)


def lighten(color: str, percent: float) -> str:
    """Add ``percent`` of full scale to every channel, clamped at 255.

    Non-hex colors come back as given.
    """
    return _shift(color, _percent_amount(percent))


def darken(color: str, percent: float) -> str:
    """Subtract ``percent`` of full scale from every channel, clamped at 0."""
    return _shift(color, -_percent_amount(percent))


def with_alpha(color: str, alpha_hex: str) -> str:
    """Append an alpha byte (e.g. ``"CC"``) to a hex color; other colors pass through."""
    if _HEX_RE.match(color.strip()):
        r, g, b = parse_hex(color)
        return to_hex(r, g, b) + alpha_hex
    return color
