from __future__ import annotations

from decimal import Decimal

from latlng.config import to_degrees


def format_degrees(value: float | Decimal) -> str:
    """
    Render a degree value at the configured precision, e.g. 177.5 -> "177.5", -179 -> "-179.0".
    """
    d = to_degrees(value)
    text = format(d, "f")
    if "." in text:
        text = text.rstrip("0")
        if text.endswith("."):
            text += "0"
    else:
        text += ".0"
    if text in {"-0.0", "-0"}:
        text = "0.0"
    return text
