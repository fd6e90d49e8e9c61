"""Stylesheet palette substitution and SVG recolouring for light and dark themes."""

from __future__ import annotations

from typing import Dict, List, Tuple, TypeVar

__all__ = ["StyleSheetError", "apply_palette", "recolor_svg"]

_Data = TypeVar("_Data", str, bytes)


class StyleSheetError(RuntimeError):
    """Raised when a stylesheet cannot be expanded."""


def _substitute(line: str, palette: Dict[str, str]) -> str:
    start = line.find("${")
    if start == -1:
        return line
    end = line.find("}", start)
    if end == -1:
        raise StyleSheetError("problem loading stylesheet. Unclosed ${}")
    key = line[start + 2:end]
    if key not in palette:
        raise StyleSheetError(
            f"Problem loading stylesheet: can't find palette id: {key}"
        )
    return line[:start] + palette[key] + line[end + 1:]


def apply_palette(style: str) -> Tuple[str, str]:
    """Expand the palette placeholders of a stylesheet.

    The text between the ``PALETTE START`` and ``PALETTE END`` lines holds
    ``name: value`` entries. Every line after the palette has its first
    ``${name}`` replaced by the matching value. Returns the expanded
    stylesheet and the value of the ``theme`` entry ("" when missing).
    """
    lines = iter(style.split("\n"))

    for line in lines:
        if "PALETTE START" in line:
            break

    palette: Dict[str, str] = {}
    for line in lines:
        parts = line.split(":")
        if len(parts) == 2:
            value = parts[1].replace(" ", "").replace("\r", "")
            palette[parts[0].replace(" ", "")] = value
        if "PALETTE END" in line:
            break

    out: List[str] = [_substitute(line, palette) + "\n" for line in lines]
    return "".join(out), palette.get("theme", "")


def recolor_svg(svg_data: _Data, style_name: str = "light") -> _Data:
    """Swap black and white of an SVG for the given theme.

    Light styles get near-black on near-white; any other style the reverse.
    Works on ``str`` and on ``bytes`` and returns the same type.
    """
    if "light" in style_name:
        swaps = (("#000000", "#111111"), ("#ffffff", "#dddddd"))
    else:
        swaps = (("#000000", "#dddddd"), ("#ffffff", "#111111"))

    result = svg_data
    for old, new in swaps:
        if isinstance(result, bytes):
            result = result.replace(old.encode("ascii"), new.encode("ascii"))
        else:
            result = result.replace(old, new)
    return result