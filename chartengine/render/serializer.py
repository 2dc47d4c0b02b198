"""Write SVG markup from element dictionaries."""

from __future__ import annotations

from typing import Any
from xml.sax.saxutils import escape, quoteattr

# Keys of an element dict that are not XML attributes.
_RESERVED = ("tag", "children", "text")


def _attrs(elem: dict[str, Any]) -> str:
    return " ".join(f"{k}={quoteattr(str(v))}" for k, v in elem.items() if k not in _RESERVED and v is not None)


def _element_lines(elem: dict[str, Any], indent: int) -> list[str]:
    pad = "  " * indent
    tag = elem.get("tag", "path")
    attr_str = _attrs(elem)
    open_tag = f"<{tag} {attr_str}" if attr_str else f"<{tag}"
    children = elem.get("children") or []
    text = elem.get("text")

    if text is not None:
        return [f"{pad}{open_tag}>{escape(str(text))}</{tag}>"]
    if not children:
        return [f"{pad}{open_tag} />"]
    lines = [f"{pad}{open_tag}>"]
    for child in children:
        lines.extend(_element_lines(child, indent + 1))
    lines.append(f"{pad}</{tag}>")
    return lines


def serialize_svg(
    elements: list[dict[str, Any]],
    canvas_w: float,
    canvas_h: float,
    title: str = "",
    background: str | None = None,
    defs: list[dict[str, Any]] | None = None,
) -> str:
    """Generate SVG markup from element definitions."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg viewBox="0 0 {canvas_w:.2f} {canvas_h:.2f}" width="{canvas_w:.2f}" height="{canvas_h:.2f}"'
        f' xmlns="http://www.w3.org/2000/svg" role="img">',
    ]

    if title:
        lines.append(f"  <title>{escape(title)}</title>")

    if defs:
        lines.append("  <defs>")
        for d in defs:
            lines.extend(_element_lines(d, 2))
        lines.append("  </defs>")

    if background:
        lines.append(f'  <rect x="0" y="0" width="100%" height="100%" fill={quoteattr(background)} />')

    for elem in elements:
        lines.extend(_element_lines(elem, 1))

    lines.append("</svg>")
    return "\n".join(lines)
