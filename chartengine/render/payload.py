"""RenderFrame -> plain JSON-ready dicts, for drivers that draw client-side."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from chartengine.engine.context import RenderFrame
from chartengine.geometry.line import path_d
from chartengine.geometry.primitives import Arc, Bar, PathSegment
from chartengine.render.svg_driver import arc_path_d


def primitive_to_dict(prim) -> dict[str, Any]:
    data = asdict(prim)
    if isinstance(prim, Arc):
        data["type"] = "arc"
        data["d"] = arc_path_d(prim)
    elif isinstance(prim, PathSegment):
        data["type"] = "path"
        data["d"] = path_d(prim.commands)
        data.pop("commands")
    elif isinstance(prim, Bar):
        data["type"] = "bar"
    return data


def frame_to_dict(frame: RenderFrame) -> dict[str, Any]:
    palette = frame.palette
    return {
        "kind": frame.kind.value,
        "generation": frame.generation,
        "title": frame.title,
        "viewport": {"width": frame.viewport.width, "height": frame.viewport.height},
        "margins": asdict(frame.margins),
        "theme": palette.name,
        "background": palette.background,
        "primitives": [primitive_to_dict(p) for p in frame.primitives],
        "markers": [asdict(m) for m in frame.markers],
        "ticks": [asdict(t) for t in frame.ticks],
        "legend": [asdict(e) for e in frame.legend],
        "labels": [asdict(label) for label in frame.labels],
        "placeholder": frame.placeholder.text if frame.placeholder else None,
    }
