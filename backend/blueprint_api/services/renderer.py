# blueprint_api/services/renderer.py
import json
import logging
import math
import re
import threading
from typing import Any, Optional
from xml.sax.saxutils import escape

from floorplan.geometry import CANVAS_HEIGHT, CANVAS_WIDTH
from floorplan.normalizer import Blueprint, normalize_blueprint

logger = logging.getLogger(__name__)

_OPENING_TAG = re.compile(r"<svg[^>]*>", re.IGNORECASE)
_VIEWBOX_ATTR = re.compile(r"viewBox=", re.IGNORECASE)


class RenderError(Exception):
    pass


class RendererInitError(RenderError):
    pass


def _num(value: float) -> str:
    value = float(value)
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def render_blueprint_svg(json_data: str) -> str:
    """Draws a serialized blueprint ({"rooms": [...]}) as outlined, labelled rectangles."""
    try:
        blueprint = json.loads(json_data)
        rooms = [
            (str(r["name"]), float(r["x"]), float(r["y"]), float(r["width"]), float(r["height"]))
            for r in blueprint["rooms"]
        ]
    except (ValueError, KeyError, TypeError) as e:
        raise RenderError("Invalid JSON") from e

    svg = [f'<svg width="{CANVAS_WIDTH}" height="{CANVAS_HEIGHT}" xmlns="http://www.w3.org/2000/svg">']
    for name, x, y, w, h in rooms:
        svg.append(f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" height="{_num(h)}" '
                   f'fill="none" stroke="black" stroke-width="2"/>')
        svg.append(f'<text x="{_num(x + 10)}" y="{_num(y + 20)}" font-size="14">{escape(name)}</text>')
    svg.append("</svg>")
    return "".join(svg)


def extract_dimension(tag: str, attr: str) -> Optional[float]:
    match = re.search(rf"{attr}=[\"']([\d.]+)[\"']", tag, re.IGNORECASE)
    if not match:
        return None
    try:
        value = float(match.group(1))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def ensure_view_box(svg: str) -> str:
    """Adds a viewBox (and centred fit-within scaling) to the root <svg> tag if it lacks one."""
    match = _OPENING_TAG.search(svg)
    if not match or _VIEWBOX_ATTR.search(match.group(0)):
        return svg

    opening_tag = match.group(0)
    width = extract_dimension(opening_tag, "width")
    height = extract_dimension(opening_tag, "height")
    width = CANVAS_WIDTH if width is None else width
    height = CANVAS_HEIGHT if height is None else height

    patched = (f'<svg viewBox="0 0 {_num(width)} {_num(height)}" '
               f'preserveAspectRatio="xMidYMid meet"' + opening_tag[4:])
    return svg[:match.start()] + patched + svg[match.end():]


class RenderEngine:
    """
    Holds the renderer's ready state. ensure_initialized() runs the one-time
    setup exactly once, even when first use happens on several threads.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def _initialize(self) -> None:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot  # noqa: F401  (builds the font cache up front)

    def ensure_initialized(self) -> "RenderEngine":
        if self._ready:
            return self
        with self._lock:
            if not self._ready:
                try:
                    self._initialize()
                except Exception as e:
                    raise RendererInitError(f"Renderer initialization failed: {e}") from e
                self._ready = True
                logger.info("Renderer initialized")
        return self

    def render(self, json_data: str) -> str:
        self.ensure_initialized()
        return render_blueprint_svg(json_data)


default_engine = RenderEngine()


def render_normalized(blueprint: Blueprint, engine: Optional[RenderEngine] = None) -> str:
    svg = (engine or default_engine).render(json.dumps(blueprint.to_dict()))
    return ensure_view_box(svg)


def render_blueprint(data: Any, engine: Optional[RenderEngine] = None) -> str:
    """Raw generator output -> canvas-ready SVG markup."""
    engine = (engine or default_engine).ensure_initialized()
    return render_normalized(normalize_blueprint(data), engine)
