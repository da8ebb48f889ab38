# Matplotlib -> PNG preview of a normalized blueprint
import base64
import io
from typing import Optional

from shapely.ops import unary_union

from floorplan.geometry import DEFAULT_CANVAS, Canvas
from floorplan.normalizer import Blueprint
from blueprint_api.services.renderer import RenderEngine, default_engine

ROOM_FILL = "#f9dcc4"
REPAIRED_FILL = "#d0bdf4"


def render_preview_base64(blueprint: Blueprint, title: str = "Floor Plan",
                          canvas: Canvas = DEFAULT_CANVAS,
                          engine: Optional[RenderEngine] = None) -> str:
    (engine or default_engine).ensure_initialized()
    import matplotlib.pyplot as plt
    import matplotlib.patches as mpatches

    fig, ax = plt.subplots(figsize=(canvas.width / 100, canvas.height / 100))
    fill = REPAIRED_FILL if blueprint.repaired else ROOM_FILL

    for room in blueprint.rooms:
        ax.add_patch(mpatches.Rectangle((room.x, room.y), room.width, room.height,
                                        facecolor=fill, edgecolor="black", linewidth=1.5))
        ax.text(room.x + room.width / 2, room.y + room.height / 2, room.name,
                ha="center", va="center", fontsize=8, wrap=True)

    # Heavy outline around the merged footprint
    if blueprint.rooms:
        footprint = unary_union([room.polygon for room in blueprint.rooms])
        for shape in getattr(footprint, "geoms", [footprint]):
            if shape.geom_type == "Polygon":
                ax.add_patch(mpatches.Polygon(list(shape.exterior.coords), fill=False,
                                              edgecolor="black", linewidth=3, zorder=10))

    ax.set_xlim(0, canvas.width)
    ax.set_ylim(0, canvas.height)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.invert_yaxis()

    buf = io.BytesIO()
    fig.savefig(buf, format="png", bbox_inches="tight")
    plt.close(fig)
    return base64.b64encode(buf.getvalue()).decode("utf-8")
