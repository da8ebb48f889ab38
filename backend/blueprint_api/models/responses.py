from pydantic import BaseModel
from typing import List, Optional

from floorplan.normalizer import Blueprint


class RoomOut(BaseModel):
    name: str
    x: float
    y: float
    width: float
    height: float


class RenderResponse(BaseModel):
    rooms: List[RoomOut]
    repaired: bool = False  # positions were replaced by the grid fallback
    svg: str
    image_base64: Optional[str] = None

    @classmethod
    def from_blueprint(cls, blueprint: Blueprint, svg: str, image_base64: Optional[str] = None) -> "RenderResponse":
        return cls(
            rooms=[RoomOut(**room.to_dict()) for room in blueprint.rooms],
            repaired=blueprint.repaired,
            svg=svg,
            image_base64=image_base64,
        )


class ErrorResponse(BaseModel):
    error: str
