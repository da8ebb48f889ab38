# blueprint_api/routes/blueprint.py

import logging
from typing import Any

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse

from blueprint_api.models.requests import BlueprintRequest
from blueprint_api.models.responses import ErrorResponse, RenderResponse
from blueprint_api.services import openrouter
from blueprint_api.services.preview import render_preview_base64
from blueprint_api.services.renderer import default_engine, render_normalized
from floorplan.normalizer import normalize_blueprint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# Errors are raised as GenerationError and turned into {"error": ...} by the app's handlers.
@router.post("/blueprint", responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})
async def generate_blueprint(req: BlueprintRequest):
    prompt = req.prompt.strip()
    if not prompt:
        return JSONResponse(status_code=400, content={"error": "Prompt is required"})

    parsed = await openrouter.request_blueprint(prompt)
    # Returned verbatim; consumers sanitize it through normalize_blueprint
    return JSONResponse(content=parsed)


@router.post("/render", response_model=RenderResponse)
def render_blueprint(payload: Any = Body(None), preview: bool = Query(False)):
    engine = default_engine.ensure_initialized()
    blueprint = normalize_blueprint(payload)
    if blueprint.repaired:
        logger.info("Rendered blueprint with %d rooms via compaction fallback", len(blueprint.rooms))

    svg = render_normalized(blueprint, engine)
    image = render_preview_base64(blueprint, engine=engine) if preview else None
    return RenderResponse.from_blueprint(blueprint, svg, image)
