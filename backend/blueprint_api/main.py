# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blueprint_api.config import Config
from blueprint_api.routes import blueprint
from blueprint_api.services.openrouter import GenerationError
from blueprint_api.services.renderer import RenderError

logging.basicConfig(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)
logger = logging.getLogger(__name__)

app = FastAPI(title="Blueprint Generator", debug=Config.DEBUG)

# --- CORS Middleware (Vite dev server ports by default) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    max_age=12 * 60 * 60,
)

app.include_router(blueprint.router)


@app.exception_handler(GenerationError)
async def generation_error_handler(request: Request, exc: GenerationError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


@app.exception_handler(RenderError)
async def render_error_handler(request: Request, exc: RenderError):
    logger.error("Rendering failed: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("An unexpected error occurred")
    return JSONResponse(status_code=500, content={"error": "An internal server error occurred"})


@app.get("/health")
def health():
    return {"status": "ok"}


def run():
    import uvicorn
    uvicorn.run("blueprint_api.main:app", host=Config.HOST, port=Config.PORT)
