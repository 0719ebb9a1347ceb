"""
Markdown PDF Service - FastAPI application.

Provides an endpoint that converts Markdown to PDF (Markdown -> HTML via
markdown-it-py, HTML -> PDF via wkhtmltopdf) and a health check that probes
the wkhtmltopdf dependency.
"""

import logging
from functools import lru_cache
from io import BytesIO

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from . import __version__
from .config import ServiceSettings, get_settings
from .errors import RenderServiceError
from .models import ConvertRequest, HealthResponse
from .normalizer import normalize
from .renderer import Renderer, WkhtmltopdfRenderer

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Markdown PDF Service",
    version=__version__,
    description="Converts Markdown documents to PDF using wkhtmltopdf"
)

def configure_cors(app: FastAPI, settings: ServiceSettings) -> None:
    """Add CORS middleware for the configured origins, if any."""
    if settings.cors_origins_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials=False,
            allow_methods=["*"],
            allow_headers=["*"],
        )


configure_cors(app, settings)


# ============================================================================
# Dependencies
# ============================================================================

@lru_cache()
def get_renderer() -> Renderer:
    """Renderer built from the service settings, shared by all requests."""
    return WkhtmltopdfRenderer(
        executable=settings.wkhtmltopdf_path,
        scratch_dir=settings.scratch_dir,
        timeout=settings.render_timeout_seconds,
    )


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse, "description": "Renderer unavailable"}},
)
def health_check(renderer: Renderer = Depends(get_renderer)):
    """
    Health check endpoint for container orchestration.

    Probes the rendering tool on every call. Returns HTTP 503 when it
    cannot be started.
    """
    if not renderer.is_available():
        logger.warning(f"Health check failed: {renderer.name} not found")
        unhealthy = HealthResponse(
            status=f"unhealthy - {renderer.name} not found",
            version=__version__,
        )
        return JSONResponse(status_code=503, content=unhealthy.model_dump())

    return HealthResponse(status="healthy", version=__version__)


# ============================================================================
# PDF Generation Endpoint
# ============================================================================

@app.post(
    "/convert",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Rendered PDF"},
        500: {"description": "Rendering failed"},
    },
)
def convert_markdown_to_pdf(
    request: ConvertRequest,
    renderer: Renderer = Depends(get_renderer),
    settings: ServiceSettings = Depends(get_settings),
):
    """
    Convert Markdown to PDF.

    Declared sync so each conversion runs on the worker thread pool while it
    waits on the renderer.

    Returns:
        StreamingResponse with PDF binary data, or an empty 500 response when
        rendering fails. Failure details are only logged.
    """
    html = normalize(request.markdown, settings.document_style)

    try:
        pdf_bytes = renderer.render(html)
    except RenderServiceError as e:
        logger.error(f"Error converting to PDF: {e}", exc_info=True)
        return Response(status_code=500)

    logger.info(f"Converted {len(request.markdown)} chars of Markdown to {len(pdf_bytes)} byte PDF")

    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": 'attachment; filename="document.pdf"'
        }
    )
