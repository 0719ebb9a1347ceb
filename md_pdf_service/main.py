"""
Service entrypoint.

Checks that wkhtmltopdf is installed before binding the listener, then
serves the FastAPI app with uvicorn.

Usage:
    python -m md_pdf_service
    python -m md_pdf_service --port 9000
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from . import __version__
from .app import app, get_renderer, settings
from .renderer import Renderer

logger = logging.getLogger(__name__)


def ensure_renderer_available(renderer: Renderer) -> None:
    """
    One-time startup check for the rendering dependency.

    Exits the process with status 1 if the tool cannot be started; the
    listener is never bound in that case.
    """
    if not renderer.is_available():
        logger.error(f"Error: {renderer.name} is not installed. Please install it first.")
        sys.exit(1)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Markdown to PDF conversion service")
    parser.add_argument("--host", default=settings.host, help=f"Interface to bind (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port to bind (default: {settings.port})")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)

    ensure_renderer_available(get_renderer())

    logger.info(f"Starting md-pdf-service v{__version__} at http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
