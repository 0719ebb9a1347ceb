"""
Request and response models for the HTTP API.
"""

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    """Markdown to PDF request."""
    markdown: str = Field(..., description="Markdown source to render")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
