"""
Markdown PDF Service - HTTP service for rendering Markdown documents.

Accepts Markdown source, converts it to a styled HTML page and renders
that page to an A4 PDF with wkhtmltopdf.
"""

__version__ = "0.1.0"
