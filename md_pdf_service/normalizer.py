"""
Markdown to HTML conversion for PDF rendering.

Converts Markdown with markdown-it-py and wraps the result in a complete
HTML document that wkhtmltopdf can paginate.
"""

from typing import Optional

from markdown_it import MarkdownIt

from .config import DOCUMENT_STYLES

# Overrides whatever sizing the content brings so every document prints at
# the same readable scale, and lets long URLs wrap instead of overflowing.
STYLED_CSS = """
        @page {
            size: A4;
            margin: 10mm;
        }
        html {
            font-size: 16pt !important;
            width: 210mm;  /* A4 width */
        }
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
            line-height: 1.6;
            padding: 0 5em;
            font-size: 1rem !important;
            width: 100%;
            margin: 0;
            overflow-wrap: break-word;
            word-wrap: break-word;
            word-break: break-word;
        }
        /* Force consistent sizes */
        p, div, span, li, td {
            font-size: 1rem !important;
        }
        h1 { font-size: 1.4rem !important; }
        h2 { font-size: 1.2rem !important; }
        h3 { font-size: 1.1rem !important; }
        h4, h5, h6 { font-size: 1.1rem !important; }
        /* Handle long URLs */
        a {
            word-wrap: break-word;
            word-break: break-all;
            white-space: pre-wrap;
            overflow-wrap: break-word;
            max-width: 100%;
            display: inline-block;
        }
"""

_MD_PARSER: Optional[MarkdownIt] = None


def _build_markdown_parser() -> MarkdownIt:
    # Raw HTML in the source is escaped rather than passed to the renderer.
    md = MarkdownIt("commonmark", {"html": False})
    md.enable(["table", "strikethrough"])
    return md


def _get_markdown_parser() -> MarkdownIt:
    global _MD_PARSER
    if _MD_PARSER is None:
        _MD_PARSER = _build_markdown_parser()
    return _MD_PARSER


def markdown_to_html(markdown: str) -> str:
    """Convert Markdown to an HTML fragment."""
    return _get_markdown_parser().render(markdown or "")


def build_document_html(content_html: str, style: str = "styled") -> str:
    """
    Build the complete HTML document handed to the renderer.

    Args:
        content_html: HTML fragment produced from the Markdown source
        style: "styled" embeds the A4 print stylesheet, "plain" adds no styling

    Returns:
        Complete HTML document string

    Raises:
        ValueError: If style is not a known template variant
    """
    if style not in DOCUMENT_STYLES:
        raise ValueError(f"Unknown document style: {style!r}")

    style_block = f"\n    <style>{STYLED_CSS}    </style>" if style == "styled" else ""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Document</title>{style_block}
</head>
<body>
    {content_html}
</body>
</html>"""


def normalize(markdown: str, style: str = "styled") -> str:
    """
    Turn Markdown source into a print-ready HTML document.

    Never fails on text input: empty or malformed Markdown still yields a
    valid document. The output depends only on the arguments.
    """
    return build_document_html(markdown_to_html(markdown), style)
