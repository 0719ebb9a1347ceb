"""
Pytest fixtures for Markdown PDF service tests.

Renderer tests run against small /bin/sh scripts standing in for wkhtmltopdf,
so they exercise the real subprocess and file handling without the tool.
"""

import stat
from pathlib import Path
from typing import List

import pytest
from fastapi.testclient import TestClient

from md_pdf_service.errors import ArtifactIOFailure, RenderFailure
from md_pdf_service.renderer import Renderer, WkhtmltopdfRenderer

VERSION_GUARD = r"""
if [ "$1" = "--version" ]; then
    echo "wkhtmltopdf 0.12.6 (stub)"
    exit 0
fi
"""

# Writes "%PDF-1.4" followed by the HTML source to the output path, so each
# result can be traced back to the document that produced it.
STUB_SUCCESS = r"""
for arg in "$@"; do src="$out"; out="$arg"; done
{ printf '%%PDF-1.4\n'; cat "$src"; } > "$out"
"""

STUB_FAILURE = r"""
echo "Error: Failed to load page" >&2
exit 1
"""

# Reports success without producing any output file.
STUB_NO_OUTPUT = r"""
exit 0
"""


def write_stub(directory: Path, body: str, name: str = "wkhtmltopdf") -> Path:
    """Write an executable shell script and return its path."""
    path = directory / name
    path.write_text("#!/bin/sh\n" + VERSION_GUARD + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class FakeRenderer(Renderer):
    """In-memory renderer recording every document it is given."""

    name = "wkhtmltopdf"

    def __init__(self, available: bool = True, error: Exception = None):
        self.available = available
        self.error = error
        self.rendered: List[str] = []

    def render(self, html: str) -> bytes:
        self.rendered.append(html)
        if self.error is not None:
            raise self.error
        return b"%PDF-1.4 fake pdf content"

    def is_available(self) -> bool:
        return self.available


@pytest.fixture
def scratch_dir(tmp_path):
    """Empty directory used for temporary render files."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def make_stub(bin_dir):
    """Factory writing stub tools with a custom script body."""
    def _make(body: str, name: str = "wkhtmltopdf") -> Path:
        return write_stub(bin_dir, body, name)
    return _make


@pytest.fixture
def stub_renderer(bin_dir, scratch_dir):
    """Renderer whose tool always succeeds."""
    return WkhtmltopdfRenderer(str(write_stub(bin_dir, STUB_SUCCESS)), scratch_dir=scratch_dir)


@pytest.fixture
def failing_renderer(bin_dir, scratch_dir):
    """Renderer whose tool always exits non-zero."""
    return WkhtmltopdfRenderer(str(write_stub(bin_dir, STUB_FAILURE)), scratch_dir=scratch_dir)


@pytest.fixture
def no_output_renderer(bin_dir, scratch_dir):
    """Renderer whose tool succeeds but writes nothing."""
    return WkhtmltopdfRenderer(str(write_stub(bin_dir, STUB_NO_OUTPUT)), scratch_dir=scratch_dir)


@pytest.fixture
def missing_renderer(tmp_path, scratch_dir):
    """Renderer pointing at an executable that does not exist."""
    return WkhtmltopdfRenderer(str(tmp_path / "no-such-wkhtmltopdf"), scratch_dir=scratch_dir)


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def make_client():
    """Build a TestClient whose renderer dependency is replaced."""
    from md_pdf_service.app import app, get_renderer

    def _make(renderer: Renderer) -> TestClient:
        app.dependency_overrides[get_renderer] = lambda: renderer
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, fake_renderer):
    """Test client backed by the in-memory renderer."""
    return make_client(fake_renderer)


@pytest.fixture
def failing_client(make_client):
    """Test client whose renderer raises RenderFailure."""
    return make_client(FakeRenderer(error=RenderFailure("wkhtmltopdf failed", stderr="boom")))


@pytest.fixture
def io_failing_client(make_client):
    """Test client whose renderer raises ArtifactIOFailure."""
    return make_client(FakeRenderer(error=ArtifactIOFailure("Failed to read generated PDF")))


@pytest.fixture
def unavailable_client(make_client):
    """Test client whose renderer reports the tool as missing."""
    return make_client(FakeRenderer(available=False))
