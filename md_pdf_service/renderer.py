"""
HTML to PDF rendering via the wkhtmltopdf command line tool.

The HTTP layer only depends on the Renderer interface, so the subprocess
mechanism can be replaced (an in-process library, a remote service) without
touching request handling or Markdown conversion.
"""

import logging
import subprocess
import tempfile
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .errors import ArtifactIOFailure, RenderFailure

logger = logging.getLogger(__name__)

# Fixed layout passed to every wkhtmltopdf run
WKHTMLTOPDF_ARGS = [
    "--page-size", "A4",
    "--dpi", "96",
    "--margin-top", "20mm",
    "--margin-bottom", "20mm",
    "--disable-smart-shrinking",
    "--enable-local-file-access",
    "--zoom", "1.0",
    "--print-media-type",
    "--no-background",
]


class Renderer(ABC):
    """Turns a complete HTML document into PDF bytes."""

    name: str = "renderer"

    @abstractmethod
    def render(self, html: str) -> bytes:
        """
        Render HTML to PDF.

        Raises:
            RenderFailure: The rendering backend rejected the document
            ArtifactIOFailure: Intermediate files could not be written or read
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Report whether the rendering backend can currently be used."""


@dataclass
class RenderJob:
    """Temporary source/output file pair for one render."""

    source_path: Path
    output_path: Path

    @classmethod
    def create(cls, scratch_dir: Path) -> "RenderJob":
        """Allocate uniquely named paths so concurrent renders never collide."""
        source_path = scratch_dir / f"{uuid.uuid4()}.html"
        return cls(source_path=source_path, output_path=source_path.with_suffix(".pdf"))

    def cleanup(self) -> None:
        """Remove both files, best effort."""
        for path in (self.source_path, self.output_path):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.debug(f"Could not remove temporary file {path}: {e}")


class WkhtmltopdfRenderer(Renderer):
    """Renderer that shells out to wkhtmltopdf."""

    name = "wkhtmltopdf"

    def __init__(
        self,
        executable: str = "wkhtmltopdf",
        scratch_dir: Optional[Union[str, Path]] = None,
        timeout: Optional[float] = None,
    ):
        self.executable = executable
        self.scratch_dir = Path(scratch_dir) if scratch_dir else Path(tempfile.gettempdir())
        self.timeout = timeout

    def build_command(self, job: RenderJob) -> List[str]:
        """Full argv for rendering one job."""
        return [self.executable, *WKHTMLTOPDF_ARGS, str(job.source_path), str(job.output_path)]

    def render(self, html: str) -> bytes:
        job = RenderJob.create(self.scratch_dir)
        try:
            self._write_source(job, html)
            self._run(job)
            pdf_bytes = self._read_output(job)
        finally:
            job.cleanup()

        logger.debug(f"Rendered {len(pdf_bytes)} byte PDF")
        return pdf_bytes

    def is_available(self) -> bool:
        # Only whether the tool starts matters, not its exit status.
        try:
            subprocess.run(
                [self.executable, "--version"],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.SubprocessError):
            return False
        return True

    def _write_source(self, job: RenderJob, html: str) -> None:
        try:
            job.source_path.write_text(html, encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise ArtifactIOFailure(f"Failed to create temporary HTML file {job.source_path}") from e

    def _run(self, job: RenderJob) -> None:
        cmd = self.build_command(job)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise RenderFailure(f"{self.name} timed out after {self.timeout}s") from e
        except OSError as e:
            raise RenderFailure(f"Failed to execute {self.executable}: {e}") from e

        if result.returncode != 0:
            raise RenderFailure(
                f"{self.name} failed with exit code {result.returncode}",
                stderr=result.stderr.decode("utf-8", errors="replace"),
            )

    def _read_output(self, job: RenderJob) -> bytes:
        try:
            return job.output_path.read_bytes()
        except OSError as e:
            raise ArtifactIOFailure(f"Failed to read generated PDF {job.output_path}") from e
