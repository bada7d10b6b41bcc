"""Document rendering: structured text to a paginated PDF or DOCX artifact."""
import logging
import math
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Type
from xml.sax.saxutils import escape

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer
from reportlab.platypus.flowables import Flowable

from api.models.job import OutputFormat
from shared.errors import RenderIOError

logger = logging.getLogger(__name__)

# Rough characters-per-page figure used for the page estimate
CHARS_PER_PAGE = 3000

# Starts uppercase, no period anywhere
HEADING_PATTERN = re.compile(r"^[A-Z][^.]*$")

FALLBACK_FILENAME = "document"

# Vertical space in points for a blank line of text
BLANK_LINE_SPACE = 6


@dataclass
class RenderedArtifact:
    """Metadata about a written document."""
    filename: str
    pages: int
    file_size: int


def sanitize_filename(title: str) -> str:
    """Derive a filesystem-safe stem from a page title."""
    stem = re.sub(r"[^A-Za-z0-9_\s-]", "", title)
    stem = re.sub(r"\s+", "_", stem)
    return stem or FALLBACK_FILENAME


def estimate_pages(text: str) -> int:
    """Page count estimate from text length, not from the laid-out document."""
    return max(1, math.ceil(len(text) / CHARS_PER_PAGE))


def is_heading(line: str) -> bool:
    return bool(HEADING_PATTERN.match(line))


def generated_on() -> str:
    return datetime.now().strftime("%B %d, %Y")


class DocumentRenderer:
    """Base renderer. Subclasses write the artifact in their own format."""

    extension = ""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def render(self, title: str, text: str, source_url: str) -> RenderedArtifact:
        """Write the document and report its filename, page estimate and size."""
        filename = f"{sanitize_filename(title)}.{self.extension}"
        path = self.output_dir / filename

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self._write(path, title, text, source_url)
            file_size = os.path.getsize(path)
        except OSError as e:
            raise RenderIOError(f"Failed to write {filename}: {e}") from e

        artifact = RenderedArtifact(
            filename=filename,
            pages=estimate_pages(text),
            file_size=file_size
        )
        logger.info(f"Rendered {filename} ({artifact.file_size} bytes, ~{artifact.pages} pages)")
        return artifact

    def _write(self, path: Path, title: str, text: str, source_url: str) -> None:
        raise NotImplementedError


class PdfRenderer(DocumentRenderer):
    """A4 PDF with a centered header block and justified body text."""

    extension = "pdf"
    margin = 50

    title_style = ParagraphStyle(
        "DocTitle", fontName="Helvetica-Bold", fontSize=20, leading=24, alignment=TA_CENTER
    )
    meta_style = ParagraphStyle(
        "DocMeta", fontName="Helvetica", fontSize=10, leading=12, alignment=TA_CENTER
    )
    heading_style = ParagraphStyle(
        "DocHeading", fontName="Helvetica-Bold", fontSize=14, leading=17
    )
    body_style = ParagraphStyle(
        "DocBody", fontName="Helvetica", fontSize=12, leading=14.5, alignment=TA_JUSTIFY
    )

    def _write(self, path: Path, title: str, text: str, source_url: str) -> None:
        doc = SimpleDocTemplate(
            str(path),
            pagesize=A4,
            topMargin=self.margin,
            bottomMargin=self.margin,
            leftMargin=self.margin,
            rightMargin=self.margin,
            title=title
        )
        doc.build(self._story(title, text, source_url))

    def _story(self, title: str, text: str, source_url: str) -> List[Flowable]:
        story: List[Flowable] = [
            Paragraph(escape(title), self.title_style),
            Spacer(1, 12),
            Paragraph(escape(f"Source: {source_url}"), self.meta_style),
            Paragraph(escape(f"Generated: {generated_on()}"), self.meta_style),
            Spacer(1, 24),
        ]

        for line in text.split("\n"):
            line = line.strip()
            if not line:
                story.append(Spacer(1, BLANK_LINE_SPACE))
            elif is_heading(line):
                story.append(Paragraph(escape(line), self.heading_style))
                story.append(Spacer(1, 6))
            else:
                story.append(Paragraph(escape(line), self.body_style))
                story.append(Spacer(1, 3.5))

        return story


class DocxRenderer(DocumentRenderer):
    """Word document with the same layout rules as the PDF renderer."""

    extension = "docx"

    def _write(self, path: Path, title: str, text: str, source_url: str) -> None:
        document = Document()

        heading = document.add_paragraph()
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = heading.add_run(title)
        run.bold = True
        run.font.size = Pt(20)

        for meta in (f"Source: {source_url}", f"Generated: {generated_on()}"):
            paragraph = document.add_paragraph()
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            paragraph.add_run(meta).font.size = Pt(10)

        paragraph = None
        for line in text.split("\n"):
            line = line.strip()
            if not line:
                if paragraph is not None:
                    paragraph.paragraph_format.space_after = Pt(BLANK_LINE_SPACE)
                continue
            paragraph = document.add_paragraph()
            run = paragraph.add_run(line)
            if is_heading(line):
                run.bold = True
                run.font.size = Pt(14)
            else:
                run.font.size = Pt(12)
                paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY

        document.save(str(path))


RENDERERS: Dict[OutputFormat, Type[DocumentRenderer]] = {
    OutputFormat.PDF: PdfRenderer,
    OutputFormat.DOCX: DocxRenderer,
}


def get_renderer(output_format: OutputFormat, output_dir: Path) -> DocumentRenderer:
    """Renderer for the requested format."""
    return RENDERERS[OutputFormat(output_format)](output_dir)
