"""
Unit tests for file type detection and per-format text extraction.
"""
import io
import zlib

import pytest
from docx import Document
from pptx import Presentation

from core.errors import UnsupportedFormatError
from services.extraction.format_extractors import (
    FileType,
    detect_file_type,
    extract_text_from_file,
    run_chain,
)


class TestDetectFileType:
    """Test MIME type and extension mapping."""

    @pytest.mark.parametrize("mime_type,expected", [
        ("application/pdf", FileType.PDF),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", FileType.DOCX),
        ("text/plain", FileType.TXT),
        ("text/plain; charset=utf-8", FileType.TXT),
        ("application/vnd.openxmlformats-officedocument.presentationml.presentation", FileType.PPT),
        ("application/vnd.ms-powerpoint", FileType.PPT),
        ("image/png", FileType.IMAGE),
    ])
    def test_known_mime_types(self, mime_type, expected):
        """Test that recognised MIME types map to their format."""
        assert detect_file_type(mime_type) == expected

    def test_zip_rejected(self):
        """Test that application/zip is unsupported."""
        with pytest.raises(UnsupportedFormatError):
            detect_file_type("application/zip", "notes.zip")

    def test_generic_mime_uses_extension(self):
        """Test that octet-stream uploads are resolved from the extension."""
        assert detect_file_type("application/octet-stream", "lecture.PDF") == FileType.PDF
        assert detect_file_type("", "notes.md") == FileType.TXT

    def test_generic_mime_unknown_extension_rejected(self):
        """Test that an unknown extension cannot rescue a generic MIME type."""
        with pytest.raises(UnsupportedFormatError):
            detect_file_type("application/octet-stream", "archive.tar")

    def test_specific_unknown_mime_ignores_extension(self):
        """Test that a specific but unsupported MIME type is rejected."""
        with pytest.raises(UnsupportedFormatError):
            detect_file_type("application/json", "notes.txt")


class TestPlainText:
    """Test plain text extraction."""

    def test_utf8_decoded_and_normalized(self):
        """Test decoding and normalization of text files."""
        data = "Héllo   world\r\n\r\n\r\nSecond line  ".encode("utf-8")
        assert extract_text_from_file(data, FileType.TXT, "a.txt") == "Héllo world\n\nSecond line"

    def test_invalid_bytes_replaced(self):
        """Test that invalid UTF-8 does not raise."""
        text = extract_text_from_file(b"abc\xff\xfedef", FileType.TXT, "a.txt")
        assert text.startswith("abc")
        assert text.endswith("def")


def build_pdf(text: str) -> bytes:
    """Single-page PDF whose only content stream is Flate-compressed."""
    content = zlib.compress(f"BT /F1 24 Tf 72 700 Td ({text}) Tj ET".encode("latin-1"))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d /Filter /FlateDecode >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n" % number + body + b"\nendobj\n")

    xref_offset = out.tell()
    out.write(b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1))
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_offset))
    return out.getvalue()


class TestPdfExtraction:
    """Test the PDF strategy chain."""

    def test_structured_text_layer(self):
        """Test that pypdf reads text the operator scan cannot see."""
        data = build_pdf("Graph traversal basics")
        assert b"Graph traversal" not in data

        text = extract_text_from_file(data, FileType.PDF, "lecture.pdf")

        assert "Graph traversal basics" in text

    def test_operator_scan_fallback(self):
        """Test that Tj and TJ operators are salvaged when parsing fails."""
        data = (
            b"%PDF-1.4\nstream\nBT (Hello World) Tj ET\n"
            b"BT [(Grap) -20 (hs)] TJ ET\nendstream\n%%EOF"
        )
        text = extract_text_from_file(data, FileType.PDF, "broken.pdf")
        assert "Hello World" in text
        assert "Graphs" in text

    def test_parenthesised_run_last_resort(self):
        """Test that bare literal runs with letters are salvaged."""
        data = b"%PDF-1.4 garbage (Salvaged text here) (x1) (123)"
        text = extract_text_from_file(data, FileType.PDF, "broken.pdf")
        assert text == "Salvaged text here"

    def test_nothing_found_returns_empty(self):
        """Test that unreadable PDFs yield empty text instead of raising."""
        assert extract_text_from_file(b"\x00\x01\x02", FileType.PDF, "empty.pdf") == ""


class TestDocxExtraction:
    """Test the word-processor strategy chain."""

    def test_structured_parse(self):
        """Test extraction from a real DOCX package."""
        document = Document()
        document.add_paragraph("Introduction to Graphs")
        document.add_paragraph("A graph is a set of vertices connected by edges.")
        buffer = io.BytesIO()
        document.save(buffer)

        text = extract_text_from_file(buffer.getvalue(), FileType.DOCX, "graphs.docx")
        assert "Introduction to Graphs" in text
        assert "vertices connected by edges" in text

    def test_tag_scan_fallback(self):
        """Test that <w:t> runs are read when the package cannot be opened."""
        data = b'<w:p><w:t>Hello</w:t><w:t xml:space="preserve">World</w:t></w:p>'
        assert extract_text_from_file(data, FileType.DOCX, "raw.docx") == "Hello World"

    def test_strip_markup_fallback(self):
        """Test that all tags are stripped when no <w:t> runs exist."""
        data = b"<root><para>Plain words</para></root>"
        assert extract_text_from_file(data, FileType.DOCX, "raw.docx") == "Plain words"


class TestPptxExtraction:
    """Test the slide-deck strategy chain."""

    def test_structured_parse(self):
        """Test extraction from a real PPTX package."""
        presentation = Presentation()
        slide = presentation.slides.add_slide(presentation.slide_layouts[1])
        slide.shapes.title.text = "Sorting Algorithms"
        slide.placeholders[1].text = "Merge sort divides the input in halves."
        buffer = io.BytesIO()
        presentation.save(buffer)

        text = extract_text_from_file(buffer.getvalue(), FileType.PPT, "deck.pptx")
        assert "Sorting Algorithms" in text
        assert "Merge sort divides the input in halves." in text

    def test_tag_scan_fallback(self):
        """Test that <a:t> runs are read when the package cannot be opened."""
        data = b"<p:sld><a:t>First slide</a:t><a:t>Second point</a:t></p:sld>"
        text = extract_text_from_file(data, FileType.PPT, "raw.pptx")
        assert "First slide" in text
        assert "Second point" in text


class TestImagePlaceholder:
    """Test image handling without OCR."""

    def test_placeholder_names_file(self):
        """Test that the placeholder names the file and mentions OCR."""
        text = extract_text_from_file(b"\x89PNG", FileType.IMAGE, "diagram.png")
        assert "diagram.png" in text
        assert "OCR" in text


class TestRunChain:
    """Test strategy chaining."""

    def test_failing_strategy_skipped(self):
        """Test that an exception in one strategy falls through to the next."""
        def broken(data):
            raise RuntimeError("boom")

        def blank(data):
            return "   "

        def working(data):
            return "found"

        assert run_chain(b"", [broken, blank, working]) == "found"

    def test_all_empty(self):
        """Test that an exhausted chain returns an empty string."""
        assert run_chain(b"", [lambda data: ""]) == ""
