"""
Per-format text extraction for uploaded documents.

Every format is handled by an ordered chain of strategies. A strategy returns
the text it found (possibly empty); the first non-blank result wins. Strategy
failures are logged and treated as an empty result, so only an unrecognised
format raises.
"""
import io
import logging
import re
import zipfile
from enum import Enum
from pathlib import PurePath
from typing import Callable, Dict, List, Optional

from docx import Document
from pptx import Presentation
from pypdf import PdfReader

from core.errors import UnsupportedFormatError
from services.extraction.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """Document formats understood by the extractors."""
    TXT = "txt"
    PDF = "pdf"
    DOCX = "docx"
    PPT = "ppt"
    IMAGE = "image"


EXTENSION_TYPES = {
    ".txt": FileType.TXT,
    ".md": FileType.TXT,
    ".pdf": FileType.PDF,
    ".docx": FileType.DOCX,
    ".pptx": FileType.PPT,
    ".ppt": FileType.PPT,
    ".png": FileType.IMAGE,
    ".jpg": FileType.IMAGE,
    ".jpeg": FileType.IMAGE,
    ".gif": FileType.IMAGE,
    ".webp": FileType.IMAGE,
}

GENERIC_MIME_TYPES = {"", "application/octet-stream"}


def detect_file_type(mime_type: Optional[str], file_name: Optional[str] = None) -> FileType:
    """
    Map a declared MIME type to a FileType.

    Generic MIME types (missing or ``application/octet-stream``) are resolved
    from the file extension instead.

    Raises:
        UnsupportedFormatError: if neither the MIME type nor the extension
            is recognised.
    """
    mime = (mime_type or "").split(";")[0].strip().lower()

    if mime == "application/pdf":
        return FileType.PDF
    if "wordprocessingml" in mime:
        return FileType.DOCX
    if mime in ("text/plain", "text/markdown"):
        return FileType.TXT
    if "presentation" in mime or "powerpoint" in mime:
        return FileType.PPT
    if mime.startswith("image/"):
        return FileType.IMAGE

    if mime in GENERIC_MIME_TYPES and file_name:
        suffix = PurePath(file_name).suffix.lower()
        if suffix in EXTENSION_TYPES:
            return EXTENSION_TYPES[suffix]

    raise UnsupportedFormatError(f"Unsupported file type: {mime_type or file_name}")


# --- Plain text ---------------------------------------------------------------

def _decode_utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


# --- PDF ----------------------------------------------------------------------

STREAM_RE = re.compile(rb"stream\s*([\s\S]*?)\s*endstream")
TJ_ARRAY_RE = re.compile(r"\[(.*?)\]\s*TJ")
TJ_SINGLE_RE = re.compile(r"\((.*?)\)\s*Tj")
LITERAL_RE = re.compile(r"\((.*?)\)")
PAREN_RUN_RE = re.compile(r"\(((?:[^()\\]|\\.){3,})\)")
LETTERS_RE = re.compile(r"[a-zA-Z]{2,}")


def _pdf_structured(data: bytes) -> str:
    """Extract the text layer with pypdf."""
    reader = PdfReader(io.BytesIO(data))
    pages = []
    for page in reader.pages:
        try:
            pages.append(page.extract_text() or "")
        except Exception as e:
            logger.debug(f"pypdf could not read a page: {e}")
            pages.append("")
    return "\n\n".join(pages)


def _pdf_operator_scan(data: bytes) -> str:
    """
    Best-effort salvage of literal strings from PDF content streams.

    Reads ``TJ``/``Tj`` text operators inside ``stream ... endstream`` blocks;
    when none are found, falls back to any parenthesised run of three or more
    characters containing two consecutive letters. Compressed streams yield
    nothing, which is expected.
    """
    raw = data.decode("latin-1")
    parts: List[str] = []

    for match in STREAM_RE.finditer(data):
        content = match.group(1).decode("latin-1")

        for tj_array in TJ_ARRAY_RE.finditer(content):
            strings = LITERAL_RE.findall(tj_array.group(0))
            if strings:
                parts.append("".join(strings))

        for tj_single in TJ_SINGLE_RE.finditer(content):
            parts.append(tj_single.group(1))

    if not parts:
        for match in PAREN_RUN_RE.finditer(raw):
            text = (
                match.group(1)
                .replace("\\n", "\n")
                .replace("\\r", "")
                .replace("\\(", "(")
                .replace("\\)", ")")
            )
            if LETTERS_RE.search(text):
                parts.append(text)

    return " ".join(parts)


# --- Office Open XML (DOCX / PPTX) ---------------------------------------------

WORD_TEXT_RE = re.compile(r"<w:t[^>]*>(.*?)</w:t>")
SLIDE_TEXT_RE = re.compile(r"<a:t>(.*?)</a:t>")
SLIDE_BODY_RE = re.compile(r"<p:txBody[^>]*>([\s\S]*?)</p:txBody>")
TAG_RE = re.compile(r"<[^>]*>")
NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E\n\r\t]")


def _read_markup(data: bytes, member_prefixes: tuple) -> str:
    """
    Decode the XML of an OOXML package leniently.

    When the bytes are a zip archive, the XML members starting with one of
    ``member_prefixes`` are concatenated in archive order; otherwise the raw
    bytes are decoded as-is.
    """
    buffer = io.BytesIO(data)
    if zipfile.is_zipfile(buffer):
        try:
            with zipfile.ZipFile(buffer) as archive:
                chunks = []
                for name in archive.namelist():
                    if name.endswith(".xml") and name.startswith(member_prefixes):
                        chunks.append(archive.read(name).decode("utf-8", errors="replace"))
                return "\n".join(chunks)
        except (zipfile.BadZipFile, OSError) as e:
            logger.debug(f"Could not open OOXML archive: {e}")
    return data.decode("utf-8", errors="replace")


def _docx_structured(data: bytes) -> str:
    """Extract paragraph text with python-docx."""
    document = Document(io.BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def _docx_tag_scan(data: bytes) -> str:
    markup = _read_markup(data, ("word/",))
    texts = [text for text in WORD_TEXT_RE.findall(markup) if text.strip()]
    return " ".join(texts)


def _strip_markup(data: bytes) -> str:
    """Last resort: drop every tag and non-printable character."""
    markup = _read_markup(data, ("word/", "ppt/slides/"))
    return NON_PRINTABLE_RE.sub(" ", TAG_RE.sub(" ", markup))


def _pptx_structured(data: bytes) -> str:
    """Extract shape text of every slide with python-pptx."""
    presentation = Presentation(io.BytesIO(data))
    blocks = []
    for slide in presentation.slides:
        for shape in slide.shapes:
            if shape.has_text_frame and shape.text_frame.text.strip():
                blocks.append(shape.text_frame.text)
    return "\n\n".join(blocks)


def _pptx_tag_scan(data: bytes) -> str:
    markup = _read_markup(data, ("ppt/slides/",))
    texts = [text for text in SLIDE_TEXT_RE.findall(markup) if text.strip()]

    for body in SLIDE_BODY_RE.findall(markup):
        inner = TAG_RE.sub(" ", body).strip()
        if inner:
            texts.append(inner)

    return "\n\n".join(texts)


# --- Images -------------------------------------------------------------------

def image_placeholder(file_name: str) -> str:
    """Placeholder text for image uploads; no OCR is performed."""
    return f"""[Image file: {file_name}]

This appears to be an image file. For full OCR text extraction, please integrate with an OCR service like Tesseract or a cloud OCR API.

In a production environment, this would:
1. Process the image through OCR
2. Extract all visible text
3. Identify diagrams, charts, and visual elements
4. Structure the content for learning"""


ExtractionStrategy = Callable[[bytes], str]

EXTRACTION_CHAINS: Dict[FileType, List[ExtractionStrategy]] = {
    FileType.TXT: [_decode_utf8],
    FileType.PDF: [_pdf_structured, _pdf_operator_scan],
    FileType.DOCX: [_docx_structured, _docx_tag_scan, _strip_markup],
    FileType.PPT: [_pptx_structured, _pptx_tag_scan, _strip_markup],
}


def run_chain(data: bytes, strategies: List[ExtractionStrategy]) -> str:
    """Return the first non-blank strategy result, or an empty string."""
    for strategy in strategies:
        try:
            text = strategy(data)
        except Exception as e:
            logger.warning(f"Extraction strategy {strategy.__name__} failed: {e}")
            continue

        if text and text.strip():
            logger.debug(f"Extraction strategy {strategy.__name__} produced {len(text)} chars")
            return text

    return ""


def extract_text_from_file(data: bytes, file_type: FileType, file_name: str) -> str:
    """
    Convert raw upload bytes into normalized text.

    Args:
        data: Raw file bytes
        file_type: Detected FileType (see ``detect_file_type``)
        file_name: Original file name (used for image placeholders)

    Returns:
        Normalized text; may be empty when nothing could be salvaged.

    Raises:
        UnsupportedFormatError: for a file type without an extraction chain.
    """
    try:
        file_type = FileType(file_type)
    except ValueError:
        raise UnsupportedFormatError(f"Unsupported file type: {file_type}")

    if file_type == FileType.IMAGE:
        return normalize_text(image_placeholder(file_name))

    return normalize_text(run_chain(data, EXTRACTION_CHAINS[file_type]))
