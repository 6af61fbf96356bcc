"""
Section segmentation for normalized document text.
"""
import logging
import re
from dataclasses import dataclass
from typing import List

from models.section_models import ExtractedSection
from services.processing.section_analyzer import analyze_section, extract_keywords
from services.processing.utils import capitalize

logger = logging.getLogger(__name__)

MIN_HEADING_CONTENT_CHARS = 30
MIN_PARAGRAPH_CHARS = 50
PARAGRAPH_BLOCK_CHARS = 400
HEADING_CLUSTER_LINES = 2

MARKDOWN_HEADING_RE = re.compile(r"^#{1,6}\s+.+$")
NUMBERED_HEADING_RE = re.compile(r"^\d+\.\s+[A-Z]")
LABEL_HEADING_RE = re.compile(r"^(?:Chapter|Section|Part|Unit|Module|Lesson)\s+\d*", re.IGNORECASE)
ALL_CAPS_HEADING_RE = re.compile(r"^[A-Z][A-Z\s]{4,}$")
TITLE_CASE_HEADING_RE = re.compile(r"^[A-Z][a-zA-Z\s]+$")

CLEAN_TITLE_PATTERNS = [
    re.compile(r"^#+\s*"),
    re.compile(r"^\d+\.\s*"),
    re.compile(r"^(?:Chapter|Section|Part|Unit|Module|Lesson)\b\s*\d*:?\s*", re.IGNORECASE),
]


@dataclass
class _Heading:
    title: str
    line_index: int


def is_heading(line: str) -> bool:
    """Heuristic heading detection for a single trimmed line."""
    if not line or len(line) < 3 or len(line) > 100:
        return False

    if MARKDOWN_HEADING_RE.match(line):
        return True

    if NUMBERED_HEADING_RE.match(line) and len(line) < 80:
        return True

    if LABEL_HEADING_RE.match(line):
        return True

    if ALL_CAPS_HEADING_RE.match(line) and not re.search(r"\s{2,}", line):
        return True

    if (
        TITLE_CASE_HEADING_RE.match(line)
        and 5 <= len(line) <= 60
        and not line.endswith((".", ",", ";"))
    ):
        return len(line.split()) <= 8

    return False


def clean_title(title: str) -> str:
    """Strip markdown markers, ordinal numbering and chapter-style labels."""
    cleaned = title
    for pattern in CLEAN_TITLE_PATTERNS:
        cleaned = pattern.sub("", cleaned, count=1)
    # A bare label such as "CHAPTER 3" keeps its original text
    return cleaned.strip() or title.strip()


def segment_into_sections(text: str) -> List[ExtractedSection]:
    """
    Split normalized text into ordered learning sections.

    Heading-based segmentation is tried first; when it finds no headings or
    no heading keeps enough content, paragraphs are accumulated instead.
    """
    sections = segment_by_headings(text)
    if sections:
        return sections

    logger.debug("No qualifying headings found, falling back to paragraph segmentation")
    return segment_by_paragraphs(text)


def segment_by_headings(text: str) -> List[ExtractedSection]:
    lines = text.split("\n")
    candidates = [
        _Heading(title=line.strip(), line_index=i)
        for i, line in enumerate(lines)
        if is_heading(line.strip())
    ]

    if not candidates:
        return []

    # Only the first line of a multi-line banner counts
    headings = [
        heading for i, heading in enumerate(candidates)
        if i == 0 or heading.line_index - candidates[i - 1].line_index > HEADING_CLUSTER_LINES
    ]

    sections: List[ExtractedSection] = []
    for i, heading in enumerate(headings):
        end = headings[i + 1].line_index if i + 1 < len(headings) else len(lines)
        content = "\n".join(lines[heading.line_index + 1:end]).strip()

        if len(content) > MIN_HEADING_CONTENT_CHARS:
            sections.append(analyze_section(clean_title(heading.title), content, len(sections)))

    return sections


def segment_by_paragraphs(text: str) -> List[ExtractedSection]:
    paragraphs = [p for p in re.split(r"\n\n+", text) if len(p.strip()) > MIN_PARAGRAPH_CHARS]

    sections: List[ExtractedSection] = []
    current = ""

    for i, paragraph in enumerate(paragraphs):
        current += paragraph + "\n\n"
        is_last = i == len(paragraphs) - 1

        if len(current) > PARAGRAPH_BLOCK_CHARS or is_last:
            block = current.strip()
            if len(block) > MIN_PARAGRAPH_CHARS:
                title = generate_section_title(current, len(sections))
                sections.append(analyze_section(title, block, len(sections)))
            current = ""

    if not sections and len(text) > MIN_PARAGRAPH_CHARS:
        sections.append(analyze_section(generate_section_title(text, 0), text, 0))

    return sections


def generate_section_title(content: str, index: int) -> str:
    """
    Synthesize a title for a paragraph-derived section.

    Preference: first line, first sentence, top keywords, ``Section {n}``.
    """
    lines = [line for line in content.split("\n") if line.strip()]
    first_line = lines[0].strip() if lines else ""

    if 10 <= len(first_line) <= 60 and not first_line.endswith("."):
        return first_line

    first_sentence = re.split(r"[.!?]", content)[0].strip()
    if 10 <= len(first_sentence) <= 60:
        return first_sentence

    keywords = extract_keywords(content)[:3]
    if keywords:
        return f"Section {index + 1}: {', '.join(capitalize(k) for k in keywords)}"

    return f"Section {index + 1}"
