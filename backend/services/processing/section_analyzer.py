"""
Keyword, key-concept and intent inference for learning sections.

Intent classification is table driven: each table is an ordered list of
``(pattern, tag)`` pairs and the first matching pattern wins.
"""
import re
import uuid
from collections import Counter
from typing import List, Pattern, Tuple

from models.section_models import ExtractedSection, SectionIntent

STOP_WORDS = {
    "this", "that", "with", "from", "have", "been", "were", "will", "would",
    "could", "should", "about", "which", "their", "there", "these", "those",
    "then", "than", "when", "what", "where", "while", "also", "into", "only",
    "other", "more", "most", "some", "such", "each", "very", "just", "over",
    "after", "before", "between", "through", "during", "under", "being",
    "they", "them", "your", "because", "make", "like", "using", "used",
    "does", "done", "doing", "made", "many", "much", "even", "well",
}

WORD_RE = re.compile(r"\b[a-z]{4,}\b", re.ASCII)

CONCEPT_PATTERNS: List[Pattern] = [
    # Definitional cues: "X is defined as <concept>", "X refers to <concept>"
    re.compile(
        r"""(?:is defined as|refers to|means|is called|is a|are)\s+["']?([^.,"'\n]{5,40})""",
        re.IGNORECASE,
    ),
    # Proper-noun-like phrases: "Binary Search Tree"
    re.compile(r"([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)"),
]

INTENT_TYPE_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"formula|equation|derive|proof|theorem|calculate|=\s*\d"), "derivation"),
    (re.compile(r"example|instance|case study|scenario|consider|for instance"), "example"),
    (re.compile(r"implement|code|program|function|class|method|```|def |const |let |var "), "implementation"),
    (re.compile(r"theory|principle|law|rule|concept|definition|overview|introduction"), "theory"),
]
DEFAULT_INTENT_TYPE = "concept"

DEPTH_RULES: List[Tuple[Pattern, str]] = [
    (re.compile(r"basic|beginner|introduction|fundamental|simple|getting started|what is"), "beginner"),
    (re.compile(r"advanced|complex|sophisticated|expert|in-depth|optimization|performance"), "advanced"),
]
DEFAULT_DEPTH = "intermediate"

VISUAL_TRIGGERS = re.compile(r"diagram|figure|chart|graph|illustration|image|visual|screenshot")
PRACTICE_TRIGGERS = re.compile(r"exercise|practice|try|implement|build|create|write|hands-on|assignment")


def extract_keywords(content: str, limit: int = 10) -> List[str]:
    """
    Most frequent non-stop-words of four or more letters.

    Ties keep first-seen order.
    """
    words = WORD_RE.findall(content.lower())
    frequencies = Counter(word for word in words if word not in STOP_WORDS)
    return [word for word, _ in frequencies.most_common(limit)]


def extract_key_concepts(content: str, limit: int = 5) -> List[str]:
    """Short definitional and proper-noun phrases, deduplicated in first-seen order."""
    concepts: List[str] = []
    for pattern in CONCEPT_PATTERNS:
        for match in pattern.finditer(content):
            concept = (match.group(1) or "").strip()
            if 3 < len(concept) < 50:
                concepts.append(concept)

    return list(dict.fromkeys(concepts))[:limit]


def classify(text: str, rules: List[Tuple[Pattern, str]], default: str) -> str:
    """Tag of the first rule whose pattern occurs in ``text``."""
    for pattern, tag in rules:
        if pattern.search(text):
            return tag
    return default


def analyze_intent(content: str) -> SectionIntent:
    """Classify type, depth and learning-aid needs of a section."""
    lower_content = content.lower()
    return SectionIntent(
        type=classify(lower_content, INTENT_TYPE_RULES, DEFAULT_INTENT_TYPE),
        depth=classify(lower_content, DEPTH_RULES, DEFAULT_DEPTH),
        needs_visual=bool(VISUAL_TRIGGERS.search(lower_content)),
        needs_practice=bool(PRACTICE_TRIGGERS.search(lower_content)),
    )


def analyze_section(title: str, content: str, order: int) -> ExtractedSection:
    """Build an immutable section with its inferred metadata."""
    return ExtractedSection(
        id=str(uuid.uuid4()),
        title=title,
        content=content,
        key_concepts=extract_key_concepts(content),
        keywords=extract_keywords(content),
        intent=analyze_intent(content),
        order=order,
    )
