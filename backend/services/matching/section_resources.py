"""
Resolve every section of a curriculum into its videos, theory and summary.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from core.config import MAX_CONCURRENT_SECTIONS, MAX_VIDEOS_PER_SECTION
from models.resource_models import SectionResources, TheoryExplanation
from models.section_models import Section
from services.matching.section_matcher import SectionResourceMatcher
from services.processing.utils import capitalize

logger = logging.getLogger(__name__)

DEPTH_DESCRIPTIONS = {
    "beginner": "foundational",
    "intermediate": "intermediate",
    "advanced": "advanced",
}

TYPE_DESCRIPTIONS = {
    "derivation": "mathematical derivations and proofs",
    "example": "practical examples and case studies",
    "implementation": "implementation details and code",
    "theory": "theoretical concepts and principles",
    "concept": "core concepts",
}


def generate_theory_explanation(section: Section) -> TheoryExplanation:
    """Short written explanation drawn from the section's own text."""
    preview = section.content[:300].strip()
    if len(preview) > 100:
        content = preview + "..."
    else:
        basics = " and ".join(section.key_concepts[:2]) or "core principles"
        content = (
            f"{section.title} is a fundamental concept that encompasses several key ideas. "
            f"Understanding this topic requires familiarity with {basics}. "
            "This section explores the theoretical foundations and practical applications."
        )

    return TheoryExplanation(
        title=f"Understanding {section.title}",
        content=content,
        key_concepts=list(section.key_concepts) or list(section.keywords[:4]),
        related_topics=[capitalize(keyword) for keyword in section.keywords[:5]],
    )


def generate_section_summary(section: Section) -> str:
    intent = section.intent
    depth = DEPTH_DESCRIPTIONS.get(intent.depth, "intermediate")
    kind = TYPE_DESCRIPTIONS.get(intent.type, "core concepts")

    parts = [f"This section covers {depth} {kind} related to {section.title}."]
    if section.key_concepts:
        parts.append(f"Key concepts include: {', '.join(section.key_concepts)}.")
    if intent.needs_visual:
        parts.append("Visual learning resources are recommended.")
    if intent.needs_practice:
        parts.append("Hands-on practice is suggested.")
    return " ".join(parts)


def build_section_resources(section: Section, matcher: SectionResourceMatcher) -> SectionResources:
    """Match videos for one section and attach its theory and summary."""
    videos = matcher.match(section)[:MAX_VIDEOS_PER_SECTION]
    return SectionResources(
        section_id=section.id,
        videos=videos,
        theory=generate_theory_explanation(section),
        summary=generate_section_summary(section),
    )


def resolve_section_resources(
    sections: List[Section],
    matcher: Optional[SectionResourceMatcher] = None,
    max_workers: int = MAX_CONCURRENT_SECTIONS,
) -> List[SectionResources]:
    """
    Resolve resources for every section in parallel.

    Args:
        sections: Sections in presentation order
        matcher: Matcher to use (a default one is built when omitted)
        max_workers: Sections resolved concurrently

    Returns:
        One SectionResources per section, in the same order as the input
    """
    if not sections:
        return []

    matcher = matcher or SectionResourceMatcher()

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sections)))) as executor:
        results = list(executor.map(lambda s: build_section_resources(s, matcher), sections))

    logger.info(f"Resolved resources for {len(results)} sections")
    return results
