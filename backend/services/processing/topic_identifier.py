"""
Overall topic label for a document's sections.
"""
from collections import Counter
from typing import Sequence

from models.section_models import Section
from services.processing.utils import capitalize

DEFAULT_TOPIC = "Learning Content"


def identify_overall_topic(sections: Sequence[Section]) -> str:
    """
    Pool keywords and key concepts of all sections into one topic label.

    The three most frequent terms are capitalized and joined with " & ".
    Falls back to the first section's title, then to DEFAULT_TOPIC.
    """
    pooled = []
    for section in sections:
        pooled.extend(section.keywords)
    for section in sections:
        pooled.extend(section.key_concepts)

    frequencies = Counter()
    for term in pooled:
        normalized = term.lower().strip()
        if len(normalized) > 2:
            frequencies[normalized] += 1

    top_terms = [capitalize(term) for term, _ in frequencies.most_common(3)]
    if top_terms:
        return " & ".join(top_terms)

    if sections and sections[0].title:
        return sections[0].title

    return DEFAULT_TOPIC
