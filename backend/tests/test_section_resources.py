"""
Unit tests for per-section theory, summary and resource resolution.
"""
from unittest.mock import Mock

from models.resource_models import LearningResource
from models.section_models import ExtractedSection, SectionIntent
from services.matching.section_resources import (
    generate_section_summary,
    generate_theory_explanation,
    resolve_section_resources,
)


def make_section(section_id="s1", content="", key_concepts=None, keywords=None, intent=None, order=0):
    return ExtractedSection(
        id=section_id,
        title="Graph Traversal",
        content=content,
        key_concepts=key_concepts if key_concepts is not None else [],
        keywords=keywords if keywords is not None else ["graph", "search", "queue", "stack", "visit", "order"],
        intent=intent or SectionIntent(),
        order=order,
    )


def make_video(index):
    return LearningResource(id=f"v{index}", title=f"Video {index}", source="youtube", url="u", ranking_score=90 - index)


class TestTheoryExplanation:
    """Test the written explanation."""

    def test_long_content_preview(self):
        """Test that long content is previewed to 300 chars with an ellipsis."""
        content = "Breadth first search explores neighbours level by level. " * 10
        theory = generate_theory_explanation(make_section(content=content))

        assert theory.title == "Understanding Graph Traversal"
        assert theory.content == content[:300].strip() + "..."

    def test_short_content_template(self):
        """Test the templated paragraph for short content."""
        theory = generate_theory_explanation(make_section(content="Short.", key_concepts=["BFS", "DFS", "Dijkstra"]))

        assert theory.content.startswith("Graph Traversal is a fundamental concept")
        assert "familiarity with BFS and DFS" in theory.content

    def test_template_without_concepts(self):
        """Test the template wording when no key concepts exist."""
        theory = generate_theory_explanation(make_section(content="Short."))
        assert "familiarity with core principles" in theory.content

    def test_concepts_and_related_topics(self):
        """Test key concept fallback to keywords and capitalized related topics."""
        theory = generate_theory_explanation(make_section())

        assert theory.key_concepts == ["graph", "search", "queue", "stack"]
        assert theory.related_topics == ["Graph", "Search", "Queue", "Stack", "Visit"]


class TestSectionSummary:
    """Test the summary sentence."""

    def test_full_summary(self):
        """Test depth, type, concepts and learning-aid hints."""
        intent = SectionIntent(type="derivation", depth="beginner", needs_visual=True, needs_practice=True)
        summary = generate_section_summary(make_section(key_concepts=["BFS"], intent=intent))

        assert summary == (
            "This section covers foundational mathematical derivations and proofs related to "
            "Graph Traversal. Key concepts include: BFS. Visual learning resources are recommended. "
            "Hands-on practice is suggested."
        )

    def test_minimal_summary(self):
        """Test the default intent without concepts or hints."""
        summary = generate_section_summary(make_section())
        assert summary == "This section covers intermediate core concepts related to Graph Traversal."


class TestResolveSectionResources:
    """Test resolution across sections."""

    def test_one_result_per_section_in_order(self):
        """Test ordering, section ids and the five-video cap."""
        matcher = Mock()
        matcher.match.return_value = [make_video(i) for i in range(7)]
        sections = [make_section(section_id=f"s{i}", order=i) for i in range(3)]

        resolved = resolve_section_resources(sections, matcher)

        assert [r.section_id for r in resolved] == ["s0", "s1", "s2"]
        assert all(len(r.videos) == 5 for r in resolved)
        assert matcher.match.call_count == 3

    def test_empty_input(self):
        """Test that no sections resolve to an empty list."""
        assert resolve_section_resources([], Mock()) == []
