"""
Data models for learning sections.
"""
import re
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any, Optional, Union


INTENT_TYPES = ("concept", "derivation", "example", "theory", "implementation")
DEPTH_LEVELS = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class SectionIntent:
    """Classified teaching purpose and audience level of a section"""
    type: str = "concept"  # one of INTENT_TYPES
    depth: str = "intermediate"  # one of DEPTH_LEVELS
    needs_visual: bool = False
    needs_practice: bool = False


@dataclass(frozen=True)
class ExtractedSection:
    """Section segmented out of an uploaded document"""
    id: str
    title: str
    content: str  # Raw text span of the section
    key_concepts: List[str] = field(default_factory=list)  # <= 5, deduplicated
    keywords: List[str] = field(default_factory=list)  # <= 10, by frequency
    intent: SectionIntent = field(default_factory=SectionIntent)
    order: int = 0  # Zero-based, contiguous within a document
    learning_objective: Optional[str] = None

    @property
    def objective(self) -> str:
        """Learning objective, or the opening sentence of the content."""
        if self.learning_objective:
            return self.learning_objective
        first_sentence = re.split(r'(?<=[.!?])\s+', self.content.strip(), maxsplit=1)[0]
        return first_sentence[:200]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = "extracted"
        return data


@dataclass(frozen=True)
class SynthesizedSection:
    """Section produced by the generative curriculum path (no source text)"""
    id: str
    title: str
    learning_objective: str
    key_concepts: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    intent: SectionIntent = field(default_factory=SectionIntent)
    order: int = 0

    @property
    def content(self) -> str:
        """The objective stands in for the missing content body."""
        return self.learning_objective

    @property
    def objective(self) -> str:
        return self.learning_objective

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["content"] = self.content
        data["kind"] = "synthesized"
        return data


Section = Union[ExtractedSection, SynthesizedSection]


@dataclass
class ProcessedDocument:
    """Result of running an upload through extraction and segmentation"""
    file_id: str
    file_name: str
    file_type: str
    sections: List[ExtractedSection]
    overall_topic: str
    extracted_length: int = 0
