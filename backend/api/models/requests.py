"""
Pydantic request models for API endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

from models.section_models import ExtractedSection, Section, SectionIntent, SynthesizedSection


class TopicRequest(BaseModel):
    """Request model for curriculum generation and topic search."""
    topic: str = Field(..., description="Free-text learning topic")


class SectionIntentPayload(BaseModel):
    """Intent of a section as sent back by the client."""
    type: str = Field(default="concept", description="concept, derivation, example, theory or implementation")
    depth: str = Field(default="intermediate", description="beginner, intermediate or advanced")
    needs_visual: bool = False
    needs_practice: bool = False


class SectionPayload(BaseModel):
    """A section previously returned by document processing or curriculum generation."""
    id: str
    title: str
    content: str = ""
    key_concepts: List[str] = []
    keywords: List[str] = []
    intent: SectionIntentPayload = Field(default_factory=SectionIntentPayload)
    order: int = 0
    learning_objective: Optional[str] = None
    kind: str = Field(default="extracted", description="extracted or synthesized")

    def to_section(self) -> Section:
        intent = SectionIntent(**self.intent.model_dump())
        if self.kind == "synthesized":
            return SynthesizedSection(
                id=self.id,
                title=self.title,
                learning_objective=self.learning_objective or self.content,
                key_concepts=list(self.key_concepts),
                keywords=list(self.keywords),
                intent=intent,
                order=self.order,
            )
        return ExtractedSection(
            id=self.id,
            title=self.title,
            content=self.content,
            key_concepts=list(self.key_concepts),
            keywords=list(self.keywords),
            intent=intent,
            order=self.order,
            learning_objective=self.learning_objective,
        )


class SectionResourcesRequest(BaseModel):
    """Request model for resolving resources of sections."""
    sections: List[SectionPayload] = Field(default=[], description="Sections to resolve")
