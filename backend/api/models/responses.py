"""
Pydantic response models for API endpoints.
"""
from dataclasses import asdict
from pydantic import BaseModel, Field
from typing import List, Optional

from models.resource_models import LearningResource, SectionResources
from models.section_models import ProcessedDocument, Section


class SectionIntentModel(BaseModel):
    """Section intent."""
    type: str
    depth: str
    needs_visual: bool
    needs_practice: bool


class SectionModel(BaseModel):
    """Learning section."""
    id: str
    title: str
    content: str
    key_concepts: List[str] = []
    keywords: List[str] = []
    intent: SectionIntentModel
    order: int
    learning_objective: Optional[str] = None
    kind: str = "extracted"

    @classmethod
    def from_section(cls, section: Section) -> "SectionModel":
        return cls.model_validate(section.to_dict())


class TranscriptHighlightModel(BaseModel):
    """Timestamped transcript excerpt."""
    text: str
    timestamp: float = Field(..., description="Seconds from the start of the video")


class LearningResourceModel(BaseModel):
    """External video, article or blog."""
    id: str
    title: str
    source: str
    url: str
    thumbnail: str = ""
    channel: Optional[str] = None
    author: Optional[str] = None
    duration: Optional[str] = None
    views: int = 0
    likes: int = 0
    published_at: Optional[str] = None
    description: Optional[str] = None
    ranking_score: int = Field(ge=0, le=100)
    relevance_score: int = 0
    match_confidence: Optional[int] = None
    match_explanation: Optional[str] = None
    transcript_highlights: Optional[List[TranscriptHighlightModel]] = None

    @classmethod
    def from_resource(cls, resource: LearningResource) -> "LearningResourceModel":
        return cls.model_validate(asdict(resource))


class TheoryExplanationModel(BaseModel):
    """Written explanation for a section."""
    title: str
    content: str
    key_concepts: List[str] = []
    related_topics: List[str] = []


class SectionResourcesModel(BaseModel):
    """A section's resolved resources."""
    section_id: str
    videos: List[LearningResourceModel]
    theory: TheoryExplanationModel
    summary: str

    @classmethod
    def from_section_resources(cls, resolved: SectionResources) -> "SectionResourcesModel":
        return cls.model_validate(asdict(resolved))


class ProcessedDocumentResponse(BaseModel):
    """Response model for document processing."""
    file_id: str
    file_name: str
    file_type: str
    sections: List[SectionModel]
    overall_topic: str
    extracted_length: int

    @classmethod
    def from_document(cls, document: ProcessedDocument) -> "ProcessedDocumentResponse":
        return cls(
            file_id=document.file_id,
            file_name=document.file_name,
            file_type=document.file_type,
            sections=[SectionModel.from_section(s) for s in document.sections],
            overall_topic=document.overall_topic,
            extracted_length=document.extracted_length,
        )


class CurriculumResponse(BaseModel):
    """Response model for curriculum generation."""
    sections: List[SectionModel]
    overall_topic: str


class SectionResourcesResponse(BaseModel):
    """Response model for section resource resolution."""
    section_resources: List[SectionResourcesModel]


class SearchResponse(BaseModel):
    """Response model for topic search."""
    resources: List[LearningResourceModel]
    topic: str
    total_results: int
