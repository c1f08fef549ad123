"""Pydantic schemas for document analysis endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from pacer.models.enums import LandmarkKind, SourceType


class SchemaBase(BaseModel):
    """Base schema with attribute support for the dataclass models."""

    model_config = ConfigDict(from_attributes=True)


class AnalyzeRequest(BaseModel):
    text: str = Field(..., min_length=1)
    source_type: SourceType = SourceType.PASTE
    wpm: int | None = Field(None, ge=50, le=5000)
    chunk_size: int | None = Field(None, ge=1, le=10)
    start_index: int = Field(0, ge=0)


class LandmarkDTO(SchemaBase):
    level: int
    label: str
    token_index: int
    callout_kind: str | None = None
    kind: LandmarkKind


class AnalyzeResponse(BaseModel):
    token_count: int
    start_index: int
    wpm: int
    chunk_size: int
    landmarks: list[LandmarkDTO]
    estimated_seconds: float
    estimated_duration: str
    stats: str
