"""Pydantic schemas for templates and memes."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CreateMemeCommand(BaseModel):
    """
    Request to caption a template.

    Attributes:
        template_id: Template to caption
        top: Top caption, empty for none
        bottom: Bottom caption, empty for none
    """

    template_id: str = Field(..., description="Template to caption", min_length=1)
    top: str = Field("", description="Top caption")
    bottom: str = Field("", description="Bottom caption")


class TemplateResponse(BaseModel):
    """Template as returned by the API."""

    id: str = Field(..., description="Unique identifier for the template")
    created: datetime = Field(..., description="Upload timestamp")
    filename: str = Field(..., description="Stored image key")

    model_config = ConfigDict(from_attributes=True)


class MemeResponse(BaseModel):
    """Meme as returned by the API."""

    id: str = Field(..., description="Unique identifier for the meme")
    created: datetime = Field(..., description="Submission timestamp")
    status: str = Field(..., description="created or done")
    template_id: str = Field(..., description="Captioned template")
    top: str = Field(..., description="Top caption")
    bottom: str = Field(..., description="Bottom caption")
    public_url: str = Field(..., description="Where the rendered image is published")

    model_config = ConfigDict(from_attributes=True)


class TemplateListResponse(BaseModel):
    templates: List[TemplateResponse]


class TemplateEnvelope(BaseModel):
    template: TemplateResponse


class MemeListResponse(BaseModel):
    memes: List[MemeResponse]


class MemeEnvelope(BaseModel):
    meme: MemeResponse
