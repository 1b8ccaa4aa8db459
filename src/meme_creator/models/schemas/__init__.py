"""API schemas."""

from .memes import (
    CreateMemeCommand,
    MemeEnvelope,
    MemeListResponse,
    MemeResponse,
    TemplateEnvelope,
    TemplateListResponse,
    TemplateResponse,
)

__all__ = [
    "CreateMemeCommand",
    "MemeEnvelope",
    "MemeListResponse",
    "MemeResponse",
    "TemplateEnvelope",
    "TemplateListResponse",
    "TemplateResponse",
]
