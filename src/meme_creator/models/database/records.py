"""Database models for templates and memes."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)


class MemeStatus(str, Enum):
    """Lifecycle of a meme: ``created`` until the worker publishes it."""

    CREATED = "created"
    DONE = "done"


class TemplateRecord(Base):
    """
    An uploaded base image.

    Attributes:
        id: Identifier assigned by the record store
        created: Upload timestamp
        filename: Blob key of the stored image
    """

    __tablename__ = "templates"
    kind = "Template"

    id = Column(String(32), primary_key=True, index=True)
    created = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    filename = Column(String, nullable=False)


class MemeRecord(Base):
    """
    One captioning job and its outcome.

    Attributes:
        id: Identifier assigned by the record store
        created: Submission timestamp
        status: ``created`` or ``done``
        template_id: Template to caption
        top: Top caption, empty for none
        bottom: Bottom caption, empty for none
    """

    __tablename__ = "memes"
    kind = "Meme"

    id = Column(String(32), primary_key=True, index=True)
    created = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    status = Column(String(16), default=MemeStatus.CREATED.value, nullable=False)
    template_id = Column(String, nullable=False)
    top = Column(Text, default="", nullable=False)
    bottom = Column(Text, default="", nullable=False)
