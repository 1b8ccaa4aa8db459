"""SQLAlchemy models."""

from .records import Base, MemeRecord, MemeStatus, TemplateRecord

__all__ = ["Base", "MemeRecord", "MemeStatus", "TemplateRecord"]
