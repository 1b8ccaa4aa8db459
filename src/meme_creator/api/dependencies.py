"""API dependencies."""

from fastapi import Request

from ..config.config import Settings
from ..pipeline import PipelineDeps


def get_pipeline(request: Request) -> PipelineDeps:
    """
    Pipeline collaborators built at startup.

    Returns:
        PipelineDeps: Shared collaborators
    """
    return request.app.state.pipeline


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings
