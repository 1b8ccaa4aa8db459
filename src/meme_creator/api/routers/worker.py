"""Render trigger: the worker entry point invoked by push-style task queues."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Form

from ... import pipeline
from ...pipeline import PipelineDeps
from ...tasks import RenderJob
from ..dependencies import get_pipeline

router = APIRouter()


@router.post("")
def run_worker(
    meme_id: str = Form(...), deps: PipelineDeps = Depends(get_pipeline)
) -> Dict[str, Any]:
    """
    Render one meme synchronously.

    Responds 200 once the image is published and the meme is ``done``,
    404 when the meme or its template is missing (terminal, do not retry)
    and 500 on other failures so the queue redelivers.
    """
    pipeline.run_render_job(deps, RenderJob(meme_id=meme_id))
    return {"meme_id": meme_id, "status": "done"}
