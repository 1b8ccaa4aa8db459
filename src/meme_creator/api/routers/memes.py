"""Router for meme endpoints."""

import json

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError

from ... import pipeline
from ...models.database import MemeRecord
from ...models.schemas import CreateMemeCommand, MemeEnvelope, MemeListResponse, MemeResponse
from ...pipeline import PipelineDeps
from ..dependencies import get_pipeline
from ..middleware.error_handler import error_body

router = APIRouter()


def to_response(deps: PipelineDeps, meme: MemeRecord) -> MemeResponse:
    """API view of a meme record, with its public image URL."""
    return MemeResponse(
        id=meme.id,
        created=meme.created,
        status=meme.status,
        template_id=meme.template_id,
        top=meme.top,
        bottom=meme.bottom,
        public_url=pipeline.meme_public_url(deps.public_url_prefix, meme.id),
    )


@router.get("", response_model=MemeListResponse)
def list_memes(deps: PipelineDeps = Depends(get_pipeline)) -> MemeListResponse:
    """List the most recent memes. Never triggers rendering."""
    return MemeListResponse(memes=[to_response(deps, m) for m in pipeline.list_memes(deps)])


@router.post("", response_model=MemeEnvelope, status_code=status.HTTP_201_CREATED)
async def create_meme(
    request: Request,
    response: Response,
    deps: PipelineDeps = Depends(get_pipeline),
):
    """
    Submit a meme for asynchronous rendering.

    The body must be JSON: ``{"template_id": ..., "top": ..., "bottom": ...}``.
    The meme is returned with status ``created``; poll it to see ``done``.
    """
    content_type = request.headers.get("content-type")
    if not content_type:
        return JSONResponse(status_code=400, content=error_body("bad media type"))
    if content_type.split(";")[0].strip().lower() != "application/json":
        return JSONResponse(status_code=400, content=error_body("unsupported content type"))

    try:
        payload = json.loads(await request.body())
    except ValueError:
        return JSONResponse(status_code=400, content=error_body("parsing request failed"))

    try:
        command = CreateMemeCommand.model_validate(payload)
    except SchemaValidationError as e:
        raise RequestValidationError(e.errors()) from e

    meme = await run_in_threadpool(pipeline.submit_meme, deps, command)
    response.headers["Location"] = request.app.url_path_for("get_meme", meme_id=meme.id)
    return MemeEnvelope(meme=to_response(deps, meme))


@router.get("/{meme_id}", response_model=MemeEnvelope)
def get_meme(meme_id: str, deps: PipelineDeps = Depends(get_pipeline)) -> MemeEnvelope:
    """Get one meme by id."""
    return MemeEnvelope(meme=to_response(deps, pipeline.get_meme(deps, meme_id)))
