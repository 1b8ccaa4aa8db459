"""Router for template endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from ... import pipeline
from ...exceptions import TemplateTooLargeError, ValidationError
from ...models.schemas import TemplateEnvelope, TemplateListResponse, TemplateResponse
from ...pipeline import PipelineDeps
from ..dependencies import get_pipeline

router = APIRouter()


@router.get("", response_model=TemplateListResponse)
def list_templates(deps: PipelineDeps = Depends(get_pipeline)) -> TemplateListResponse:
    """List all templates, newest first."""
    templates = pipeline.list_templates(deps)
    return TemplateListResponse(
        templates=[TemplateResponse.model_validate(t) for t in templates]
    )


@router.post("", response_model=TemplateEnvelope, status_code=status.HTTP_201_CREATED)
async def upload_template(
    request: Request,
    response: Response,
    template: Optional[UploadFile] = File(None),
    deps: PipelineDeps = Depends(get_pipeline),
) -> TemplateEnvelope:
    """
    Upload a new template image.

    Args:
        request: Incoming request
        response: Outgoing response, used for the Location header
        template: Multipart file field ``template``
        deps: Pipeline collaborators

    Returns:
        The stored template

    Raises:
        ValidationError: If the file is missing
        TemplateTooLargeError: If the file exceeds the size limit
    """
    if template is None:
        raise ValidationError("missing template file in request")

    data = await template.read(deps.max_template_size + 1)
    if len(data) > deps.max_template_size:
        raise TemplateTooLargeError(len(data), deps.max_template_size)

    record = await run_in_threadpool(
        pipeline.create_template, deps, template.filename or "", data
    )
    response.headers["Location"] = request.app.url_path_for("get_template", template_id=record.id)
    return TemplateEnvelope(template=TemplateResponse.model_validate(record))


@router.get("/{template_id}", response_model=TemplateEnvelope)
def get_template(
    template_id: str, deps: PipelineDeps = Depends(get_pipeline)
) -> TemplateEnvelope:
    """Get one template by id."""
    record = pipeline.get_template(deps, template_id)
    return TemplateEnvelope(template=TemplateResponse.model_validate(record))
