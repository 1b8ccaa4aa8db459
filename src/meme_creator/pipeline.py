"""Meme job pipeline.

Submission persists a meme as ``created`` and then enqueues one render job.
The worker loads the records, renders, publishes the PNG at ``<id>.png`` and
only then flips the status to ``done``. Every step of the worker keys off the
meme id and overwrites rather than appends, so redelivering a job converges
on the same published image and record.
"""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional

from .cache.base import BaseCache
from .exceptions import CacheError, QueueError, TemplateTooLargeError, ValidationError
from .models.database import MemeRecord, MemeStatus, TemplateRecord
from .models.database.records import utcnow
from .models.schemas import CreateMemeCommand
from .rendering import CaptionLayout, Face, compose, decode_image, encode_png
from .repositories import RecordStore
from .storage import BlobStore, output_key, public_url
from .tasks import RenderJob, TaskDispatcher
from .utils.logging import get_logger

logger = get_logger(__name__)

MAX_TEMPLATE_SIZE = 5 * 1024 * 1024
MEME_LIST_LIMIT = 100


@dataclass
class PipelineDeps:
    """Collaborators shared by every pipeline call.

    Built once at startup. Holds no per-request state, so one instance serves
    concurrent requests and workers.
    """

    records: RecordStore
    blobs: BlobStore
    bucket: str
    cache: BaseCache
    face: Face
    public_url_prefix: str
    dispatcher: Optional[TaskDispatcher] = None
    layout: CaptionLayout = field(default_factory=CaptionLayout)
    max_template_size: int = MAX_TEMPLATE_SIZE
    meme_list_limit: int = MEME_LIST_LIMIT


def meme_public_url(prefix: str, meme_id: str) -> str:
    """Where the rendered image of ``meme_id`` is published."""
    return public_url(prefix, output_key(meme_id))


def render_template_bytes(
    face: Face, data: bytes, top: str, bottom: str, layout: CaptionLayout
) -> bytes:
    """Render captions onto encoded template bytes and return PNG bytes.

    Raises:
        DecodeError: If ``data`` is not PNG or JPEG
        GlyphDrawError: If drawing fails
    """
    return encode_png(compose(face, decode_image(data), top, bottom, layout))


def create_template(deps: PipelineDeps, filename: str, data: bytes) -> TemplateRecord:
    """
    Store an uploaded template image and its record.

    Args:
        deps: Pipeline collaborators
        filename: Client-supplied file name, used as the blob key
        data: Image bytes

    Returns:
        TemplateRecord: The persisted template

    Raises:
        ValidationError: If no usable file name was given
        TemplateTooLargeError: If ``data`` exceeds the size limit
        StoreError: If the blob or record write fails
        CacheError: If the cache write fails
    """
    if len(data) > deps.max_template_size:
        raise TemplateTooLargeError(len(data), deps.max_template_size)

    key = PurePosixPath(filename or "").name
    if not key:
        raise ValidationError("missing template file in request")
    if key in (".", ".."):
        raise ValidationError("invalid template file name")

    deps.blobs.write_object(deps.bucket, key, data)
    deps.blobs.set_public_readable(deps.bucket, key)

    template = TemplateRecord(created=utcnow(), filename=key)
    template_id = deps.records.put(template)
    deps.cache.add(template_id, key)

    logger.info("template_created", template_id=template_id, filename=key, size=len(data))
    return template


def list_templates(deps: PipelineDeps) -> List[TemplateRecord]:
    """All templates, newest first."""
    return deps.records.query(TemplateRecord, order_by="-created")


def get_template(deps: PipelineDeps, template_id: str) -> TemplateRecord:
    """Fetch one template.

    Raises:
        RecordNotFoundError: If it does not exist
    """
    return deps.records.get(TemplateRecord, template_id)


def submit_meme(deps: PipelineDeps, command: CreateMemeCommand) -> MemeRecord:
    """
    Persist a new meme as ``created`` and enqueue its render job.

    The record is written strictly before the job is enqueued. If enqueueing
    fails the record stays ``created`` with no job pending.

    Args:
        deps: Pipeline collaborators
        command: Template reference and captions

    Returns:
        MemeRecord: The persisted meme

    Raises:
        StoreError: If the record write fails
        QueueError: If the job could not be enqueued
    """
    try:
        if not deps.cache.exists(command.template_id):
            logger.warning("template_not_cached", template_id=command.template_id)
    except CacheError as e:
        logger.warning("template_cache_unavailable", error=str(e))

    meme = MemeRecord(
        created=utcnow(),
        status=MemeStatus.CREATED.value,
        template_id=command.template_id,
        top=command.top,
        bottom=command.bottom,
    )
    meme_id = deps.records.put(meme)
    logger.info("meme_created", meme_id=meme_id, template_id=command.template_id)

    if deps.dispatcher is None:
        raise QueueError("no task dispatcher configured", details={"meme_id": meme_id})
    try:
        deps.dispatcher.enqueue(RenderJob(meme_id=meme_id))
    except QueueError:
        logger.error("meme_enqueue_failed", meme_id=meme_id)
        raise

    return meme


def list_memes(deps: PipelineDeps, limit: Optional[int] = None) -> List[MemeRecord]:
    """Most recent memes, newest first."""
    return deps.records.query(
        MemeRecord, order_by="-created", limit=limit or deps.meme_list_limit
    )


def get_meme(deps: PipelineDeps, meme_id: str) -> MemeRecord:
    """Fetch one meme.

    Raises:
        RecordNotFoundError: If it does not exist
    """
    return deps.records.get(MemeRecord, meme_id)


def run_render_job(deps: PipelineDeps, job: RenderJob) -> None:
    """
    Worker entry point: render and publish one meme, then mark it done.

    Any error propagates so the dispatcher can apply its retry policy.
    ``NotFoundError``, ``DecodeError``, ``FontLoadError`` and ``GlyphDrawError``
    are terminal; store and queue errors are transient.

    Args:
        deps: Pipeline collaborators
        job: The job to run
    """
    log = logger.bind(meme_id=job.meme_id)
    try:
        meme = deps.records.get(MemeRecord, job.meme_id)
        template = deps.records.get(TemplateRecord, meme.template_id)
        source = deps.blobs.read_object(deps.bucket, template.filename)

        rendered = render_template_bytes(deps.face, source, meme.top, meme.bottom, deps.layout)

        key = output_key(meme.id)
        deps.blobs.write_object(deps.bucket, key, rendered)
        deps.blobs.set_public_readable(deps.bucket, key)

        meme.status = MemeStatus.DONE.value
        deps.records.put(meme)
    except Exception as e:
        log.error("render_failed", error=str(e), error_type=type(e).__name__)
        raise

    log.info("meme_rendered", template_id=template.id, status=meme.status, key=key)
