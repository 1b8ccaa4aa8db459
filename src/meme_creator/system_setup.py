"""System setup: build the pipeline collaborators from settings."""

from typing import Optional

import redis

from .cache import BaseCache, MemoryCache, RedisCache
from .config.config import Settings, settings as default_settings
from .database.connection import create_db_engine, create_session_factory, init_db
from .pipeline import PipelineDeps, run_render_job
from .rendering import CaptionLayout, default_font_bytes, load_face
from .repositories import RecordStore
from .storage import BlobStore, LocalBlobStore, S3BlobStore
from .tasks import InProcessDispatcher, RedisDispatcher, TaskDispatcher
from .utils.logging import get_logger

logger = get_logger(__name__)


def build_layout(settings: Settings) -> CaptionLayout:
    """Caption placement policy from settings."""
    return CaptionLayout(
        top_margin=settings.caption_top_margin,
        bottom_band=settings.caption_bottom_band,
        font_sizes=tuple(settings.caption_font_sizes),
    )


def build_blob_store(settings: Settings) -> BlobStore:
    """Blob store selected by ``settings.blob_backend``."""
    if settings.blob_backend == "s3":
        return S3BlobStore(region_name=settings.aws_region, endpoint_url=settings.s3_endpoint_url)
    return LocalBlobStore(settings.blob_root)


def build_cache(settings: Settings, client: Optional[redis.Redis] = None) -> BaseCache:
    """Redis cache when configured, otherwise an in-memory one."""
    if client is not None:
        return RedisCache(client)
    if settings.redis_url:
        return RedisCache.from_url(settings.redis_url)
    return MemoryCache()


def build_dispatcher(
    settings: Settings, deps: PipelineDeps, client: Optional[redis.Redis] = None
) -> TaskDispatcher:
    """Task dispatcher selected by ``settings.dispatcher_backend``."""
    if settings.dispatcher_backend == "redis":
        if client is None:
            if not settings.redis_url:
                raise ValueError("the redis dispatcher needs REDIS_URL")
            client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        return RedisDispatcher(
            client,
            queue_name=settings.task_queue_name,
            max_attempts=settings.task_max_attempts,
        )
    return InProcessDispatcher(
        lambda job: run_render_job(deps, job),
        max_workers=settings.task_workers,
        max_attempts=settings.task_max_attempts,
        backoff=settings.task_backoff_seconds,
        max_results=settings.task_result_history,
    )


def build_pipeline(settings: Settings = default_settings, create_tables: bool = True) -> PipelineDeps:
    """
    Construct every collaborator the pipeline needs.

    The font face is loaded eagerly so a corrupt font fails startup instead
    of every render.

    Args:
        settings: Application settings
        create_tables: Create missing database tables

    Returns:
        PipelineDeps: Wired collaborators, dispatcher included

    Raises:
        FontLoadError: If the configured font cannot be loaded
    """
    engine = create_db_engine(settings.database_url)
    if create_tables:
        init_db(engine)

    client = None
    if settings.redis_url:
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True)

    deps = PipelineDeps(
        records=RecordStore(create_session_factory(engine)),
        blobs=build_blob_store(settings),
        bucket=settings.blob_bucket,
        cache=build_cache(settings, client),
        face=load_face(default_font_bytes(settings.font_path)),
        public_url_prefix=settings.public_url_prefix,
        layout=build_layout(settings),
        max_template_size=settings.max_template_size,
        meme_list_limit=settings.meme_list_limit,
    )
    deps.dispatcher = build_dispatcher(settings, deps, client)

    logger.info(
        "pipeline_ready",
        blob_backend=settings.blob_backend,
        dispatcher=settings.dispatcher_backend,
        cache="redis" if client is not None else "memory",
    )
    return deps


def shutdown_pipeline(deps: PipelineDeps) -> None:
    """Release resources held by the pipeline."""
    if isinstance(deps.dispatcher, InProcessDispatcher):
        deps.dispatcher.shutdown()
    if isinstance(deps.cache, RedisCache):
        deps.cache.close()
