"""Pytest configuration and fixtures."""

import os
from typing import Callable

import pytest

# Set test environment before the package reads its settings
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_JSON"] = "false"
os.environ.pop("REDIS_URL", None)

from meme_creator.cache import MemoryCache
from meme_creator.database.connection import create_db_engine, create_session_factory, init_db
from meme_creator.pipeline import PipelineDeps
from meme_creator.rendering import CaptionLayout, Face, default_font_bytes, load_face
from meme_creator.repositories import RecordStore
from meme_creator.storage import LocalBlobStore

from tests.utils.constants import BUCKET, PUBLIC_PREFIX
from tests.utils.images import encode_image
from tests.utils.mocks import RecordingDispatcher


@pytest.fixture(scope="session")
def font_bytes() -> bytes:
    """The embedded font program."""
    return default_font_bytes()


@pytest.fixture(scope="session")
def face(font_bytes: bytes) -> Face:
    """The embedded font, loaded once."""
    return load_face(font_bytes)


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    """Factory for encoded solid-color images."""
    return encode_image


@pytest.fixture
def record_store() -> RecordStore:
    """Record store on a private in-memory SQLite database."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return RecordStore(create_session_factory(engine))


@pytest.fixture
def blob_store(tmp_path) -> LocalBlobStore:
    """Blob store rooted in a temporary directory."""
    return LocalBlobStore(tmp_path / "blobs")


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    """Dispatcher that only records jobs."""
    return RecordingDispatcher()


@pytest.fixture
def pipeline_deps(
    record_store: RecordStore,
    blob_store: LocalBlobStore,
    dispatcher: RecordingDispatcher,
    face: Face,
) -> PipelineDeps:
    """Pipeline wired to local test doubles."""
    return PipelineDeps(
        records=record_store,
        blobs=blob_store,
        bucket=BUCKET,
        cache=MemoryCache(),
        face=face,
        public_url_prefix=PUBLIC_PREFIX,
        dispatcher=dispatcher,
        layout=CaptionLayout(),
    )
