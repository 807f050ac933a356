# Shared fixtures: a pinned clock, item factories and an isolated app client.
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from medialib.app import app, get_library, get_media_root
from medialib.search.types import AudioTrack, Video
from medialib.storage import MediaLibrary

NOW = datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc)

_ids = itertools.count(1)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_track():
    def _make(title, artist="Various", days_old=60, **kw):
        return AudioTrack(
            id=kw.pop("id", f"t{next(_ids)}"),
            title=title,
            artist=artist,
            created_at=NOW - timedelta(days=days_old),
            **kw,
        )
    return _make


@pytest.fixture
def make_video():
    def _make(title, artist="Various", days_old=60, **kw):
        return Video(
            id=kw.pop("id", f"v{next(_ids)}"),
            title=title,
            artist=artist,
            created_at=NOW - timedelta(days=days_old),
            **kw,
        )
    return _make


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db" / "medialib.db")


@pytest.fixture
def library(db_path):
    lib = MediaLibrary(db_path=db_path)
    yield lib
    lib.close()


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "public"
    root.mkdir()
    return str(root)


@pytest.fixture
def client(db_path, media_root):
    def _library():
        lib = MediaLibrary(db_path=db_path)
        try:
            yield lib
        finally:
            lib.close()

    app.dependency_overrides[get_library] = _library
    app.dependency_overrides[get_media_root] = lambda: media_root
    yield TestClient(app)
    app.dependency_overrides.clear()
