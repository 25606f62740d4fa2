"""Shared fixtures for addon sync tests."""

import json

import pytest
from aiohttp import web, test_utils

from addon_sync.config import reset_settings
from addon_sync.core import UploadedFile


class FakeStremio:
    """Stand-in for the Stremio API that records what it receives."""

    def __init__(self):
        self.requests = []
        self.reply = {"result": {"success": True}}
        self.raw_reply = None
        self.status = 200
        self.server = None

    async def handle_addon_collection_set(self, request: web.Request) -> web.Response:
        raw = await request.read()
        self.requests.append({
            "raw": raw,
            "body": json.loads(raw),
            "content_type": request.content_type,
        })
        if self.raw_reply is not None:
            return web.Response(body=self.raw_reply, status=self.status)
        return web.json_response(self.reply, status=self.status)

    @property
    def base_url(self) -> str:
        return str(self.server.make_url("/api/"))


@pytest.fixture(autouse=True)
def fresh_settings():
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def fake_stremio():
    """Run a fake Stremio API on a local port."""
    fake = FakeStremio()
    app = web.Application()
    app.router.add_post("/api/addonCollectionSet", fake.handle_addon_collection_set)

    fake.server = test_utils.TestServer(app)
    await fake.server.start_server()

    yield fake

    await fake.server.close()


def make_upload(document, name="addons.json", content_type="application/json") -> UploadedFile:
    """Build an UploadedFile from a document (serialized) or raw text."""
    text = document if isinstance(document, str) else json.dumps(document)
    return UploadedFile(name=name, content_type=content_type, content=text.encode("utf-8"))


SAMPLE_ADDONS = [
    {
        "transportUrl": "https://v3-cinemeta.strem.io/manifest.json",
        "manifest": {"id": "com.linvo.cinemeta", "name": "Cinemeta", "version": "3.0.13"},
        "flags": {"official": True, "protected": True}
    },
    {
        "transportUrl": "https://opensubtitles-v3.strem.io/manifest.json",
        "manifest": {"id": "org.stremio.opensubtitlesv3", "name": "OpenSubtitles v3"},
        "flags": {}
    }
]


@pytest.fixture
def sample_document():
    return {"addons": {"addons": SAMPLE_ADDONS, "lastModified": "2024-05-01T10:00:00.000Z"}}
