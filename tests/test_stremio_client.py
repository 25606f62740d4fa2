"""Tests for the Stremio API client against a local fake server."""

import json

import pytest
from aiohttp import test_utils

from addon_sync.api_clients import (
    StremioAPIClient,
    APIConnectionError,
    AddonCollectionSetRequest,
    DEFAULT_API_BASE
)
from addon_sync.core import SyncController

from conftest import make_upload


@pytest.fixture
async def stremio_client(fake_stremio):
    client = StremioAPIClient(base_url=fake_stremio.base_url)
    yield client
    await client.close()


class TestAddonCollectionSetRequest:
    """Wire format of the request body."""

    def test_payload_keys_and_order(self):
        request = AddonCollectionSetRequest(auth_key="tok123", addons=[{"id": "a"}])

        payload = request.to_payload()

        assert payload == {"type": "AddonCollectionSet", "authKey": "tok123", "addons": [{"id": "a"}]}
        assert list(payload) == ["type", "authKey", "addons"]

    def test_accepts_alias(self):
        request = AddonCollectionSetRequest(authKey="tok123")

        assert request.auth_key == "tok123"
        assert request.addons == []


@pytest.mark.integration
class TestStremioAPIClient:
    """Requests against the fake API."""

    async def test_posts_collection(self, fake_stremio, stremio_client):
        addons = [{"id": "a", "manifest": {"name": "A"}}, {"id": "b"}]

        reply = await stremio_client.addon_collection_set("tok123", addons)

        assert reply == {"result": {"success": True}}
        assert len(fake_stremio.requests) == 1
        sent = fake_stremio.requests[0]
        assert sent["content_type"] == "application/json"
        assert sent["body"] == {"type": "AddonCollectionSet", "authKey": "tok123", "addons": addons}

    async def test_rejection_body_returned_as_is(self, fake_stremio, stremio_client):
        fake_stremio.reply = {"result": {"success": False, "error": "bad key"}}
        fake_stremio.status = 400

        reply = await stremio_client.addon_collection_set("wrong", [{"id": "a"}])

        assert reply == {"result": {"success": False, "error": "bad key"}}

    async def test_non_json_reply(self, fake_stremio, stremio_client):
        fake_stremio.raw_reply = b"<html>Bad Gateway</html>"
        fake_stremio.status = 502

        with pytest.raises(APIConnectionError) as exc_info:
            await stremio_client.addon_collection_set("tok123", [{"id": "a"}])

        assert "HTTP 502" in str(exc_info.value)

    async def test_empty_reply(self, fake_stremio, stremio_client):
        fake_stremio.raw_reply = b""

        with pytest.raises(APIConnectionError):
            await stremio_client.addon_collection_set("tok123", [{"id": "a"}])

    async def test_deeply_nested_reply(self, fake_stremio, stremio_client):
        fake_stremio.raw_reply = b"[" * 200000

        with pytest.raises(APIConnectionError):
            await stremio_client.addon_collection_set("tok123", [{"id": "a"}])

    async def test_connection_refused(self):
        port = test_utils.unused_port()

        async with StremioAPIClient(base_url=f"http://127.0.0.1:{port}/api/") as client:
            with pytest.raises(APIConnectionError) as exc_info:
                await client.addon_collection_set("tok123", [{"id": "a"}])

        assert "Network error" in str(exc_info.value)

    async def test_base_url_without_trailing_slash(self, fake_stremio):
        base = fake_stremio.base_url.rstrip("/")

        async with StremioAPIClient(base_url=base) as client:
            await client.addon_collection_set("tok123", [{"id": "a"}])

        assert len(fake_stremio.requests) == 1

    async def test_client_info(self, stremio_client, fake_stremio):
        info = stremio_client.get_client_info()

        assert info["client_type"] == "StremioAPIClient"
        assert info["base_url"] == fake_stremio.base_url
        assert info["session_open"] is False

        await stremio_client.addon_collection_set("tok123", [{"id": "a"}])
        assert stremio_client.get_client_info()["session_open"] is True

        await stremio_client.close()
        assert stremio_client.get_client_info()["session_open"] is False

    def test_default_base(self):
        client = StremioAPIClient()

        assert client.base_url == DEFAULT_API_BASE
        assert client.url_for("addonCollectionSet") == "https://api.strem.io/api/addonCollectionSet"


@pytest.mark.integration
class TestUploadThenSync:
    """End to end through the controller with the real client."""

    async def test_scenario(self, fake_stremio, stremio_client):
        controller = SyncController(stremio_client)

        loaded = controller.load_file(make_upload('{"addons":{"addons":[{"id":"a"}, {"id":"b"}]}}'))
        assert loaded.text == "JSON file loaded successfully (2 items)"

        controller.set_credential("tok123")
        message = await controller.sync_addons()

        assert message.text == "Sync complete!"
        assert controller.state.is_loading is False

        sent = fake_stremio.requests[0]
        assert json.loads(sent["raw"]) == {
            "type": "AddonCollectionSet",
            "authKey": "tok123",
            "addons": [{"id": "a"}, {"id": "b"}]
        }
        assert list(sent["body"]) == ["type", "authKey", "addons"]

    async def test_remote_rejection(self, fake_stremio, stremio_client):
        fake_stremio.reply = {"result": {"success": False, "error": "bad key"}}
        controller = SyncController(stremio_client)
        controller.load_file(make_upload({"addons": {"addons": [{"id": "a"}]}}))
        controller.set_credential("nope")

        message = await controller.sync_addons()

        assert message.is_error
        assert "bad key" in message.text

    async def test_garbage_reply_is_transport_error(self, fake_stremio, stremio_client):
        fake_stremio.raw_reply = b"not json"
        controller = SyncController(stremio_client)
        controller.load_file(make_upload({"addons": {"addons": [{"id": "a"}]}}))
        controller.set_credential("tok123")

        message = await controller.sync_addons()

        assert message.is_error
        assert message.text.startswith("Error syncing addons: ")
        assert controller.state.is_loading is False

    async def test_deeply_nested_reply_is_transport_error(self, fake_stremio, stremio_client):
        fake_stremio.raw_reply = b"[" * 200000
        controller = SyncController(stremio_client)
        controller.load_file(make_upload({"addons": {"addons": [{"id": "a"}]}}))
        controller.set_credential("tok123")

        message = await controller.sync_addons()

        assert message.is_error
        assert message.text.startswith("Error syncing addons: ")
        assert controller.state.is_loading is False
