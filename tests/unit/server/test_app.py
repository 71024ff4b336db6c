"""Unit tests for the aiohttp listing endpoint."""

from __future__ import annotations

import base64
from unittest.mock import MagicMock

import pytest
from aiohttp.test_utils import TestClient, TestServer

from quotelist.core import PARTITIONS, FailurePolicy, ProviderError
from quotelist.runtime import decode_cursor, encode_cursor
from quotelist.server import create_app, resolve_base_url
from quotelist.server.app import PROVIDER_FACTORY_KEY


def _client(settings, provider) -> TestClient:
    app = create_app(settings, provider_factory=lambda s, http: provider)
    return TestClient(TestServer(app))


class TestListEndpoint:
    @pytest.mark.asyncio
    async def test_returns_merged_page(self, settings, fake_provider, make_record):
        provider = fake_provider(
            pages={
                PARTITIONS[0]: ([make_record("quotes/q-1", "2024-01-01T00:00:00Z")], "n0"),
                PARTITIONS[3]: ([make_record("quotes/q-2", "2024-02-01T00:00:00Z")], ""),
            }
        )
        configured = settings.model_copy(update={"site_base_url": "https://example.com/app"})

        async with _client(configured, provider) as client:
            resp = await client.get("/list", params={"per": "10"})
            body = await resp.json()

        assert resp.status == 200
        assert resp.headers["Cache-Control"] == "no-store"
        assert [item["id"] for item in body["items"]] == ["q-2", "q-1"]
        assert body["items"][0] == {
            "id": "q-2",
            "public_id": "quotes/q-2",
            "created_at": "2024-02-01T00:00:00Z",
            "bytes": 1024,
            "format": "pdf",
            "filename": "q-2",
            "resource_type": "image",
            "type": "upload",
            "link": "https://example.com/app/?cid=q-2",
        }
        assert decode_cursor(body["next"]) == {PARTITIONS[0]: "n0"}
        assert {call[2] for call in provider.calls} == {10}

    @pytest.mark.asyncio
    async def test_root_path_and_continuation(self, settings, fake_provider):
        provider = fake_provider()
        token = encode_cursor({PARTITIONS[7]: "resume"})

        async with _client(settings, provider) as client:
            resp = await client.get("/", params={"next": token})
            body = await resp.json()

        assert resp.status == 200
        assert body == {"items": [], "next": ""}
        assert {call[0]: call[1] for call in provider.calls}[PARTITIONS[7]] == "resume"
        assert {call[2] for call in provider.calls} == {50}

    @pytest.mark.asyncio
    async def test_forged_token_restarts_listing(self, settings, fake_provider):
        provider = fake_provider()
        token = base64.urlsafe_b64encode(b"[" * 5000).decode()

        async with _client(settings, provider) as client:
            resp = await client.get("/list", params={"next": token})
            body = await resp.json()

        assert resp.status == 200
        assert body == {"items": [], "next": ""}
        assert [call[1] for call in provider.calls] == [""] * 9

    @pytest.mark.asyncio
    async def test_noprefix_disables_prefix_filter(self, settings, fake_provider):
        provider = fake_provider()

        async with _client(settings, provider) as client:
            await client.get("/list")
            await client.get("/list", params={"noprefix": "1"})

        assert provider.calls[0][3].prefix == "q-"
        assert provider.calls[9][3].prefix is None

    @pytest.mark.asyncio
    async def test_links_use_forwarded_host(self, settings, fake_provider, make_record):
        provider = fake_provider(pages={PARTITIONS[0]: ([make_record("quotes/q-1", None)], "")})
        headers = {"X-Forwarded-Host": "quotes.example.com", "X-Forwarded-Proto": "https"}

        async with _client(settings, provider) as client:
            resp = await client.get("/list", headers=headers)
            body = await resp.json()

        assert body["items"][0]["link"] == "https://quotes.example.com/?cid=q-1"

    @pytest.mark.asyncio
    async def test_missing_config(self, settings, fake_provider):
        factory = MagicMock()
        app = create_app(settings.model_copy(update={"cloud_name": None}), provider_factory=factory)

        async with TestClient(TestServer(app)) as client:
            resp = await client.get("/list")
            body = await resp.json()

        assert resp.status == 500
        assert body == {"error": "Missing Cloudinary config"}
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_fail_fast_surfaces_partition(self, settings, fake_provider):
        provider = fake_provider(
            errors={PARTITIONS[0]: ProviderError("HTTP 503", status_code=503, detail="busy")}
        )
        strict = settings.model_copy(update={"failure_policy": FailurePolicy.FAIL_FAST})

        async with _client(strict, provider) as client:
            resp = await client.get("/list")
            body = await resp.json()

        assert resp.status == 502
        assert body["partition"] == "raw:upload"
        assert body["status"] == 503
        assert body["detail"] == "busy"
        assert "raw:upload" in body["error"]

    @pytest.mark.asyncio
    async def test_partial_failure_still_succeeds(self, settings, fake_provider, make_record):
        provider = fake_provider(
            pages={PARTITIONS[1]: ([make_record("quotes/q-1", None)], "n1")},
            errors={PARTITIONS[0]: ProviderError("HTTP 503", status_code=503)},
        )

        async with _client(settings, provider) as client:
            resp = await client.get("/list")
            body = await resp.json()

        assert resp.status == 200
        assert [item["id"] for item in body["items"]] == ["q-1"]
        assert decode_cursor(body["next"]) == {PARTITIONS[1]: "n1"}

    @pytest.mark.asyncio
    async def test_unexpected_error(self, settings):
        def broken_factory(s, http):
            raise RuntimeError("boom")

        app = create_app(settings, provider_factory=broken_factory)

        async with TestClient(TestServer(app)) as client:
            resp = await client.get("/list")
            body = await resp.json()

        assert resp.status == 500
        assert body == {"error": "boom"}


class TestResolveBaseUrl:
    @pytest.mark.parametrize(
        ("headers", "path", "expected"),
        [
            ({"Host": "example.com"}, "/", "https://example.com/"),
            ({"host": "example.com"}, "/app/", "https://example.com/app/"),
            ({"Host": "example.com"}, "/list", "https://example.com/"),
            (
                {"X-Forwarded-Host": "a.example.com, b.example.com", "Host": "internal:8080"},
                "/",
                "https://a.example.com/",
            ),
            ({"X-Forwarded-Proto": "http", "Host": "localhost:8080"}, "/", "http://localhost:8080/"),
            ({"X-Forwarded-Proto": "https,http", "Host": "example.com"}, "/", "https://example.com/"),
            ({}, "/", ""),
            ({"Host": " "}, "/", ""),
        ],
    )
    def test_resolve_base_url(self, headers, path, expected):
        assert resolve_base_url(headers, path) == expected


def test_create_app_registers_provider_factory(settings, fake_provider):
    def factory(s, http):
        return fake_provider()

    app = create_app(settings, provider_factory=factory)

    assert app[PROVIDER_FACTORY_KEY] is factory
