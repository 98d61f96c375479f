"""Tests for the HTTP fetcher against a live local upstream."""

import asyncio
import base64
import json

import pytest

from edge_origin.origin import Origin
from edge_origin.origin.fetchers import HttpFetcher
from edge_origin.origin.resolver import http_result_to_response
from edge_origin.shared.models import HeaderEntry, HttpResult, RequestBody, RequestDescriptor
from tests.conftest import GZIPPED_BODY


class TestBuildRequest:
    def test_url_uses_origin_host_and_request_path(self):
        fetcher = HttpFetcher("http://example.com:8080/ignored", "http")

        assert str(fetcher.build_url("/a/b?x=1")) == "http://example.com:8080/a/b?x=1"

    @pytest.mark.parametrize(
        "base_url, scheme, expected",
        [
            ("http://example.com", "http", 80),
            ("https://example.com", "https", 443),
        ],
    )
    def test_default_ports(self, base_url, scheme, expected):
        assert HttpFetcher(base_url, scheme).build_url("/").port == expected

    def test_headers_forward_first_value_and_close_the_connection(self):
        request = RequestDescriptor(
            headers={
                "x-a": [HeaderEntry(key="X-A", value="1"), HeaderEntry(key="X-A", value="2")],
                "connection": [HeaderEntry(key="Connection", value="keep-alive")],
            }
        )

        assert HttpFetcher.build_headers(request) == {"X-A": "1", "Connection": "Close"}

    def test_framing_headers_are_dropped_without_a_body(self):
        request = RequestDescriptor(
            method="PUT",
            headers={
                "content-length": [HeaderEntry(key="Content-Length", value="5")],
                "transfer-encoding": [HeaderEntry(key="Transfer-Encoding", value="chunked")],
            },
        )

        assert HttpFetcher.build_headers(request) == {"Connection": "Close"}

    def test_content_length_travels_with_a_body(self):
        request = RequestDescriptor(
            method="POST",
            headers={"content-length": [HeaderEntry(key="Content-Length", value="5")]},
            body=RequestBody(data="hello"),
        )

        assert HttpFetcher.build_headers(request)["Content-Length"] == "5"


class TestFetch:
    @pytest.mark.asyncio
    async def test_echo_round_trip(self, upstream):
        request = RequestDescriptor(method="GET", uri="/hello?name=edge")

        result = await Origin(upstream).resolve(request)

        assert isinstance(result, HttpResult)
        assert result.status == 200
        assert result.headers["content-type"].startswith("application/json")
        echoed = json.loads(result.body)
        assert echoed["method"] == "GET"
        assert echoed["path"] == "/hello?name=edge"

    @pytest.mark.asyncio
    async def test_only_the_first_header_value_is_forwarded(self, upstream):
        request = RequestDescriptor(
            uri="/",
            headers={"x-a": [HeaderEntry(key="X-A", value="1"), HeaderEntry(value="2")]},
        )

        result = await Origin(upstream).resolve(request)

        assert json.loads(result.body)["headers"]["x-a"] == ["1"]

    @pytest.mark.asyncio
    async def test_connection_is_closed(self, upstream):
        result = await Origin(upstream).resolve(RequestDescriptor(uri="/"))

        assert json.loads(result.body)["headers"]["connection"][0].lower() == "close"

    @pytest.mark.asyncio
    async def test_request_body_is_forwarded(self, upstream):
        request = RequestDescriptor(method="POST", uri="/submit", body=RequestBody(data="a=1&b=2"))

        result = await Origin(upstream).resolve(request)

        echoed = json.loads(result.body)
        assert echoed["method"] == "POST"
        assert echoed["body"] == "a=1&b=2"

    @pytest.mark.asyncio
    async def test_bytes_body_is_forwarded(self, upstream):
        request = RequestDescriptor(method="PUT", uri="/", body=RequestBody(data=b"raw"))

        result = await Origin(upstream).resolve(request)

        assert json.loads(result.body)["body"] == "raw"

    @pytest.mark.asyncio
    async def test_put_without_buffered_body_does_not_stall(self, upstream):
        request = RequestDescriptor(
            method="PUT",
            uri="/upload",
            headers={"content-length": [HeaderEntry(key="Content-Length", value="5")]},
        )

        result = await asyncio.wait_for(Origin(upstream).resolve(request), timeout=5)

        echoed = json.loads(result.body)
        assert echoed["method"] == "PUT"
        assert echoed["body"] == ""


class TestRetrieve:
    @pytest.mark.asyncio
    async def test_text_response(self, upstream):
        response = await Origin(upstream).retrieve(RequestDescriptor(uri="/text"))

        assert response.status == "200"
        assert response.status_description is None
        assert response.body_encoding == "text"
        assert json.loads(response.body)["path"] == "/text"
        assert response.headers["content-type"][0].value.startswith("application/json")

    @pytest.mark.asyncio
    async def test_gzip_response_is_base64(self, upstream):
        response = await Origin(upstream).retrieve(RequestDescriptor(uri="/gzip"))

        assert response.body_encoding == "base64"
        assert response.body == base64.b64encode(GZIPPED_BODY).decode("ascii")
        assert response.headers["content-encoding"][0].value == "gzip"

    @pytest.mark.asyncio
    async def test_repeated_response_headers_stay_separate(self, upstream):
        response = await Origin(upstream).retrieve(RequestDescriptor(uri="/cookies"))

        assert response.status == "201"
        assert [entry.value for entry in response.headers["set-cookie"]] == ["a=1", "b=2"]

    @pytest.mark.asyncio
    async def test_upstream_error_status_passes_through(self, upstream):
        response = await Origin(upstream).retrieve(RequestDescriptor(uri="/missing"))

        assert response.status == "404"
        assert response.body == "nope"

    def test_nonstandard_status_passes_through(self):
        response = http_result_to_response(HttpResult(status=799, body=b"odd"))

        assert response.status == "799"
        assert response.body == "odd"

    @pytest.mark.asyncio
    async def test_refused_connection_is_500(self, refused_url):
        response = await Origin(refused_url).retrieve(RequestDescriptor(uri="/"))

        assert response.status == "500"
        assert response.status_description == "Internal Server Error"
        body = json.loads(response.body)
        assert body["code"] == 500
        assert body["message"]
