"""Shared fixtures: a throwaway aiohttp upstream and a small site on disk."""

import gzip
import socket

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

GZIPPED_BODY = gzip.compress(b"compressed hello", mtime=0)


async def _echo(request: web.Request) -> web.Response:
    """Report back exactly what the upstream received."""
    body = await request.read()
    return web.json_response(
        {
            "method": request.method,
            "path": request.path_qs,
            "headers": {name.lower(): request.headers.getall(name) for name in request.headers.keys()},
            "body": body.decode("utf-8"),
        }
    )


async def _gzipped(request: web.Request) -> web.Response:
    return web.Response(
        body=GZIPPED_BODY,
        headers={"Content-Encoding": "gzip", "Content-Type": "text/plain"},
    )


async def _cookies(request: web.Request) -> web.Response:
    response = web.Response(text="cookies", status=201)
    response.headers.add("Set-Cookie", "a=1")
    response.headers.add("Set-Cookie", "b=2")
    return response


async def _missing(request: web.Request) -> web.Response:
    return web.Response(text="nope", status=404)


@pytest_asyncio.fixture
async def upstream():
    """Live HTTP upstream on 127.0.0.1; yields its base URL."""
    app = web.Application()
    app.router.add_route("*", "/gzip", _gzipped)
    app.router.add_route("*", "/cookies", _cookies)
    app.router.add_route("*", "/missing", _missing)
    app.router.add_route("*", "/{tail:.*}", _echo)

    server = TestServer(app, host="127.0.0.1")
    await server.start_server()
    try:
        yield f"http://127.0.0.1:{server.port}"
    finally:
        await server.close()


@pytest.fixture
def refused_url() -> str:
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"


@pytest.fixture
def site(tmp_path):
    """Small static site: an index, a nested asset and a directory."""
    root = tmp_path / "site"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<h1>hello</h1>", encoding="utf-8")
    (root / "assets" / "app.json").write_text('{"ok": true}', encoding="utf-8")
    (tmp_path / "secret.txt").write_text("outside", encoding="utf-8")
    return root
