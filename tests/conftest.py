import asyncio
import contextlib

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

SLOW_S = 0.5
TRICKLE_PAUSE_S = 0.3


async def _fast(request):
    return web.Response(text="ok")


async def _slow(request):
    await asyncio.sleep(SLOW_S)
    return web.Response(text="slow")


async def _redirect(request):
    raise web.HTTPFound("/slow")


async def _trickle(request):
    resp = web.StreamResponse()
    await resp.prepare(request)
    await resp.write(b"a" * 1024)
    await asyncio.sleep(TRICKLE_PAUSE_S)
    await resp.write(b"b" * 1024)
    await resp.write_eof()
    return resp


def make_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/fast", _fast)
    app.router.add_get("/slow", _slow)
    app.router.add_get("/redirect", _redirect)
    app.router.add_get("/trickle", _trickle)
    return app


@contextlib.asynccontextmanager
async def running_server():
    server = TestServer(make_app())
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


@pytest.fixture
def serve():
    return running_server


@pytest.fixture
def refused_url():
    return f"http://127.0.0.1:{unused_port()}/"
