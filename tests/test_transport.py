from __future__ import annotations

import aiohttp
import pytest
from aiohttp import test_utils, web

from bikemonitor._transport import HttpTransport
from bikemonitor.exceptions import BikeMonitorParseError, BikeMonitorTransportError


def _app(received: list[dict]) -> web.Application:
    async def feed(_request: web.Request) -> web.Response:
        return web.json_response([{"stationCode": "ASD002", "availableBikes": 3}])

    async def broken(_request: web.Request) -> web.Response:
        return web.Response(text="<html>oops</html>")

    async def missing(_request: web.Request) -> web.Response:
        return web.Response(status=404, text="no such file")

    async def hook(request: web.Request) -> web.Response:
        received.append(await request.json())
        return web.Response(text="ok")

    async def bad_hook(_request: web.Request) -> web.Response:
        return web.Response(status=403, text="invalid_token")

    async def latin1(_request: web.Request) -> web.Response:
        return web.Response(body=b'[{"stationCode": "ASD002\xff"}]', content_type="application/json")

    async def latin1_hook(_request: web.Request) -> web.Response:
        return web.Response(status=500, body=b"server \xff error")

    app = web.Application()
    app.router.add_get("/locaties.json", feed)
    app.router.add_get("/broken.json", broken)
    app.router.add_get("/missing.json", missing)
    app.router.add_post("/services/T/B/SECRET", hook)
    app.router.add_get("/latin1.json", latin1)
    app.router.add_post("/services/T/B/REVOKED", bad_hook)
    app.router.add_post("/services/T/B/BROKEN", latin1_hook)
    return app


@pytest.mark.asyncio
async def test_get_json_and_post_json_round_trip() -> None:
    received: list[dict] = []
    async with test_utils.TestServer(_app(received)) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(session, timeout=5)

        data = await transport.get_json(str(server.make_url("/locaties.json")))
        assert data == [{"stationCode": "ASD002", "availableBikes": 3}]

        body = await transport.post_json(str(server.make_url("/services/T/B/SECRET")), {"text": "hi"})
        assert body == "ok"
        assert received == [{"text": "hi"}]


@pytest.mark.asyncio
async def test_errors_are_mapped() -> None:
    async with test_utils.TestServer(_app([])) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(session, timeout=5)

        with pytest.raises(BikeMonitorParseError, match="Failed to parse API response"):
            await transport.get_json(str(server.make_url("/broken.json")))

        with pytest.raises(BikeMonitorTransportError) as feed_exc:
            await transport.get_json(str(server.make_url("/missing.json")))
        assert feed_exc.value.status_code == 404

        with pytest.raises(BikeMonitorTransportError, match="status 403") as hook_exc:
            await transport.post_json(str(server.make_url("/services/T/B/REVOKED")), {"text": "hi"})
        assert hook_exc.value.status_code == 403
        assert "REVOKED" not in hook_exc.value.url


@pytest.mark.asyncio
async def test_connection_failure_is_transport_error() -> None:
    async with aiohttp.ClientSession() as session:
        transport = HttpTransport(session, timeout=5)
        with pytest.raises(BikeMonitorTransportError, match="API request failed"):
            await transport.get_json("http://127.0.0.1:1/locaties.json")
        with pytest.raises(BikeMonitorTransportError, match="Failed to send Slack notification"):
            await transport.post_json("http://127.0.0.1:1/hook", {"text": "x"})


@pytest.mark.asyncio
async def test_undecodable_bodies_are_mapped() -> None:
    async with test_utils.TestServer(_app([])) as server, aiohttp.ClientSession() as session:
        transport = HttpTransport(session, timeout=5)

        with pytest.raises(BikeMonitorParseError, match="Failed to parse API response"):
            await transport.get_json(str(server.make_url("/latin1.json")))

        with pytest.raises(BikeMonitorTransportError, match="status 500") as hook_exc:
            await transport.post_json(str(server.make_url("/services/T/B/BROKEN")), {"text": "hi"})
        assert hook_exc.value.status_code == 500
