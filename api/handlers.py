"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from core import router
from core.headers import CORS_HEADERS
from core.protocols import RequestLogger
from ui.page import INDEX_MEDIA_TYPE, load_index_page


def _raw_path(request: Request) -> str:
    """Request path as sent by the client, still percent-encoded."""
    raw = request.scope.get("raw_path")
    if raw:
        return raw.split(b"?", 1)[0].decode("latin-1")
    return request.url.path


async def handle_request(request: Request, logger: RequestLogger) -> Response:
    """Dispatch any request to exactly one responder."""
    path = _raw_path(request)
    decision = request.app.state.route_decider.decide(path, request.method)

    if decision.route == router.STATIC:
        return Response(content=load_index_page(), media_type=INDEX_MEDIA_TYPE)
    if decision.route == router.STATUS:
        return await handle_status(request, logger)
    if decision.route == router.PROXY:
        return await handle_forward(request, path, decision.remainder or "", logger)
    if decision.route == router.PREFLIGHT:
        return Response(status_code=200, headers=CORS_HEADERS)
    return PlainTextResponse("Not Found", status_code=404)


async def handle_status(request: Request, logger: RequestLogger) -> JSONResponse:
    """Probe the health-check endpoint and report latency."""
    payload = await request.app.state.status_probe.check(logger)
    return JSONResponse(payload, headers={"Access-Control-Allow-Origin": "*"})


async def handle_forward(
    request: Request,
    path: str,
    remainder: str,
    logger: RequestLogger,
) -> Response:
    """Relay the request upstream with the proxy prefix stripped."""
    routing_service = request.app.state.routing_service
    prepared = routing_service.prepare_forward(
        request.method,
        path,
        remainder,
        request.url.query,
        [(k.decode("latin-1"), v.decode("latin-1")) for k, v in request.headers.raw],
    )
    upstream = request.app.state.upstream_client
    return await upstream.forward(prepared, request.stream(), logger)
