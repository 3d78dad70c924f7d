"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.handlers import handle_request
from core.config import Config
from core.exceptions import ProbeError, ProxyError, describe
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.router import RouteDecider
from core.transform import RequestTransformer
from services.probe import StatusProbe
from services.routing_service import RoutingService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=config.upstream.timeout,
            limits=limits,
            follow_redirects=False,
            transport=transport,
        )
        header_builder = HeaderBuilder()
        app.state.route_decider = RouteDecider(config.upstream.prefix)
        app.state.routing_service = RoutingService(
            transformer=RequestTransformer(config.upstream),
            header_builder=header_builder,
        )
        app.state.upstream_client = UpstreamClient(
            client, header_builder, timeout=config.upstream.timeout
        )
        app.state.status_probe = StatusProbe(client, config.probe)
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Where? Relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
        route = "status" if isinstance(exc, ProbeError) else "proxy"
        logger.log_error(route, exc.status_code, describe(exc))
        return JSONResponse(
            exc.payload(),
            status_code=exc.status_code,
            headers={"Access-Control-Allow-Origin": "*"},
        )

    async def dispatch(request: Request):
        try:
            return await handle_request(request, logger)
        except ProxyError:
            raise
        except Exception as e:
            raise ProxyError(describe(e)) from e

    # Starlette route without a method list, so every method is dispatched
    app.add_route("/{path:path}", dispatch, include_in_schema=False)

    return app
