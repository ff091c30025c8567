"""
server.py — Low-level MCP server for the ticketing portal
=========================================================
What this file does:
  1. Creates a low-level mcp Server whose lifespan hands out the PortalStore
  2. Registers two handlers: list_tools and call_tool
  3. Wraps the server in a StreamableHTTPSessionManager
  4. Mounts it on a Starlette app at /mcp, next to a /health endpoint
  5. Serves with uvicorn (see __main__.py)

The tools themselves live in tools/; this file only wires them up.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from ticket_portal import config
from ticket_portal.store import PortalStore
from ticket_portal.tools import tools

logger = logging.getLogger(__name__)


def build_server(store: PortalStore) -> Server:
    """
    Build an MCP server bound to one store.

    The lifespan runs once per client session and always yields the same
    store, so every session sees and mutates the same tickets and topics.
    """

    @asynccontextmanager
    async def server_lifespan(server: Server) -> AsyncIterator[dict]:
        logger.debug("MCP session opened")
        try:
            yield {"store": store}
        finally:
            logger.debug("MCP session closed")

    server = Server(config.SERVER_NAME, lifespan=server_lifespan)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        """Return all tools from the registry to any connecting client."""
        return [entry["tool"] for entry in tools.values()]

    @server.call_tool()
    async def handle_call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        """Dispatch an incoming tool call to the correct handler."""
        if name not in tools:
            raise ValueError(f"Unknown tool: {name}")
        session_store = server.request_context.lifespan_context["store"]
        handler = tools[name]["handler"]
        return await handler(session_store, arguments)

    return server


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(store: Optional[PortalStore] = None) -> Starlette:
    """Starlette app serving the MCP endpoint at /mcp. A fresh store is created if none is given."""
    store = store or PortalStore()
    session_manager = StreamableHTTPSessionManager(build_server(store))

    @asynccontextmanager
    async def app_lifespan(app: Starlette):
        logger.info("Ticket portal starting...")
        async with session_manager.run():
            logger.info("Serving MCP on %s", config.SERVER_URL)
            yield
        logger.info("Ticket portal shut down.")

    return Starlette(
        routes=[
            Route("/health", endpoint=health, methods=["GET"]),
            Mount("/mcp", app=session_manager.handle_request),
        ],
        lifespan=app_lifespan,
    )
