# Copyright (C) 2025 the contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Streamable-HTTP runner for the Will Wisher MCP server.

``start_http()`` refuses to start on a busy port, logs where it serves and
where drafts are kept, and shuts uvicorn down within a bounded time.
HTTP-level failures (unknown path, wrong method) answer with a JSON-RPC
error body so MCP clients parse them like any other error.
"""

import errno
import logging
import socket
import sys

import anyio
import uvicorn
from mcp.types import INVALID_REQUEST
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from willwisher.drafts import default_store
from willwisher.mcp_app import mcp
from willwisher.models import JsonRpcError, JsonRpcErrorResponse

logger = logging.getLogger(__name__)

GRACEFUL_SHUTDOWN_TIMEOUT = 5  # seconds


def port_in_use(host: str, port: int) -> bool:
    """True when *host*:*port* cannot be bound because something holds it.

    Any bind failure other than ``EADDRINUSE`` is re-raised.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError as exc:
            if exc.errno == errno.EADDRINUSE:
                return True
            raise
    return False


def json_rpc_error_response(
    status_code: int, message: str, path: str = ""
) -> JSONResponse:
    """Wrap an HTTP failure in a JSON-RPC error that points at the MCP endpoint."""
    body = JsonRpcErrorResponse(
        error=JsonRpcError(
            code=INVALID_REQUEST,
            message=message,
            data={"path": path, "endpoint": mcp.settings.streamable_http_path},
        )
    )
    return JSONResponse(body.model_dump(), status_code=status_code)


async def _http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.debug("%s %s -> %d", request.method, request.url.path, exc.status_code)
    return json_rpc_error_response(exc.status_code, exc.detail, request.url.path)


def build_http_app() -> Starlette:
    """The FastMCP Starlette app, with HTTP errors answered as JSON-RPC."""
    app = mcp.streamable_http_app()
    app.exception_handlers[HTTPException] = _http_error_handler
    return app


def http_config(host: str, port: int, log_level: str = "WARNING") -> uvicorn.Config:
    return uvicorn.Config(
        build_http_app(),
        host=host,
        port=port,
        log_level=log_level.lower(),
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_TIMEOUT,
    )


async def _serve(config: uvicorn.Config) -> None:
    await uvicorn.Server(config).serve()


def start_http(host: str, port: int, log_level: str = "WARNING") -> None:
    """Serve MCP over HTTP until interrupted.

    Prints a hint and exits with status 1 if the port is already taken.
    """
    if port_in_use(host, port):
        print(
            f"Error: Port {port} is already in use. Try: --port {port + 1}",
            file=sys.stderr,
        )
        sys.exit(1)
    config = http_config(host, port, log_level)
    logger.info(
        "Serving MCP at http://%s:%d%s",
        host, port, mcp.settings.streamable_http_path,
    )
    logger.info("Drafts are stored in %s", default_store().root)
    anyio.run(_serve, config)
