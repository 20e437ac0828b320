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

"""Shared fixtures: sample records, an isolated draft store, and the HTTP
test infrastructure for MCP transport tests.

mcp_session yields an initialized TestClient plus session headers,
call_tool builds JSON-RPC tools/call requests, and parse_tool_result
extracts tool results from SSE responses.
"""

import json
from datetime import date, datetime, timezone

import pytest
from starlette.testclient import TestClient

from willwisher.http_transport import build_http_app
from willwisher.mcp_app import mcp
from willwisher.models import (
    ResiduaryShare,
    TrustAsset,
    TrustBeneficiary,
    TrustRecord,
    WillRecord,
)

import willwisher.tools_drafts  # noqa: F401 -- trigger tool registration
import willwisher.tools_export  # noqa: F401

FIXED_NOW = datetime(2025, 1, 5, 10, 30, 0, tzinfo=timezone.utc)

INIT_BODY = {
    "jsonrpc": "2.0",
    "method": "initialize",
    "id": 1,
    "params": {
        "protocolVersion": "2025-03-26",
        "capabilities": {},
        "clientInfo": {"name": "test", "version": "1.0"},
    },
}

MCP_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/event-stream",
}


# ── Records ────────────────────────────────────────────────────────────────────


@pytest.fixture
def jane_doe_will() -> WillRecord:
    """Testator, one residuary beneficiary and two witnesses; all else blank."""
    return WillRecord(
        testator_name="Jane Doe",
        residuary_beneficiaries=[
            ResiduaryShare(beneficiary="John Doe", relation="son", percentage=100)
        ],
        witnesses=["A", "B"],
    )


@pytest.fixture
def doe_trust() -> TrustRecord:
    """Two beneficiaries at 60/40 and a single trust asset."""
    return TrustRecord(
        trustor_name="Jane Doe",
        trust_name="Doe Family Trust",
        trustee_name="Jane Doe",
        successor_trustee_name="Richard Roe",
        trust_assets=[
            TrustAsset(asset_type="Real Estate", description="123 Main St, Fresno")
        ],
        beneficiaries=[
            TrustBeneficiary(name="John Doe", percentage=60),
            TrustBeneficiary(name="Mary Doe", percentage=40),
        ],
        distribution_terms="Outright, free of trust.",
        execution_date=date(2025, 1, 5),
    )


# ── Draft store isolation ──────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def drafts_dir(tmp_path, monkeypatch):
    """Point the draft store at a per-test directory."""
    root = tmp_path / "drafts"
    monkeypatch.setenv("WILLWISHER_DRAFTS_DIR", str(root))
    return root


# ── HTTP transport ─────────────────────────────────────────────────────────────


def _fresh_app():
    """Build a Starlette app with a fresh session manager and JSON-RPC error handler."""
    mcp._session_manager = None
    return build_http_app()


@pytest.fixture(autouse=True)
def _reset_session_manager():
    """Reset session manager after every test so the next one gets a fresh one."""
    yield
    mcp._session_manager = None


@pytest.fixture()
def mcp_session():
    """TestClient with lifespan, correct Host, and completed init handshake.

    Yields (client, session_headers) where session_headers includes
    Content-Type, Accept, and Mcp-Session-Id for subsequent requests.
    """
    app = _fresh_app()
    with TestClient(
        app,
        raise_server_exceptions=False,
        headers={"Host": "localhost:8000"},
    ) as client:
        resp = client.post("/mcp", json=INIT_BODY, headers=MCP_HEADERS)
        assert resp.status_code == 200
        session_id = resp.headers.get("mcp-session-id")

        notif = {
            "jsonrpc": "2.0",
            "method": "notifications/initialized",
        }
        notif_headers = {**MCP_HEADERS, "Mcp-Session-Id": session_id}
        client.post("/mcp", json=notif, headers=notif_headers)

        session_headers = {**MCP_HEADERS, "Mcp-Session-Id": session_id}
        yield client, session_headers


def call_tool(client, headers, tool_name, arguments, request_id=99):
    """Send a JSON-RPC tools/call request and return the raw response."""
    body = {
        "jsonrpc": "2.0",
        "method": "tools/call",
        "id": request_id,
        "params": {"name": tool_name, "arguments": arguments},
    }
    return client.post("/mcp", json=body, headers=headers)


def _sse_results(response):
    for line in response.text.splitlines():
        if not line.startswith("data:"):
            continue
        payload = line[len("data:"):].strip()
        if not payload:
            continue
        try:
            msg = json.loads(payload)
        except json.JSONDecodeError:
            continue
        if "result" in msg:
            yield msg["result"]


def parse_tool_result(response) -> dict:
    """Extract the tool result dict from an SSE response.

    Finds the data line containing a JSON-RPC result, extracts
    result.content[0].text, and parses that as JSON.

    Raises ValueError if no result is found in the response.
    """
    for result in _sse_results(response):
        content = result.get("content", [])
        if content:
            return json.loads(content[0].get("text", ""))

    raise ValueError(
        f"No tool result found in SSE response: {response.text[:500]}"
    )


def parse_tool_error(response) -> str:
    """Return the error text of an isError tool result."""
    for result in _sse_results(response):
        if result.get("isError"):
            return result["content"][0]["text"]

    raise ValueError(
        f"No tool error found in SSE response: {response.text[:500]}"
    )
