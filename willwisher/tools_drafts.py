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

"""MCP tools for the draft store: save, get, list, delete."""

from __future__ import annotations

from willwisher.drafts import DraftNotFoundError, default_store
from willwisher.mcp_app import mcp
from willwisher.models import Draft
from willwisher.tool_errors import (
    USAGE,
    validate_kind_for_tool,
    validate_record,
)
from willwisher.validators import validate_draft_id


def _checked_draft_id(tool_name: str, draft_id: str) -> str:
    try:
        return validate_draft_id(draft_id)
    except ValueError as exc:
        raise ValueError(
            f"{tool_name} error: {exc}\n"
            f"  Example: {USAGE[tool_name]}"
        ) from exc


@mcp.tool()
def save_draft(
    kind: str,
    draft_id: str,
    record: dict | None = None,
    title: str = "",
) -> dict:
    """Save (or overwrite) a will or trust draft under draft_id.

    kind: 'will' or 'trust'.
    record: the partial or complete record; validated before saving.
    title: optional display title for list_drafts.

    Returns the stored draft summary, including last_modified.
    """
    doc_kind = validate_kind_for_tool("save_draft", kind)
    draft_id = _checked_draft_id("save_draft", draft_id)
    parsed = validate_record("save_draft", doc_kind, record)
    stored = default_store().save(
        Draft(
            draft_id=draft_id,
            kind=doc_kind,
            title=title,
            record=parsed.model_dump(mode="json"),
            completion_percentage=parsed.completion_percentage,
        )
    )
    return stored.model_dump(mode="json", exclude={"record"})


@mcp.tool()
def get_draft(draft_id: str) -> dict:
    """Return a saved draft, record included."""
    draft_id = _checked_draft_id("get_draft", draft_id)
    try:
        draft = default_store().get(draft_id)
    except DraftNotFoundError as exc:
        raise ValueError(
            f"get_draft error: {exc}. Use list_drafts to see saved ids."
        ) from exc
    return draft.model_dump(mode="json")


@mcp.tool()
def list_drafts(kind: str = "") -> dict:
    """List saved drafts, most recently modified first.

    kind: 'will' or 'trust' to filter; empty lists both.
    """
    doc_kind = validate_kind_for_tool("list_drafts", kind) if kind else None
    summaries = default_store().list(doc_kind)
    return {"drafts": [s.model_dump(mode="json") for s in summaries]}


@mcp.tool()
def delete_draft(draft_id: str) -> dict:
    """Delete a saved draft. Returns {deleted: draft_id}."""
    draft_id = _checked_draft_id("delete_draft", draft_id)
    try:
        default_store().delete(draft_id)
    except DraftNotFoundError as exc:
        raise ValueError(
            f"delete_draft error: {exc}. Use list_drafts to see saved ids."
        ) from exc
    return {"deleted": draft_id}
